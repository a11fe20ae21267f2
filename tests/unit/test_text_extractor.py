from unittest.mock import MagicMock

import pytest

from docsummary.extraction.exceptions import ExtractionError, FormatExtractionError
from docsummary.extraction.extractor import (
    DOCX_MIME_TYPE,
    PDF_MIME_TYPE,
    TextExtractor,
    decode_utf8,
)


class TestDecodeUtf8:
    def test_decodes_plain_text(self) -> None:
        assert decode_utf8("héllo".encode()) == "héllo"

    def test_replaces_invalid_sequences(self) -> None:
        assert decode_utf8(b"ok\xff") == "ok\ufffd"

    def test_drops_nul_characters(self) -> None:
        assert decode_utf8(b"a\x00b") == "ab"

    def test_rejects_non_bytes(self) -> None:
        with pytest.raises(ExtractionError):
            decode_utf8(None)  # type: ignore[arg-type]


class TestTextExtractorDispatch:
    def test_pdf_goes_to_pdf_adapter(
        self, text_extractor: TextExtractor, sample_pdf_bytes: bytes
    ) -> None:
        assert "Hello PDF World" in text_extractor.extract(sample_pdf_bytes, PDF_MIME_TYPE)

    def test_docx_goes_to_docx_adapter(
        self, text_extractor: TextExtractor, sample_docx_bytes: bytes
    ) -> None:
        assert "Quarterly report" in text_extractor.extract(sample_docx_bytes, DOCX_MIME_TYPE)

    def test_dispatch_uses_declared_type_only(self) -> None:
        pdf_adapter = MagicMock()
        pdf_adapter.extract.return_value = "from pdf"
        extractor = TextExtractor({PDF_MIME_TYPE: pdf_adapter})

        result = extractor.extract(b"%PDF-1.4 but declared as text", "text/plain")

        assert result == "%PDF-1.4 but declared as text"
        pdf_adapter.extract.assert_not_called()

    def test_adapter_output_has_nul_characters_removed(self) -> None:
        pdf_adapter = MagicMock()
        pdf_adapter.extract.return_value = "Invoice\x00 total"
        extractor = TextExtractor({PDF_MIME_TYPE: pdf_adapter})

        assert extractor.extract(b"%PDF-1.4", PDF_MIME_TYPE) == "Invoice total"

    def test_supported_mime_types(self, text_extractor: TextExtractor) -> None:
        assert text_extractor.supported_mime_types == frozenset({PDF_MIME_TYPE, DOCX_MIME_TYPE})


class TestTextExtractorFallback:
    def test_library_failure_falls_back_to_utf8(self, text_extractor: TextExtractor) -> None:
        assert text_extractor.extract(b"0123456789", PDF_MIME_TYPE) == "0123456789"

    def test_broken_docx_falls_back_to_utf8(self, text_extractor: TextExtractor) -> None:
        assert text_extractor.extract(b"plain words", DOCX_MIME_TYPE) == "plain words"

    def test_adapter_error_is_not_propagated(self) -> None:
        adapter = MagicMock()
        adapter.extract.side_effect = FormatExtractionError("boom")
        extractor = TextExtractor({PDF_MIME_TYPE: adapter})

        assert extractor.extract(b"raw", PDF_MIME_TYPE) == "raw"

    def test_unexpected_adapter_error_propagates(self) -> None:
        adapter = MagicMock()
        adapter.extract.side_effect = RuntimeError("bug")
        extractor = TextExtractor({PDF_MIME_TYPE: adapter})

        with pytest.raises(RuntimeError):
            extractor.extract(b"raw", PDF_MIME_TYPE)

    def test_fallback_failure_raises_extraction_error(self) -> None:
        adapter = MagicMock()
        adapter.extract.side_effect = FormatExtractionError("boom")
        extractor = TextExtractor({PDF_MIME_TYPE: adapter})

        with pytest.raises(ExtractionError):
            extractor.extract(None, PDF_MIME_TYPE)  # type: ignore[arg-type]
