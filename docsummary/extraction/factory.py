from docsummary.config.settings import Settings
from docsummary.extraction.base import BaseFormatExtractor
from docsummary.extraction.docx_adapter import DocxAdapter
from docsummary.extraction.extractor import DOCX_MIME_TYPE, PDF_MIME_TYPE, TextExtractor
from docsummary.extraction.pdfplumber_adapter import PdfPlumberAdapter
from docsummary.extraction.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Creates the correct PDF extractor based on settings."""

    ADAPTERS: dict[str, type[BaseFormatExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseFormatExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()


class TextExtractorFactory:
    """Wires the MIME dispatch table for the text extractor."""

    @classmethod
    def create(cls, settings: Settings) -> TextExtractor:
        return TextExtractor(
            {
                PDF_MIME_TYPE: PdfExtractorFactory.create(settings),
                DOCX_MIME_TYPE: DocxAdapter(),
            }
        )
