"""Tests for AnalyzerFactory."""

from unittest.mock import patch

import pytest

from docsummary.analysis.analyzer import Analyzer
from docsummary.analysis.base import BaseAnalyzer
from docsummary.analysis.factory import AnalyzerFactory
from docsummary.config.exceptions import ConfigurationError
from docsummary.config.settings import Settings


class TestAnalyzerFactory:
    def test_example_provider_works_offline(self) -> None:
        settings = Settings(_env_file=None, analysis_provider="example")
        analyzer = AnalyzerFactory.create(settings)
        assert isinstance(analyzer, BaseAnalyzer)
        assert isinstance(analyzer, Analyzer)
        result = analyzer.analyze("any text")
        assert result.document_type == "other"
        assert result.attributes == {}

    def test_defaults_to_openrouter(self) -> None:
        settings = Settings(
            _env_file=None,
            analysis_provider="openrouter",
            analysis_api_key="k",
        )
        with patch("docsummary.analysis.factory.OpenAIClientAdapter") as mock_adapter:
            analyzer = AnalyzerFactory.create(settings)
        assert isinstance(analyzer, Analyzer)
        mock_adapter.assert_called_once_with(
            api_key="k",
            timeout_seconds=30,
            base_url="https://openrouter.ai/api/v1",
        )

    def test_uses_openai_settings(self) -> None:
        settings = Settings(
            _env_file=None,
            analysis_provider="openai",
            analysis_api_key="openai-key",
            analysis_timeout_seconds=42,
        )
        with patch("docsummary.analysis.factory.OpenAIClientAdapter") as mock_adapter:
            AnalyzerFactory.create(settings)
        mock_adapter.assert_called_once_with(
            api_key="openai-key",
            timeout_seconds=42,
            base_url=None,
        )

    def test_base_url_override_wins_for_known_provider(self) -> None:
        settings = Settings(
            _env_file=None,
            analysis_provider="groq",
            analysis_api_key="k",
            analysis_base_url="https://proxy.example.com/v1",
        )
        with patch("docsummary.analysis.factory.OpenAIClientAdapter") as mock_adapter:
            AnalyzerFactory.create(settings)
        assert mock_adapter.call_args.kwargs["base_url"] == "https://proxy.example.com/v1"

    def test_uses_custom_base_url_for_openai_compatible(self) -> None:
        settings = Settings(
            _env_file=None,
            analysis_provider="openai_compatible",
            analysis_api_key="k",
            analysis_base_url="https://example.com/v1",
        )
        with patch("docsummary.analysis.factory.OpenAIClientAdapter") as mock_adapter:
            AnalyzerFactory.create(settings)
        assert mock_adapter.call_args.kwargs["base_url"] == "https://example.com/v1"

    def test_openai_compatible_requires_base_url(self) -> None:
        settings = Settings(
            _env_file=None,
            analysis_provider="openai_compatible",
            analysis_api_key="k",
            analysis_base_url="",
        )
        with pytest.raises(ConfigurationError, match="analysis_base_url"):
            AnalyzerFactory.create(settings)

    def test_unknown_provider_raises(self) -> None:
        settings = Settings(_env_file=None, analysis_provider="unknown")
        with pytest.raises(ConfigurationError, match="Unknown analysis provider"):
            AnalyzerFactory.create(settings)

    def test_missing_api_key_does_not_fail_creation(self) -> None:
        settings = Settings(_env_file=None, analysis_provider="openrouter", analysis_api_key="")
        assert isinstance(AnalyzerFactory.create(settings), Analyzer)
