"""LLM-backed document analyzer."""

import json
from pathlib import Path
from typing import Any

from docsummary.analysis.base import BaseAnalyzer
from docsummary.analysis.client_base import BaseAnalysisClient
from docsummary.analysis.exceptions import AnalysisError
from docsummary.analysis.json_locator import find_json_object
from docsummary.analysis.models import AnalysisResult
from docsummary.analysis.prompt_loader import load_system_prompt, load_user_prompt_template
from docsummary.analysis.validator import validate_and_build
from docsummary.logging.logger import Log


class Analyzer(BaseAnalyzer):
    """Summarizes extracted text into an AnalysisResult using an AI provider."""

    def __init__(
        self,
        *,
        client: BaseAnalysisClient,
        model: str,
        system_prompt_path: Path | None = None,
        user_prompt_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._system_prompt = load_system_prompt(system_prompt_path)
        self._user_prompt_template = load_user_prompt_template(user_prompt_path)

    def analyze(self, text: str) -> AnalysisResult:
        user_prompt = self._user_prompt_template.format(document_text=text)
        raw_response = self._client.create_chat_completion(
            model=self._model,
            system_prompt=self._system_prompt,
            user_prompt=user_prompt,
        )
        Log.debug(f"AI raw response:\n{raw_response}")

        result = validate_and_build(self._parse_json(raw_response))
        Log.info("Analysis complete", document_type=result.document_type)
        return result

    @staticmethod
    def _parse_json(raw: str) -> Any:
        candidate = find_json_object(raw)
        if candidate is None:
            raise AnalysisError("LLM response contains no JSON object")
        try:
            return json.loads(candidate)
        except json.JSONDecodeError as exc:
            raise AnalysisError(f"Invalid JSON response: {exc}") from exc
