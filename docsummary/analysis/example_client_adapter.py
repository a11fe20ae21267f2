"""Offline analysis client.

Returns a fixed, schema-valid answer wrapped in prose so the whole parsing
path is exercised without network access.
"""

import json
from typing import ClassVar

from docsummary.analysis.client_base import BaseAnalysisClient


class ExampleClientAdapter(BaseAnalysisClient):
    """Client that answers every request with the same analysis."""

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "summary": "Example summary generated without calling a language model.",
        "document_type": "other",
        "attributes": {},
    }

    def create_chat_completion(
        self,
        *,
        model: str,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        _ = model, system_prompt, user_prompt
        return f"Here is the analysis:\n{json.dumps(self.DEFAULT_RESPONSE)}"
