import httpx
import openai

from docsummary.analysis.client_base import BaseAnalysisClient
from docsummary.analysis.exceptions import AnalysisError, AnalysisNetworkError
from docsummary.config.exceptions import ConfigurationError


class OpenAIClientAdapter(BaseAnalysisClient):
    """Analysis client built on the OpenAI-compatible chat completions API.

    The SDK client is only built when an API key is present, so a missing
    key surfaces as ConfigurationError on first use, before any request.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client: openai.OpenAI | None = None
        if api_key:
            self._client = openai.OpenAI(
                api_key=api_key,
                timeout=timeout_seconds,
                base_url=base_url,
            )

    def create_chat_completion(
        self,
        *,
        model: str,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        if self._client is None:
            raise ConfigurationError("ANALYSIS_API_KEY is not configured")
        try:
            response = self._client.chat.completions.create(
                model=model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise AnalysisNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise AnalysisNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise AnalysisError("AI returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise AnalysisError("AI returned empty response")
        return content
