"""Text-generation HTTP client (Gemini generateContent API)"""

import httpx

from stress_advisor.config import settings
from stress_advisor.domain.exceptions import ExplanationServiceError
from stress_advisor.infrastructure.observability.metrics import text_service_latency_histogram


class GeminiClient:
    """Client for the external text-generation service"""

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        temperature: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url or settings.gemini_api_base
        self.model = model or settings.gemini_model
        self.timeout = settings.http_timeout_seconds if timeout is None else timeout
        self.temperature = settings.gemini_temperature if temperature is None else temperature
        self.transport = transport

    async def generate_text(self, prompt: str) -> str:
        """
        Send one prompt and return the first candidate's text.

        Single attempt, no retries: callers degrade to a local answer instead.

        Raises:
            ExplanationServiceError: On timeout, network/HTTP errors, or an unreadable envelope
        """
        url = f"{self.base_url}/models/{self.model}:generateContent"
        body = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": self.temperature},
        }

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with text_service_latency_histogram.time():
                    response = await client.post(url, params={"key": self.api_key}, json=body)
                    response.raise_for_status()
                data = response.json()
                text = data["candidates"][0]["content"]["parts"][0].get("text", "")

            except httpx.TimeoutException as e:
                raise ExplanationServiceError(f"Text service timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise ExplanationServiceError(f"Text service error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise ExplanationServiceError(f"Text service unreachable: {e.__class__.__name__}") from e
            except (KeyError, IndexError, ValueError, TypeError, AttributeError) as e:
                raise ExplanationServiceError(f"Invalid response envelope from text service: {e}") from e

        if not isinstance(text, str):
            raise ExplanationServiceError("Text service returned non-text content")
        return text
