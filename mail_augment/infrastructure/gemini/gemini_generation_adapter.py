# File: mail_augment/infrastructure/gemini/gemini_generation_adapter.py
import structlog
from typing import List, Tuple, Any, Optional
import httpx

from mail_augment.application.ports.text_generation_port import TextGenerationPort, TextGenerationError
from mail_augment.core.metrics import GEMINI_API_DURATION_SECONDS, GEMINI_API_ERRORS_TOTAL
from mail_augment.infrastructure.gemini.base_client import GeminiBaseClient

log = structlog.get_logger(__name__)

class GeminiGenerationAdapter(GeminiBaseClient, TextGenerationPort):
    """
    Adapter for Gemini's generateContent endpoint.
    """

    def __init__(
        self,
        api_key: str,
        model_name: str,
        base_url: str,
        timeout_seconds: float,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(
            api_key=api_key,
            base_url=base_url,
            timeout_seconds=timeout_seconds,
            service_name="GeminiGeneration",
            http_client=http_client,
        )
        self._model_name = model_name
        log.info("GeminiGenerationAdapter initialized", model_name=self._model_name)

    async def generate(self, prompt: str, temperature: float, max_output_tokens: int) -> List[str]:
        operation = "generateContent"
        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": temperature,
                "maxOutputTokens": max_output_tokens,
            },
        }
        gen_log = log.bind(adapter="GeminiGenerationAdapter", model=self._model_name, prompt_chars=len(prompt))
        gen_log.debug("Requesting completion from Gemini API...")

        try:
            with GEMINI_API_DURATION_SECONDS.labels(model_name=self._model_name, operation=operation).time():
                data = await self._post(f"/models/{self._model_name}:{operation}", json=payload)
        except httpx.HTTPStatusError as e:
            GEMINI_API_ERRORS_TOTAL.labels(model_name=self._model_name, operation=operation, error_type=f"http_{e.response.status_code}").inc()
            raise TextGenerationError(f"Gemini API returned HTTP {e.response.status_code}") from e
        except httpx.RequestError as e:
            GEMINI_API_ERRORS_TOTAL.labels(model_name=self._model_name, operation=operation, error_type="connection_error").inc()
            raise TextGenerationError(f"Gemini API request failed: {type(e).__name__}") from e
        except Exception as e:
            gen_log.error("Unexpected error during Gemini generation call", error=str(e))
            GEMINI_API_ERRORS_TOTAL.labels(model_name=self._model_name, operation=operation, error_type="unexpected_error").inc()
            raise TextGenerationError(f"Text generation failed with unexpected error: {e}") from e

        candidates = data.get("candidates") if isinstance(data, dict) else None
        if not isinstance(candidates, list):
            gen_log.warning("Gemini response carried no candidates", finish_feedback=data.get("promptFeedback") if isinstance(data, dict) else None)
            return []
        return [self._candidate_text(candidate) for candidate in candidates]

    @staticmethod
    def _candidate_text(candidate: Any) -> str:
        try:
            text = candidate["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            return ""
        return text if isinstance(text, str) else ""

    async def health_check(self) -> Tuple[bool, str]:
        return True, f"Gemini generation client configured for model {self._model_name}."
