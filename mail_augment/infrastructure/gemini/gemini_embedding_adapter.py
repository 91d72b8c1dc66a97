# File: mail_augment/infrastructure/gemini/gemini_embedding_adapter.py
import structlog
from typing import List, Tuple, Dict, Any, Optional
import httpx

from mail_augment.application.ports.embedding_model_port import EmbeddingModelPort, EmbeddingError
from mail_augment.core.metrics import GEMINI_API_DURATION_SECONDS, GEMINI_API_ERRORS_TOTAL
from mail_augment.infrastructure.gemini.base_client import GeminiBaseClient

log = structlog.get_logger(__name__)

class GeminiEmbeddingAdapter(GeminiBaseClient, EmbeddingModelPort):
    """
    Adapter for Gemini's embedContent / batchEmbedContents endpoints.
    """

    def __init__(
        self,
        api_key: str,
        model_name: str,
        embedding_dimension: int,
        base_url: str,
        timeout_seconds: float,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(
            api_key=api_key,
            base_url=base_url,
            timeout_seconds=timeout_seconds,
            service_name="GeminiEmbeddings",
            http_client=http_client,
        )
        self._api_key_configured = bool(api_key)
        self._model_name = model_name
        self._embedding_dimension = embedding_dimension
        log.info("GeminiEmbeddingAdapter initialized", model_name=self._model_name, target_dimension=self._embedding_dimension)

    @property
    def _model_path(self) -> str:
        return f"models/{self._model_name}"

    async def embed_content(self, text: str) -> List[float]:
        payload = {
            "model": self._model_path,
            "content": {"parts": [{"text": text}]},
        }
        data = await self._call("embedContent", payload)
        embedding = data.get("embedding") if isinstance(data, dict) else None
        return self._extract_values(embedding)

    async def batch_embed_contents(self, texts: List[str]) -> List[List[float]]:
        if not texts:
            return []

        payload = {
            "requests": [
                {
                    "model": self._model_path,
                    "content": {"parts": [{"text": text}], "role": "user"},
                }
                for text in texts
            ]
        }
        data = await self._call("batchEmbedContents", payload)
        embeddings = data.get("embeddings") if isinstance(data, dict) else None
        if not isinstance(embeddings, list):
            raise EmbeddingError("Gemini API returned no embeddings list.")
        return [self._extract_values(embedding) for embedding in embeddings]

    async def _call(self, operation: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        if not self._api_key_configured:
            raise EmbeddingError("Gemini API key is not configured.")

        call_log = log.bind(adapter="GeminiEmbeddingAdapter", operation=operation, model=self._model_name)
        call_log.debug("Generating embeddings via Gemini API...")
        try:
            with GEMINI_API_DURATION_SECONDS.labels(model_name=self._model_name, operation=operation).time():
                return await self._post(f"/{self._model_path}:{operation}", json=payload)
        except httpx.HTTPStatusError as e:
            GEMINI_API_ERRORS_TOTAL.labels(model_name=self._model_name, operation=operation, error_type=f"http_{e.response.status_code}").inc()
            raise EmbeddingError(f"Gemini API returned HTTP {e.response.status_code}") from e
        except httpx.RequestError as e:
            GEMINI_API_ERRORS_TOTAL.labels(model_name=self._model_name, operation=operation, error_type="connection_error").inc()
            raise EmbeddingError(f"Gemini API request failed: {type(e).__name__}") from e
        except Exception as e:
            call_log.exception("Unexpected error during Gemini embedding call")
            GEMINI_API_ERRORS_TOTAL.labels(model_name=self._model_name, operation=operation, error_type="unexpected_error").inc()
            raise EmbeddingError(f"Embedding generation failed with unexpected error: {e}") from e

    def _extract_values(self, embedding: Any) -> List[float]:
        values = embedding.get("values") if isinstance(embedding, dict) else None
        if not isinstance(values, list) or not values:
            raise EmbeddingError("Gemini API returned an embedding without values.")
        try:
            return [float(value) for value in values]
        except (TypeError, ValueError) as e:
            raise EmbeddingError("Gemini API returned non-numeric embedding values.") from e

    def get_model_info(self) -> Dict[str, Any]:
        return {"model_name": self._model_name, "dimension": self._embedding_dimension, "provider": "gemini"}

    async def health_check(self) -> Tuple[bool, str]:
        if self._api_key_configured:
            return True, f"Gemini embedding client configured for model {self._model_name}."
        return False, "Gemini API key is not configured; embeddings are unavailable."
