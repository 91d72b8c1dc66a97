# mail_augment/application/services/embedding_client.py
import structlog
from typing import List, Sequence

from mail_augment.application.ports.embedding_model_port import EmbeddingModelPort, EmbeddingError
from mail_augment.core.metrics import TEXTS_EMBEDDED_TOTAL
from mail_augment.domain.models import EmailText, EmbeddingResult
from mail_augment.domain.text_normalizer import TextNormalizer

log = structlog.get_logger(__name__)

class EmbeddingClient:
    """
    Produces embeddings for emails and search queries.

    Every operation either returns a vector or raises EmbeddingError; there is
    no local substitute for a semantic vector.
    """
    def __init__(
        self,
        embedding_model: EmbeddingModelPort,
        normalizer: TextNormalizer,
        model_name: str,
        expected_dimension: int,
    ):
        self.embedding_model = embedding_model
        self.normalizer = normalizer
        self._model_name = model_name
        self._expected_dimension = expected_dimension
        self.log = log.bind(component="EmbeddingClient", model=model_name)

    @property
    def model_name(self) -> str:
        return self._model_name

    @property
    def expected_dimension(self) -> int:
        return self._expected_dimension

    async def embed_document(self, subject: str, body: str) -> List[float]:
        text = self.normalizer.format_for_embedding(subject, body)
        return await self._embed_one(text, kind="document")

    async def embed_query(self, query: str) -> List[float]:
        # Queries are short: no subject framing, no truncation
        return await self._embed_one(query, kind="query")

    async def embed_batch(self, items: Sequence[EmailText]) -> List[EmbeddingResult]:
        """
        Embeds several emails with a single remote call.

        Results map 1:1 by position to `items`. The whole batch fails with
        EmbeddingError if the call fails or returns the wrong number of
        vectors.
        """
        if not items:
            return []

        batch_log = self.log.bind(num_items=len(items))
        texts = [self.normalizer.format_for_embedding(item.subject, item.body) for item in items]
        TEXTS_EMBEDDED_TOTAL.labels(kind="batch").inc(len(texts))

        try:
            vectors = await self.embedding_model.batch_embed_contents(texts)
        except EmbeddingError:
            batch_log.error("Batch embedding failed")
            raise
        except Exception as e:
            batch_log.exception("Unexpected error during batch embedding")
            raise EmbeddingError(f"Failed to generate batch embeddings: {e}") from e

        if len(vectors) != len(texts):
            batch_log.error("Mismatch in embedding results count.", expected=len(texts), got=len(vectors))
            raise EmbeddingError(
                f"Embedding model returned {len(vectors)} vectors for {len(texts)} texts."
            )

        results = []
        for vector in vectors:
            self._check_dimension(vector)
            results.append(EmbeddingResult(embedding=vector, model=self._model_name, dimension=len(vector)))

        batch_log.info("Batch embeddings generated", num_embeddings=len(results))
        return results

    async def _embed_one(self, text: str, kind: str) -> List[float]:
        TEXTS_EMBEDDED_TOTAL.labels(kind=kind).inc()
        try:
            vector = await self.embedding_model.embed_content(text)
        except EmbeddingError:
            self.log.error(f"Failed to generate {kind} embedding")
            raise
        except Exception as e:
            self.log.exception(f"Unexpected error generating {kind} embedding")
            raise EmbeddingError(f"Failed to generate {kind} embedding: {e}") from e

        self._check_dimension(vector)
        return vector

    def _check_dimension(self, vector: List[float]) -> None:
        # Logged only; callers that need a fixed length check `dimension`
        if len(vector) != self._expected_dimension:
            self.log.warning(
                "Embedding dimension differs from expected",
                expected_dimension=self._expected_dimension,
                actual_dimension=len(vector),
            )
