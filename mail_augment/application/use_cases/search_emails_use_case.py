# mail_augment/application/use_cases/search_emails_use_case.py
import structlog
from typing import List, Optional, Sequence, Tuple

from mail_augment.application.services.embedding_client import EmbeddingClient
from mail_augment.domain.models import RankedCandidate
from mail_augment.domain.similarity import rank

log = structlog.get_logger(__name__)

class SearchEmailsUseCase:
    """
    Ranks stored email vectors against a free-text query.

    Raises:
        EmbeddingError: If the query cannot be embedded.
        DimensionMismatchError: If a stored vector does not match the query vector.
    """
    def __init__(self, embedding_client: EmbeddingClient):
        self.embedding_client = embedding_client

    async def execute(
        self,
        query: str,
        candidates: Sequence[Tuple[str, Sequence[float]]],
        top_k: Optional[int] = None,
        min_score: Optional[float] = None,
    ) -> List[RankedCandidate]:
        search_log = log.bind(num_candidates=len(candidates), top_k=top_k, min_score=min_score)
        if not candidates:
            search_log.info("No candidates to rank, skipping query embedding")
            return []

        query_vector = await self.embedding_client.embed_query(query)
        ranked = rank(query_vector, candidates, top_k=top_k, min_score=min_score)
        search_log.info("Search ranking completed", num_results=len(ranked))
        return ranked
