# mail_augment/application/use_cases/augment_emails_use_case.py
import asyncio
import structlog
from typing import List, Optional, Sequence

from mail_augment.application.ports.embedding_model_port import EmbeddingError
from mail_augment.application.services.embedding_client import EmbeddingClient
from mail_augment.application.services.summary_generator import SummaryGenerator
from mail_augment.domain.models import AugmentedEmail, EmailText, EmbeddingResult

log = structlog.get_logger(__name__)

class AugmentEmailsUseCase:
    """
    Use case for producing a summary and an embedding for each email of a batch.
    """
    def __init__(self, embedding_client: EmbeddingClient, summary_generator: SummaryGenerator):
        self.embedding_client = embedding_client
        self.summary_generator = summary_generator
        log.info("AugmentEmailsUseCase initialized", embedding_model=embedding_client.model_name)

    async def execute(self, items: Sequence[EmailText]) -> List[AugmentedEmail]:
        """
        Runs the summary fan-out and the embedding batch concurrently.

        Results are positional. Summaries always succeed; if the embedding
        batch fails, every result carries `embedding=None`.
        """
        if not items:
            log.warning("AugmentEmailsUseCase executed with no emails.")
            return []

        use_case_log = log.bind(num_items=len(items))
        use_case_log.info("Executing email augmentation")

        summaries, embeddings = await asyncio.gather(
            self.summary_generator.summarize_batch_with_source(items),
            self._embed_or_none(items),
        )

        if embeddings is None:
            embeddings = [None] * len(items)

        results = [
            AugmentedEmail(summary=summary.text, summary_source=summary.source, embedding=embedding)
            for summary, embedding in zip(summaries, embeddings)
        ]
        use_case_log.info("Email augmentation completed", embedded=embeddings[0] is not None)
        return results

    async def _embed_or_none(self, items: Sequence[EmailText]) -> Optional[List[EmbeddingResult]]:
        try:
            return await self.embedding_client.embed_batch(items)
        except EmbeddingError as e:
            log.error("Embedding batch failed; emails returned without embeddings", error=str(e), num_items=len(items))
            return None
