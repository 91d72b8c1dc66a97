# mail_augment/application/services/summary_generator.py
import asyncio
import structlog
from typing import List, Optional, Sequence

from mail_augment.application.ports.text_generation_port import TextGenerationPort
from mail_augment.core.metrics import SUMMARIES_TOTAL
from mail_augment.domain.models import EmailText, SummaryResult, SummarySource
from mail_augment.domain.text_normalizer import TextNormalizer

log = structlog.get_logger(__name__)

SUMMARY_PROMPT_TEMPLATE = """You are an assistant that writes short summaries of emails. Summarize the email below in 2-3 sentences, covering its key points and any action items.

Subject: {subject}

Email Body:
{body}

Write the summary now."""

class SummaryGenerator:
    """
    Summarizes emails with a remote model, falling back to a local extractive
    summary whenever the model is missing, fails, or answers with nothing.

    No method of this class raises.
    """
    def __init__(
        self,
        normalizer: TextNormalizer,
        text_generator: Optional[TextGenerationPort] = None,
        temperature: float = 0.5,
        max_output_tokens: int = 150,
        batch_deadline_seconds: Optional[float] = None,
    ):
        self.normalizer = normalizer
        self.text_generator = text_generator
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self.batch_deadline_seconds = batch_deadline_seconds or None
        self.log = log.bind(component="SummaryGenerator", ai_enabled=text_generator is not None)

    async def summarize(self, body: str, subject: str) -> str:
        result = await self.summarize_with_source(body, subject)
        return result.text

    async def summarize_with_source(self, body: str, subject: str) -> SummaryResult:
        clean_body = self.normalizer.clean(body)
        if len(clean_body) < self.normalizer.min_substantive_chars:
            return self._record(self._no_content(subject))
        if self.text_generator is None:
            return self._record(self._fallback(clean_body))

        # The full body goes to the model; only embeddings are truncated
        prompt = SUMMARY_PROMPT_TEMPLATE.format(subject=subject, body=body)
        try:
            candidates = await self.text_generator.generate(
                prompt,
                temperature=self.temperature,
                max_output_tokens=self.max_output_tokens,
            )
            text = candidates[0].strip() if candidates and isinstance(candidates[0], str) else ""
        except Exception as e:
            self.log.warning("Summary generation failed, using extractive fallback", error=str(e), error_type=type(e).__name__)
            return self._record(self._fallback(clean_body))

        if not text:
            self.log.warning("Summary generation returned no text, using extractive fallback")
            return self._record(self._fallback(clean_body))

        return self._record(SummaryResult(text=text, source=SummarySource.GENERATED))

    async def summarize_batch(self, items: Sequence[EmailText]) -> List[str]:
        results = await self.summarize_batch_with_source(items)
        return [result.text for result in results]

    async def summarize_batch_with_source(self, items: Sequence[EmailText]) -> List[SummaryResult]:
        """
        Summarizes every item concurrently; output order matches input order.

        Items still running when the batch deadline expires are cancelled and
        get their local summary.
        """
        if not items:
            return []

        batch_log = self.log.bind(num_items=len(items), deadline_s=self.batch_deadline_seconds)
        batch_log.debug("Starting summary batch")

        tasks = [
            asyncio.create_task(self.summarize_with_source(item.body, item.subject))
            for item in items
        ]
        _, pending = await asyncio.wait(tasks, timeout=self.batch_deadline_seconds)
        if pending:
            batch_log.warning("Summary batch deadline reached, cancelling pending items", num_pending=len(pending))
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        results: List[Optional[SummaryResult]] = [None] * len(items)
        for index, task in enumerate(tasks):
            if task in pending:
                results[index] = self._record(self._local_summary(items[index].body, items[index].subject))
            else:
                results[index] = task.result()

        batch_log.info("Summary batch completed", num_summaries=len(results))
        return results

    def _local_summary(self, body: str, subject: str) -> SummaryResult:
        clean_body = self.normalizer.clean(body)
        if len(clean_body) < self.normalizer.min_substantive_chars:
            return self._no_content(subject)
        return self._fallback(clean_body)

    @staticmethod
    def _no_content(subject: str) -> SummaryResult:
        return SummaryResult(
            text=f"Email about: {subject}. No content body available.",
            source=SummarySource.NO_CONTENT,
        )

    def _fallback(self, clean_body: str) -> SummaryResult:
        return SummaryResult(
            text=self.normalizer.extractive_summary_from_clean(clean_body),
            source=SummarySource.FALLBACK,
        )

    def _record(self, result: SummaryResult) -> SummaryResult:
        SUMMARIES_TOTAL.labels(source=result.source.value).inc()
        return result
