# mail_augment/domain/text_normalizer.py
import re
import warnings
from typing import Optional

import structlog
from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning

# Plain-text bodies that look like a URL or path trigger this warning on every email
warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

log = structlog.get_logger(__name__)

NO_CONTENT_SUMMARY = "No content available to summarize."
ELLIPSIS = "..."
TAG_PATTERN = re.compile(r"<[^>]*>")

class TextNormalizer:
    """
    Shapes raw email text for the embedding and summary models.

    All methods are pure and never raise for string (or None) input.
    """

    def __init__(
        self,
        min_substantive_chars: int = 10,
        embedding_max_chars: int = 8000,
        preview_chars: int = 200,
        sentence_cut_min_index: int = 100,
    ):
        self.min_substantive_chars = min_substantive_chars
        self.embedding_max_chars = embedding_max_chars
        self.preview_chars = preview_chars
        self.sentence_cut_min_index = sentence_cut_min_index

    def clean(self, raw: Optional[str]) -> str:
        """
        Strips markup tags (dropping script/style contents) and surrounding whitespace.

        Markup the HTML parser rejects is stripped tag by tag with a regex instead.
        """
        if not raw:
            return ""
        if "<" not in raw:
            return raw.strip()

        try:
            soup = BeautifulSoup(raw, "html.parser")
            for script_or_style in soup(["script", "style"]):
                script_or_style.decompose()
            return soup.get_text().strip()
        except Exception as e:
            log.warning("HTML parsing failed, stripping tags with regex", error=str(e), error_type=type(e).__name__)
            return TAG_PATTERN.sub("", raw).strip()

    def is_substantive(self, text: Optional[str]) -> bool:
        return len(self.clean(text)) >= self.min_substantive_chars

    def truncate_for_embedding(self, body: Optional[str]) -> str:
        # Applied to the raw body: bounds request size, not readability
        return (body or "")[: self.embedding_max_chars]

    def format_for_embedding(self, subject: Optional[str], body: Optional[str]) -> str:
        return f"Subject: {subject or ''}\n\n{self.truncate_for_embedding(body)}"

    def truncate_for_fallback_summary(self, clean_body: str) -> str:
        """
        Cuts a cleaned body down to a short preview.

        The preview is the first `preview_chars` characters. If the last period
        in it sits past `sentence_cut_min_index`, the preview ends at that
        period; otherwise an ellipsis marks that the body was longer.
        """
        preview = clean_body[: self.preview_chars].strip()

        last_period = preview.rfind(".")
        if last_period > self.sentence_cut_min_index:
            return preview[: last_period + 1]

        if len(clean_body) > self.preview_chars:
            return preview + ELLIPSIS
        return preview

    def extractive_summary(self, body: Optional[str]) -> str:
        """Deterministic local summary used whenever the remote model is unavailable."""
        return self.extractive_summary_from_clean(self.clean(body))

    def extractive_summary_from_clean(self, clean_body: str) -> str:
        if len(clean_body) < self.min_substantive_chars:
            return NO_CONTENT_SUMMARY
        return self.truncate_for_fallback_summary(clean_body)
