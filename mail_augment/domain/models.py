# mail_augment/domain/models.py
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field

class EmailText(BaseModel):
    """Subject and body of an email as handed in by the storage layer."""
    subject: str = Field(default="", description="Asunto del email.")
    body: str = Field(default="", description="Cuerpo del email; puede contener HTML.")

class EmbeddingResult(BaseModel):
    """A vector produced for one email, tagged with the model that produced it."""
    embedding: List[float]
    model: str
    # Observed length of `embedding`, not the configured dimension
    dimension: int

class RankedCandidate(BaseModel):
    id: str
    score: float

class SummarySource(str, Enum):
    GENERATED = "generated"
    FALLBACK = "fallback"
    NO_CONTENT = "no_content"

class SummaryResult(BaseModel):
    """
    A summary plus how it was obtained.

    `text` is never empty. GENERATED comes from the remote model, FALLBACK from
    the local extractive algorithm, NO_CONTENT is the canned placeholder used
    when the body has nothing worth summarizing.
    """
    text: str = Field(..., min_length=1)
    source: SummarySource

class AugmentedEmail(BaseModel):
    summary: str
    summary_source: SummarySource
    # None when the embedding batch failed; callers should skip the email from search
    embedding: Optional[EmbeddingResult] = None
