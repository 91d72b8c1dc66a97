from typing import List, Optional
from pydantic import BaseModel, Field

from mail_augment.domain.models import EmailText, EmbeddingResult, RankedCandidate, SummarySource

class EmbedDocumentRequest(EmailText):
    pass

class EmbedQueryRequest(BaseModel):
    query: str = Field(..., min_length=1, description="Texto libre de búsqueda.")

class EmailBatchRequest(BaseModel):
    emails: List[EmailText] = Field(default_factory=list)

class EmbeddingBatchResponse(BaseModel):
    results: List[EmbeddingResult]

class SummaryRequest(EmailText):
    pass

class SummaryResponse(BaseModel):
    summary: str
    source: SummarySource

class SummaryBatchResponse(BaseModel):
    summaries: List[SummaryResponse]

class SearchCandidate(BaseModel):
    id: str
    embedding: List[float]

class SearchRequest(BaseModel):
    query: str = Field(..., min_length=1)
    candidates: List[SearchCandidate] = Field(default_factory=list)
    top_k: Optional[int] = Field(default=None, gt=0)
    min_score: Optional[float] = Field(default=None, ge=-1.0, le=1.0)

class SearchResponse(BaseModel):
    results: List[RankedCandidate]

class AugmentedEmailResponse(BaseModel):
    summary: str
    summary_source: SummarySource
    embedding: Optional[EmbeddingResult] = None

class AugmentBatchResponse(BaseModel):
    results: List[AugmentedEmailResponse]
