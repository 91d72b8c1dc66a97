# mail_augment/api/v1/endpoints/search_endpoint.py
import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from mail_augment.api.v1 import schemas
from mail_augment.application.ports.embedding_model_port import EmbeddingError
from mail_augment.application.use_cases.augment_emails_use_case import AugmentEmailsUseCase
from mail_augment.application.use_cases.search_emails_use_case import SearchEmailsUseCase
from mail_augment.dependencies import get_augment_emails_use_case, get_search_emails_use_case
from mail_augment.domain.similarity import DimensionMismatchError

router = APIRouter()
log = structlog.get_logger(__name__)

@router.post(
    "/search",
    response_model=schemas.SearchResponse,
    summary="Rank Emails Against a Query",
    description="Embeds the query and ranks the supplied email vectors by cosine similarity.",
)
async def search_endpoint(
    request_body: schemas.SearchRequest,
    use_case: SearchEmailsUseCase = Depends(get_search_emails_use_case),
):
    candidates = [(candidate.id, candidate.embedding) for candidate in request_body.candidates]
    try:
        results = await use_case.execute(
            request_body.query,
            candidates,
            top_k=request_body.top_k,
            min_score=request_body.min_score,
        )
    except EmbeddingError as e:
        log.error("Query embedding failed", error=str(e))
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Embedding model error: {e}")
    except DimensionMismatchError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    return schemas.SearchResponse(results=results)

@router.post(
    "/augment",
    response_model=schemas.AugmentBatchResponse,
    summary="Summarize and Embed a Batch of Emails",
    description="Emails whose embedding could not be produced come back with `embedding: null`.",
)
async def augment_endpoint(
    request_body: schemas.EmailBatchRequest,
    use_case: AugmentEmailsUseCase = Depends(get_augment_emails_use_case),
):
    results = await use_case.execute(request_body.emails)
    return schemas.AugmentBatchResponse(
        results=[schemas.AugmentedEmailResponse(**result.model_dump()) for result in results]
    )
