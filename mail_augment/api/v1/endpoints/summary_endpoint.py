# mail_augment/api/v1/endpoints/summary_endpoint.py
import structlog
from fastapi import APIRouter, Depends

from mail_augment.api.v1 import schemas
from mail_augment.application.services.summary_generator import SummaryGenerator
from mail_augment.dependencies import get_summary_generator

router = APIRouter()
log = structlog.get_logger(__name__)

@router.post(
    "/summaries",
    response_model=schemas.SummaryResponse,
    summary="Summarize an Email",
    description="Always returns a summary; `source` tells whether the model or the local fallback produced it.",
)
async def summarize_endpoint(
    request_body: schemas.SummaryRequest,
    generator: SummaryGenerator = Depends(get_summary_generator),
):
    result = await generator.summarize_with_source(request_body.body, request_body.subject)
    return schemas.SummaryResponse(summary=result.text, source=result.source)

@router.post(
    "/summaries/batch",
    response_model=schemas.SummaryBatchResponse,
    summary="Summarize a Batch of Emails",
)
async def summarize_batch_endpoint(
    request_body: schemas.EmailBatchRequest,
    generator: SummaryGenerator = Depends(get_summary_generator),
):
    results = await generator.summarize_batch_with_source(request_body.emails)
    log.info("Summary batch served", num_emails=len(request_body.emails))
    return schemas.SummaryBatchResponse(
        summaries=[schemas.SummaryResponse(summary=result.text, source=result.source) for result in results]
    )
