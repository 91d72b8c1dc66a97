# mail_augment/api/v1/endpoints/embedding_endpoint.py
import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from mail_augment.api.v1 import schemas
from mail_augment.application.ports.embedding_model_port import EmbeddingError
from mail_augment.application.services.embedding_client import EmbeddingClient
from mail_augment.dependencies import get_embedding_client
from mail_augment.domain.models import EmbeddingResult

router = APIRouter()
log = structlog.get_logger(__name__)

def _embedding_unavailable(e: EmbeddingError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Embedding model error: {e}")

@router.post(
    "/embeddings/document",
    response_model=EmbeddingResult,
    summary="Embed an Email",
    description="Returns the embedding of an email's subject and (truncated) body.",
)
async def embed_document_endpoint(
    request_body: schemas.EmbedDocumentRequest,
    client: EmbeddingClient = Depends(get_embedding_client),
):
    try:
        vector = await client.embed_document(request_body.subject, request_body.body)
    except EmbeddingError as e:
        raise _embedding_unavailable(e)
    return EmbeddingResult(embedding=vector, model=client.model_name, dimension=len(vector))

@router.post(
    "/embeddings/query",
    response_model=EmbeddingResult,
    summary="Embed a Search Query",
)
async def embed_query_endpoint(
    request_body: schemas.EmbedQueryRequest,
    client: EmbeddingClient = Depends(get_embedding_client),
):
    try:
        vector = await client.embed_query(request_body.query)
    except EmbeddingError as e:
        raise _embedding_unavailable(e)
    return EmbeddingResult(embedding=vector, model=client.model_name, dimension=len(vector))

@router.post(
    "/embeddings/batch",
    response_model=schemas.EmbeddingBatchResponse,
    summary="Embed a Batch of Emails",
    description="Embeds all emails with a single model call. The batch fails as a whole.",
)
async def embed_batch_endpoint(
    request_body: schemas.EmailBatchRequest,
    client: EmbeddingClient = Depends(get_embedding_client),
):
    endpoint_log = log.bind(num_emails=len(request_body.emails))
    if not request_body.emails:
        endpoint_log.warning("No emails provided for embedding.")

    try:
        results = await client.embed_batch(request_body.emails)
    except EmbeddingError as e:
        endpoint_log.error("Batch embedding request failed", error=str(e))
        raise _embedding_unavailable(e)
    return schemas.EmbeddingBatchResponse(results=results)
