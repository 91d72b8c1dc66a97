# mail_augment/dependencies.py
"""
Centralized dependency resolvers for the Mail Augment Service.

Components are built once in the lifespan of `main.py` and stored on
`app.state`; these resolvers only hand them to the endpoints.
"""
import structlog
from fastapi import HTTPException, Request, status

from mail_augment.application.services.embedding_client import EmbeddingClient
from mail_augment.application.services.summary_generator import SummaryGenerator
from mail_augment.application.use_cases.augment_emails_use_case import AugmentEmailsUseCase
from mail_augment.application.use_cases.search_emails_use_case import SearchEmailsUseCase

log = structlog.get_logger(__name__)

def _from_state(request: Request, name: str):
    component = getattr(request.app.state, name, None)
    if component is None:
        log.error("Component requested but service is not ready.", component=name)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Mail augment service is not ready. Please try again later."
        )
    return component

def get_embedding_client(request: Request) -> EmbeddingClient:
    return _from_state(request, "embedding_client")

def get_summary_generator(request: Request) -> SummaryGenerator:
    return _from_state(request, "summary_generator")

def get_augment_emails_use_case(request: Request) -> AugmentEmailsUseCase:
    return _from_state(request, "augment_emails_use_case")

def get_search_emails_use_case(request: Request) -> SearchEmailsUseCase:
    return _from_state(request, "search_emails_use_case")
