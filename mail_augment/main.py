# File: mail_augment/main.py
import time
import uuid
import structlog
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from prometheus_client import make_asgi_app

from mail_augment.core.logging_config import setup_logging
setup_logging()

from mail_augment.core.config import settings, Settings
from mail_augment.core.metrics import REQUEST_PROCESSING_DURATION_SECONDS
from mail_augment.api.v1.endpoints import embedding_endpoint, summary_endpoint, search_endpoint
from mail_augment.application.services.embedding_client import EmbeddingClient
from mail_augment.application.services.summary_generator import SummaryGenerator
from mail_augment.application.use_cases.augment_emails_use_case import AugmentEmailsUseCase
from mail_augment.application.use_cases.search_emails_use_case import SearchEmailsUseCase
from mail_augment.domain.text_normalizer import TextNormalizer
from mail_augment.infrastructure.gemini import GeminiEmbeddingAdapter, GeminiGenerationAdapter

log = structlog.get_logger(__name__)

def build_components(config: Settings) -> dict:
    """Wires adapters, services and use cases from an explicit configuration."""
    api_key = config.GEMINI_API_KEY.get_secret_value()
    normalizer = TextNormalizer(
        min_substantive_chars=config.MIN_SUBSTANTIVE_CHARS,
        embedding_max_chars=config.EMBEDDING_MAX_BODY_CHARS,
        preview_chars=config.SUMMARY_PREVIEW_CHARS,
        sentence_cut_min_index=config.SUMMARY_SENTENCE_CUT_MIN_INDEX,
    )
    embedding_adapter = GeminiEmbeddingAdapter(
        api_key=api_key,
        model_name=config.EMBEDDING_MODEL_NAME,
        embedding_dimension=config.EMBEDDING_DIMENSION,
        base_url=config.GEMINI_API_BASE,
        timeout_seconds=config.GEMINI_TIMEOUT_SECONDS,
    )
    generation_adapter = None
    if config.gemini_enabled:
        generation_adapter = GeminiGenerationAdapter(
            api_key=api_key,
            model_name=config.SUMMARY_MODEL_NAME,
            base_url=config.GEMINI_API_BASE,
            timeout_seconds=config.GEMINI_TIMEOUT_SECONDS,
        )
    else:
        log.warning("Gemini API key not configured; summaries will use the extractive fallback.")

    embedding_client = EmbeddingClient(
        embedding_model=embedding_adapter,
        normalizer=normalizer,
        model_name=config.EMBEDDING_MODEL_NAME,
        expected_dimension=config.EMBEDDING_DIMENSION,
    )
    summary_generator = SummaryGenerator(
        normalizer=normalizer,
        text_generator=generation_adapter,
        temperature=config.SUMMARY_TEMPERATURE,
        max_output_tokens=config.SUMMARY_MAX_OUTPUT_TOKENS,
        batch_deadline_seconds=config.SUMMARY_BATCH_DEADLINE_SECONDS,
    )
    return {
        "embedding_adapter": embedding_adapter,
        "generation_adapter": generation_adapter,
        "embedding_client": embedding_client,
        "summary_generator": summary_generator,
        "augment_emails_use_case": AugmentEmailsUseCase(embedding_client, summary_generator),
        "search_emails_use_case": SearchEmailsUseCase(embedding_client),
    }

@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info("Mail Augment Service startup sequence initiated...")
    components = build_components(settings)
    for name, component in components.items():
        setattr(app.state, name, component)
    log.info("Dependencies (Gemini adapters, services, use cases) initialized.")
    yield
    log.info("Mail Augment Service shutdown sequence initiated...")
    await components["embedding_adapter"].close()
    if components["generation_adapter"] is not None:
        await components["generation_adapter"].close()
    log.info("Shutdown sequence complete.")

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    version="1.0.0",
    description="Generates embeddings, semantic rankings and summaries for stored emails.",
    lifespan=lifespan,
)

metrics_app = make_asgi_app()
app.mount("/metrics", metrics_app)


@app.middleware("http")
async def add_request_context_and_metrics(request: Request, call_next):
    start_time = time.perf_counter()
    request_id = request.headers.get("x-request-id", str(uuid.uuid4()))

    if request.url.path.startswith("/metrics"):
        return await call_next(request)

    structlog.contextvars.bind_contextvars(request_id=request_id)
    try:
        response = await call_next(request)
    finally:
        structlog.contextvars.unbind_contextvars("request_id")

    process_time = time.perf_counter() - start_time
    REQUEST_PROCESSING_DURATION_SECONDS.labels(method=request.method, path=request.url.path).observe(process_time)

    log.info("Request processed", method=request.method, path=request.url.path, status_code=response.status_code, duration_ms=round(process_time * 1000, 2))
    return response

app.include_router(embedding_endpoint.router, prefix=settings.API_V1_STR, tags=["Embeddings"])
app.include_router(summary_endpoint.router, prefix=settings.API_V1_STR, tags=["Summaries"])
app.include_router(search_endpoint.router, prefix=settings.API_V1_STR, tags=["Search"])

@app.get("/health", tags=["Health Check"])
async def health_check(request: Request):
    embedding_adapter = getattr(request.app.state, "embedding_adapter", None)
    if embedding_adapter is None:
        return {"status": "starting", "embedding_model": None, "ai_summaries": False}

    embeddings_ok, embeddings_message = await embedding_adapter.health_check()

    # Without a generation model summaries still work through the extractive fallback
    generation_adapter = getattr(request.app.state, "generation_adapter", None)
    generation_ok, generation_message = False, "AI summaries disabled; extractive fallback only."
    if generation_adapter is not None:
        generation_ok, generation_message = await generation_adapter.health_check()

    return {
        "status": "healthy" if embeddings_ok else "degraded",
        "embedding_model": embeddings_message,
        "embedding_model_info": embedding_adapter.get_model_info(),
        "ai_summaries": generation_ok,
        "summary_model": generation_message,
    }
