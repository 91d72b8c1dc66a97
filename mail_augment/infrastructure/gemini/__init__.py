# File: mail_augment/infrastructure/gemini/__init__.py
from .base_client import GeminiBaseClient
from .gemini_embedding_adapter import GeminiEmbeddingAdapter
from .gemini_generation_adapter import GeminiGenerationAdapter

__all__ = [
    "GeminiBaseClient",
    "GeminiEmbeddingAdapter",
    "GeminiGenerationAdapter",
]
