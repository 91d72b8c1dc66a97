import pytest

from fakes import FakeEmbeddingModel, FakeTextGenerator, TEST_DIMENSION, TEST_MODEL
from mail_augment.application.services.embedding_client import EmbeddingClient
from mail_augment.application.services.summary_generator import SummaryGenerator
from mail_augment.domain.text_normalizer import TextNormalizer


@pytest.fixture
def normalizer() -> TextNormalizer:
    return TextNormalizer()


@pytest.fixture
def embedding_model() -> FakeEmbeddingModel:
    return FakeEmbeddingModel()


@pytest.fixture
def embedding_client(embedding_model, normalizer) -> EmbeddingClient:
    return EmbeddingClient(
        embedding_model=embedding_model,
        normalizer=normalizer,
        model_name=TEST_MODEL,
        expected_dimension=TEST_DIMENSION,
    )


@pytest.fixture
def text_generator() -> FakeTextGenerator:
    return FakeTextGenerator()


@pytest.fixture
def summary_generator(normalizer, text_generator) -> SummaryGenerator:
    return SummaryGenerator(normalizer=normalizer, text_generator=text_generator)
