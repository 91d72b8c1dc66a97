import pytest

from fakes import FakeEmbeddingModel, FakeTextGenerator, TEST_DIMENSION, TEST_MODEL
from mail_augment.application.ports.embedding_model_port import EmbeddingError
from mail_augment.application.services.embedding_client import EmbeddingClient
from mail_augment.application.services.summary_generator import SummaryGenerator
from mail_augment.application.use_cases.augment_emails_use_case import AugmentEmailsUseCase
from mail_augment.application.use_cases.search_emails_use_case import SearchEmailsUseCase
from mail_augment.domain.models import EmailText, SummarySource
from mail_augment.domain.similarity import DimensionMismatchError

ITEMS = [
    EmailText(subject="Invoice", body="Please find the invoice for March attached."),
    EmailText(subject="Empty", body=""),
]


async def test_augment_empty_batch(embedding_client, embedding_model, summary_generator, text_generator):
    use_case = AugmentEmailsUseCase(embedding_client, summary_generator)

    assert await use_case.execute([]) == []
    assert embedding_model.batch_calls == []
    assert text_generator.calls == []


async def test_augment_pairs_summaries_and_embeddings_by_position(embedding_client, embedding_model, summary_generator):
    use_case = AugmentEmailsUseCase(embedding_client, summary_generator)

    results = await use_case.execute(ITEMS)

    assert len(embedding_model.batch_calls) == 1
    assert [result.summary_source for result in results] == [SummarySource.GENERATED, SummarySource.NO_CONTENT]
    assert results[1].summary == "Email about: Empty. No content body available."
    assert results[0].embedding.embedding == embedding_model.vector_for(embedding_model.batch_calls[0][0])
    assert results[1].embedding.dimension == TEST_DIMENSION


async def test_augment_keeps_summaries_when_embedding_fails(normalizer):
    embedding_client = EmbeddingClient(FakeEmbeddingModel(fail=True), normalizer, TEST_MODEL, TEST_DIMENSION)
    summary_generator = SummaryGenerator(normalizer, FakeTextGenerator(fail_when="Subject:"))
    use_case = AugmentEmailsUseCase(embedding_client, summary_generator)

    results = await use_case.execute(ITEMS)

    assert [result.embedding for result in results] == [None, None]
    assert results[0].summary == "Please find the invoice for March attached."
    assert results[0].summary_source == SummarySource.FALLBACK


async def test_search_ranks_candidates(embedding_client, embedding_model):
    use_case = SearchEmailsUseCase(embedding_client)
    query = "roadmap"
    query_vector = embedding_model.vector_for(query)
    candidates = [
        ("weak", [0.0, 1.0, 0.0, 0.0]),
        ("exact", list(query_vector)),
        ("none", [0.0, 0.0, 0.0, 0.0]),
    ]

    results = await use_case.execute(query, candidates, top_k=2)

    assert embedding_model.single_calls == [query]
    assert [result.id for result in results] == ["exact", "weak"]
    assert results[0].score == pytest.approx(1.0)


async def test_search_without_candidates_skips_embedding(embedding_client, embedding_model):
    assert await SearchEmailsUseCase(embedding_client).execute("anything", []) == []
    assert embedding_model.single_calls == []


async def test_search_propagates_errors(normalizer, embedding_client):
    failing = SearchEmailsUseCase(EmbeddingClient(FakeEmbeddingModel(fail=True), normalizer, TEST_MODEL, TEST_DIMENSION))
    with pytest.raises(EmbeddingError):
        await failing.execute("query", [("a", [1.0, 0.0, 0.0, 0.0])])

    with pytest.raises(DimensionMismatchError):
        await SearchEmailsUseCase(embedding_client).execute("query", [("a", [1.0, 0.0])])
