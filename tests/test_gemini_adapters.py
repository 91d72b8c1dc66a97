import json

import httpx
import pytest

from mail_augment.application.ports.embedding_model_port import EmbeddingError
from mail_augment.application.ports.text_generation_port import TextGenerationError
from mail_augment.infrastructure.gemini import GeminiEmbeddingAdapter, GeminiGenerationAdapter

BASE_URL = "https://gemini.test/v1beta"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))


def _embedding_adapter(handler, api_key="test-key") -> GeminiEmbeddingAdapter:
    return GeminiEmbeddingAdapter(
        api_key=api_key,
        model_name="text-embedding-004",
        embedding_dimension=3,
        base_url=BASE_URL,
        timeout_seconds=5,
        http_client=_client(handler),
    )


def _generation_adapter(handler) -> GeminiGenerationAdapter:
    return GeminiGenerationAdapter(
        api_key="test-key",
        model_name="gemini-1.5-flash",
        base_url=BASE_URL,
        timeout_seconds=5,
        http_client=_client(handler),
    )


async def test_embed_content_request_and_response():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["key"] = request.headers.get("x-goog-api-key")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"embedding": {"values": [0.1, 0.2, 0.3]}})

    adapter = _embedding_adapter(handler)

    vector = await adapter.embed_content("Subject: hi\n\nbody")

    assert vector == [0.1, 0.2, 0.3]
    assert seen["url"] == f"{BASE_URL}/models/text-embedding-004:embedContent"
    assert seen["key"] == "test-key"
    assert seen["body"] == {
        "model": "models/text-embedding-004",
        "content": {"parts": [{"text": "Subject: hi\n\nbody"}]},
    }
    await adapter.close()


async def test_batch_embed_contents_keeps_order():
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        assert request.url.path.endswith(":batchEmbedContents")
        assert [r["content"]["role"] for r in body["requests"]] == ["user", "user"]
        values = [[float(len(r["content"]["parts"][0]["text"]))] for r in body["requests"]]
        return httpx.Response(200, json={"embeddings": [{"values": v} for v in values]})

    adapter = _embedding_adapter(handler)

    assert await adapter.batch_embed_contents(["a", "abc"]) == [[1.0], [3.0]]


async def test_batch_embed_contents_empty_skips_request():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    assert await _embedding_adapter(handler).batch_embed_contents([]) == []


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"error": {"message": "internal"}}),
        httpx.Response(200, json={"embedding": {}}),
        httpx.Response(200, json={"embedding": {"values": ["x"]}}),
        httpx.Response(200, text="not json"),
    ],
)
async def test_embed_content_failures_raise_embedding_error(response):
    adapter = _embedding_adapter(lambda request: response)

    with pytest.raises(EmbeddingError):
        await adapter.embed_content("text")


async def test_embedding_network_error_raises_embedding_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(EmbeddingError):
        await _embedding_adapter(handler).batch_embed_contents(["text"])


async def test_embedding_without_api_key():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    adapter = _embedding_adapter(handler, api_key="")

    with pytest.raises(EmbeddingError):
        await adapter.embed_content("text")
    healthy, _ = await adapter.health_check()
    assert not healthy
    assert adapter.get_model_info()["dimension"] == 3


async def test_generate_request_and_candidates():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={
            "candidates": [
                {"content": {"parts": [{"text": " Summary one. "}]}},
                {"content": {"parts": []}},
                {"finishReason": "SAFETY"},
            ]
        })

    adapter = _generation_adapter(handler)

    candidates = await adapter.generate("prompt text", temperature=0.5, max_output_tokens=150)

    assert candidates == [" Summary one. ", "", ""]
    assert seen["url"] == f"{BASE_URL}/models/gemini-1.5-flash:generateContent"
    assert seen["body"] == {
        "contents": [{"parts": [{"text": "prompt text"}]}],
        "generationConfig": {"temperature": 0.5, "maxOutputTokens": 150},
    }


async def test_generate_without_candidates_returns_empty_list():
    adapter = _generation_adapter(lambda request: httpx.Response(200, json={"promptFeedback": {"blockReason": "OTHER"}}))

    assert await adapter.generate("prompt", temperature=0.5, max_output_tokens=150) == []


async def test_generate_failures_raise_text_generation_error():
    with pytest.raises(TextGenerationError):
        await _generation_adapter(lambda request: httpx.Response(429, json={})).generate("p", 0.5, 150)

    def timeout(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(TextGenerationError):
        await _generation_adapter(timeout).generate("p", 0.5, 150)
