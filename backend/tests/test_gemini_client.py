import asyncio
import base64
import json

import httpx
import pytest

from config import settings
from domain.exceptions import FileTooLargeError, ModelExtractionError, ModelNotConfiguredError
from infrastructure.gemini import GeminiClient


def gemini_response(text):
    return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": text}]}}]})


def make_client(handler, **kwargs):
    kwargs.setdefault("api_key", "test-key")
    kwargs.setdefault("max_retries", 3)
    return GeminiClient(backoff_base=0, transport=httpx.MockTransport(handler), **kwargs)


def test_extract_returns_candidate_text():
    requests = []

    def handler(request):
        requests.append(request)
        return gemini_response('{"header": {}}')

    client = make_client(handler, model="gemini-test")
    assert asyncio.run(client.extract(b"%PDF-1.4")) == '{"header": {}}'

    request = requests[0]
    assert request.url.params["key"] == "test-key"
    assert "gemini-test:generateContent" in request.url.path
    body = json.loads(request.content)
    inline = body["contents"][0]["parts"][0]["inline_data"]
    assert inline["mime_type"] == "application/pdf"
    assert base64.b64decode(inline["data"]) == b"%PDF-1.4"
    assert body["generationConfig"]["topK"] == 40


def test_retries_until_success():
    calls = []

    def handler(request):
        calls.append(request)
        if len(calls) < 3:
            return httpx.Response(503, text="overloaded")
        return gemini_response("ok")

    assert asyncio.run(make_client(handler).extract(b"%PDF")) == "ok"
    assert len(calls) == 3


def test_timeout_is_retried():
    calls = []

    def handler(request):
        calls.append(request)
        if len(calls) == 1:
            raise httpx.ReadTimeout("timed out", request=request)
        return gemini_response("ok")

    assert asyncio.run(make_client(handler).extract(b"%PDF")) == "ok"
    assert len(calls) == 2


def test_gives_up_after_max_retries():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(500, text="boom")

    with pytest.raises(ModelExtractionError) as exc_info:
        asyncio.run(make_client(handler, max_retries=2).extract(b"%PDF"))
    assert len(calls) == 2
    assert "HTTP 500" in str(exc_info.value)


def test_unexpected_response_shape():
    def handler(request):
        return httpx.Response(200, json={"candidates": []})

    with pytest.raises(ModelExtractionError):
        asyncio.run(make_client(handler).extract(b"%PDF"))


def test_missing_api_key():
    client = make_client(lambda request: gemini_response("ok"), api_key="")
    with pytest.raises(ModelNotConfiguredError):
        asyncio.run(client.extract(b"%PDF"))


def test_file_too_large(monkeypatch):
    monkeypatch.setattr(settings, "MAX_FILE_SIZE", 4)
    client = make_client(lambda request: gemini_response("ok"))
    with pytest.raises(FileTooLargeError):
        asyncio.run(client.extract(b"%PDF-1.4"))


def test_success_status_with_non_json_body():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, text="<html>proxy error</html>")

    with pytest.raises(ModelExtractionError) as exc_info:
        asyncio.run(make_client(handler).extract(b"%PDF"))
    assert "JSON" in str(exc_info.value)
    assert len(calls) == 1
