import asyncio
import json

import httpx
import openai
import pytest

from local_ai_service.errors import ModelRuntimeError, ModelTimeoutError
from local_ai_service.model_client import ModelClient

from conftest import FakeCompletions, chat_completion, fake_openai, mock_openai

RUNTIME_URL = "http://127.0.0.1:11434/v1/chat/completions"


def make_client(completions, timeout=5):
    return ModelClient(model="llama3.2", timeout=timeout, temperature=0.2, num_ctx=4096,
                       client=fake_openai(completions))


def test_complete_returns_text_and_sends_one_user_message():
    completions = FakeCompletions(reply='{"week_number": 1, "days": []}')
    text = asyncio.run(make_client(completions).complete("make me a plan"))

    assert text == '{"week_number": 1, "days": []}'
    assert len(completions.calls) == 1
    call = completions.calls[0]
    assert call["model"] == "llama3.2"
    assert call["messages"] == [{"role": "user", "content": "make me a plan"}]
    assert call["response_format"] == {"type": "json_object"}
    assert call["temperature"] == 0.2
    assert call["extra_body"] == {"options": {"num_ctx": 4096}}


def test_slow_runtime_is_cancelled_with_timeout_error():
    completions = FakeCompletions(reply="{}", delay=2)
    with pytest.raises(ModelTimeoutError) as excinfo:
        asyncio.run(make_client(completions, timeout=0.05).complete("prompt"))
    assert excinfo.value.status_code == 504
    assert "timeout" in excinfo.value.message


def test_client_side_timeout_maps_to_timeout_error():
    error = openai.APITimeoutError(request=httpx.Request("POST", RUNTIME_URL))
    with pytest.raises(ModelTimeoutError):
        asyncio.run(make_client(FakeCompletions(error=error)).complete("prompt"))


def test_non_success_status_is_runtime_error():
    response = httpx.Response(503, request=httpx.Request("POST", RUNTIME_URL))
    error = openai.APIStatusError("model is loading", response=response, body=None)
    with pytest.raises(ModelRuntimeError) as excinfo:
        asyncio.run(make_client(FakeCompletions(error=error)).complete("prompt"))
    assert excinfo.value.status_code == 500
    assert "503" in excinfo.value.message


def test_connection_failure_is_runtime_error():
    error = openai.APIConnectionError(request=httpx.Request("POST", RUNTIME_URL))
    with pytest.raises(ModelRuntimeError):
        asyncio.run(make_client(FakeCompletions(error=error)).complete("prompt"))


def test_missing_choices_yield_empty_text():
    completions = FakeCompletions(choices=False)
    assert asyncio.run(make_client(completions).complete("prompt")) == ""


def test_default_client_does_not_retry():
    client = ModelClient(base_url="http://127.0.0.1:11434/v1", timeout=30)
    assert client.client.max_retries == 0
    assert client.timeout == 30


def test_unexpected_openai_error_is_runtime_error():
    response = httpx.Response(200, request=httpx.Request("POST", RUNTIME_URL))
    error = openai.APIResponseValidationError(response=response, body=None)
    with pytest.raises(ModelRuntimeError) as excinfo:
        asyncio.run(make_client(FakeCompletions(error=error)).complete("prompt"))
    assert excinfo.value.status_code == 500


def test_plain_text_success_response_is_runtime_error():
    openai_client = mock_openai(lambda request: httpx.Response(
        200, headers={"content-type": "text/html"}, text="<html>gateway</html>"))
    with pytest.raises(ModelRuntimeError) as excinfo:
        asyncio.run(ModelClient(timeout=5, client=openai_client).complete("prompt"))
    assert "unexpected response" in excinfo.value.message


def test_real_client_sends_runtime_options():
    requests = []

    def handler(request):
        requests.append(json.loads(request.content))
        return httpx.Response(200, json=chat_completion('{"days": []}'))

    client = ModelClient(model="llama3.2", timeout=5, num_ctx=8192, client=mock_openai(handler))
    assert asyncio.run(client.complete("prompt")) == '{"days": []}'
    assert requests[0]["options"] == {"num_ctx": 8192}
    assert requests[0]["response_format"] == {"type": "json_object"}
