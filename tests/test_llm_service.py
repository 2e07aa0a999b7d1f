import sys
from pathlib import Path
from types import SimpleNamespace

import httpx
import openai
import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from services.llm_service import BackendTransportError, LLMService


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.kwargs = None

    async def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeClient:
    def __init__(self, completions):
        self.chat = SimpleNamespace(completions=completions)


@pytest.mark.asyncio
async def test_generate_response_sends_system_and_user_message():
    completions = FakeCompletions(content='{"ok": true}')
    service = LLMService(api_key="sk-test", model="gpt-test", client=FakeClient(completions))

    reply = await service.generate_response("system", "user", temperature=0.2)

    assert reply == '{"ok": true}'
    assert completions.kwargs["model"] == "gpt-test"
    assert completions.kwargs["temperature"] == 0.2
    assert [m["role"] for m in completions.kwargs["messages"]] == ["system", "user"]


@pytest.mark.asyncio
async def test_api_errors_become_transport_errors():
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    error = openai.APIConnectionError(request=request)
    service = LLMService(api_key="sk-test", client=FakeClient(FakeCompletions(error=error)))

    with pytest.raises(BackendTransportError) as err:
        await service.generate_response("system", "user")

    assert isinstance(err.value.__cause__, openai.APIConnectionError)


@pytest.mark.asyncio
async def test_empty_reply_is_a_transport_error():
    service = LLMService(api_key="sk-test", client=FakeClient(FakeCompletions(content="")))

    with pytest.raises(BackendTransportError):
        await service.generate_response("system", "user")


@pytest.mark.asyncio
async def test_missing_api_key_disables_client(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    service = LLMService()

    assert service.client is None
    with pytest.raises(BackendTransportError):
        await service.generate_response("system", "user")


def test_client_is_built_without_sdk_retries():
    service = LLMService(api_key="sk-test", base_url="https://proxy.example/v1", timeout=5)

    assert service.client.max_retries == 0
    assert str(service.client.base_url).startswith("https://proxy.example/v1")
