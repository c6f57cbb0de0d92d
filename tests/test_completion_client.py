"""Tests for the OpenAI completion adapter, with the SDK client mocked."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest

from core.exceptions import ConfigurationError, ParseError, TransportError
from services.completion_client import OpenAICompletionClient

REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


def _response(content):
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    response.usage.total_tokens = 42
    return response


@pytest.fixture
def sdk():
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=_response('{"ok": true}'))
    return client


@pytest.mark.asyncio
async def test_complete_returns_first_choice_text(sdk):
    adapter = OpenAICompletionClient(api_key="sk-test", model="gpt-test", client=sdk)
    text = await adapter.complete([{"role": "user", "content": "hi"}], temperature=0.3, max_tokens=300, json_mode=True)
    assert text == '{"ok": true}'
    kwargs = sdk.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-test"
    assert kwargs["temperature"] == 0.3
    assert kwargs["max_tokens"] == 300
    assert kwargs["response_format"] == {"type": "json_object"}


@pytest.mark.asyncio
async def test_free_text_mode_sends_no_response_format(sdk):
    adapter = OpenAICompletionClient(api_key="sk-test", client=sdk)
    await adapter.complete([{"role": "user", "content": "hi"}])
    kwargs = sdk.chat.completions.create.call_args.kwargs
    assert "response_format" not in kwargs
    assert "max_tokens" not in kwargs


@pytest.mark.asyncio
async def test_missing_key_raises_configuration_error():
    adapter = OpenAICompletionClient(api_key=None)
    adapter.api_key = None
    with pytest.raises(ConfigurationError) as exc_info:
        await adapter.complete([{"role": "user", "content": "hi"}])
    assert exc_info.value.details == {"config_key": "OPENAI_API_KEY"}


@pytest.mark.asyncio
async def test_connection_error_becomes_transport_error(sdk):
    sdk.chat.completions.create = AsyncMock(side_effect=openai.APIConnectionError(request=REQUEST))
    adapter = OpenAICompletionClient(api_key="sk-test", client=sdk)
    with pytest.raises(TransportError) as exc_info:
        await adapter.complete([{"role": "user", "content": "hi"}])
    assert exc_info.value.status_code == 502


@pytest.mark.asyncio
async def test_rejected_key_becomes_configuration_error(sdk):
    error = openai.AuthenticationError("bad key", response=httpx.Response(401, request=REQUEST), body=None)
    sdk.chat.completions.create = AsyncMock(side_effect=error)
    adapter = OpenAICompletionClient(api_key="sk-test", client=sdk)
    with pytest.raises(ConfigurationError):
        await adapter.complete([{"role": "user", "content": "hi"}])


@pytest.mark.asyncio
@pytest.mark.parametrize("content", [None, ""])
async def test_empty_content_is_parse_error(sdk, content):
    sdk.chat.completions.create = AsyncMock(return_value=_response(content))
    adapter = OpenAICompletionClient(api_key="sk-test", client=sdk)
    with pytest.raises(ParseError):
        await adapter.complete([{"role": "user", "content": "hi"}])


@pytest.mark.asyncio
async def test_no_choices_is_parse_error(sdk):
    response = _response("x")
    response.choices = []
    sdk.chat.completions.create = AsyncMock(return_value=response)
    adapter = OpenAICompletionClient(api_key="sk-test", client=sdk)
    with pytest.raises(ParseError):
        await adapter.complete([{"role": "user", "content": "hi"}])
