"""Unit tests for OpenAILLMClient."""

from unittest.mock import AsyncMock, Mock, patch

import pytest

from app.adapters.outbound.llm.openai_llm_client import OpenAILLMClient
from app.application.ports.llm_client import LLMClient


@pytest.fixture
def mock_openai_response():
    """Create a mock OpenAI API response."""
    mock_choice = Mock()
    mock_choice.message.content = "  almendras  "

    mock_response = Mock()
    mock_response.choices = [mock_choice]

    return mock_response


@pytest.fixture
def openai_client():
    """Create OpenAILLMClient with test API key."""
    with patch("app.adapters.outbound.llm.openai_llm_client.AsyncOpenAI") as mock_openai_class:
        mock_client_instance = Mock()
        mock_client_instance.chat.completions.create = AsyncMock()
        mock_openai_class.return_value = mock_client_instance
        client = OpenAILLMClient(api_key="test-api-key", model="gpt-4o-mini", timeout_seconds=5)
        yield client


def test_openai_client_implements_llm_client_port(openai_client):
    """Test that OpenAILLMClient implements LLMClient port."""
    assert isinstance(openai_client, LLMClient)


def test_openai_client_raises_error_when_api_key_missing():
    """Test that OpenAILLMClient raises error when API key is missing."""
    with patch("app.adapters.outbound.llm.openai_llm_client.AsyncOpenAI"):
        with patch("app.adapters.outbound.llm.openai_llm_client.settings") as mock_settings:
            mock_settings.openai_api_key = ""
            with pytest.raises(ValueError, match="OpenAI API key is required"):
                OpenAILLMClient(api_key="")


@pytest.mark.asyncio
async def test_complete_calls_openai_api(openai_client, mock_openai_response):
    """Test that complete sends system and user messages with the given parameters."""
    create = openai_client._client.chat.completions.create
    create.return_value = mock_openai_response

    reply = await openai_client.complete(
        system_prompt="Extrae el producto.",
        user_message="¿Tienen almendras?",
        max_tokens=30,
        temperature=0.1,
    )

    create.assert_awaited_once()
    call_args = create.call_args
    assert call_args.kwargs["model"] == "gpt-4o-mini"
    assert call_args.kwargs["max_tokens"] == 30
    assert call_args.kwargs["temperature"] == 0.1
    messages = call_args.kwargs["messages"]
    assert messages[0] == {"role": "system", "content": "Extrae el producto."}
    assert messages[1] == {"role": "user", "content": "¿Tienen almendras?"}
    assert reply == "almendras"


@pytest.mark.asyncio
async def test_complete_raises_on_empty_response(openai_client):
    """Test an empty completion is an error."""
    empty = Mock()
    empty.choices = []
    openai_client._client.chat.completions.create.return_value = empty

    with pytest.raises(Exception, match="OpenAI API call failed"):
        await openai_client.complete("s", "u", max_tokens=10, temperature=0.1)


@pytest.mark.asyncio
async def test_complete_wraps_api_errors(openai_client):
    """Test SDK errors are re-raised with context."""
    openai_client._client.chat.completions.create.side_effect = RuntimeError("rate limited")

    with pytest.raises(Exception, match="rate limited"):
        await openai_client.complete("s", "u", max_tokens=10, temperature=0.1)
