"""TDD: AnalysisBackend vendor tests written FIRST"""
import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from nutrition_decoder.errors import BackendError, ConfigurationError
from nutrition_decoder.request_builder import build


def make_request(encoded_image, model: str = "test-model", count: int = 1):
    return build([encoded_image] * count, "decode this label", model)


# ── ClaudeAdapter ─────────────────────────────────────────────────────────────


async def test_claude_analyze_sends_images_then_instruction(encoded_image):
    from nutrition_decoder.vision.claude import ClaudeAdapter

    adapter = ClaudeAdapter(api_key="test-key")
    mock_response = MagicMock()
    mock_response.content = [MagicMock(text='{"productName": "X"}')]

    with patch("nutrition_decoder.vision.claude.AsyncAnthropic") as mock_cls:
        mock_anthropic = AsyncMock()
        mock_anthropic.messages.create = AsyncMock(return_value=mock_response)
        mock_cls.return_value = mock_anthropic

        await adapter.analyze(make_request(encoded_image, count=2))

    mock_anthropic.messages.create.assert_called_once()
    call_kwargs = mock_anthropic.messages.create.call_args.kwargs
    content = call_kwargs["messages"][0]["content"]
    assert [block["type"] for block in content] == ["image", "image", "text"]
    assert content[0]["source"] == {
        "type": "base64",
        "media_type": "image/jpeg",
        "data": encoded_image.data,
    }
    assert content[-1]["text"] == "decode this label"
    assert call_kwargs["model"] == "test-model"


async def test_claude_analyze_disables_sdk_retries(encoded_image):
    from nutrition_decoder.vision.claude import ClaudeAdapter

    adapter = ClaudeAdapter(api_key="test-key")
    mock_response = MagicMock()
    mock_response.content = [MagicMock(text="{}")]

    with patch("nutrition_decoder.vision.claude.AsyncAnthropic") as mock_cls:
        mock_anthropic = AsyncMock()
        mock_anthropic.messages.create = AsyncMock(return_value=mock_response)
        mock_cls.return_value = mock_anthropic

        await adapter.analyze(make_request(encoded_image))

    assert mock_cls.call_args.kwargs == {"api_key": "test-key", "max_retries": 0}


async def test_claude_analyze_returns_stripped_text(encoded_image):
    from nutrition_decoder.vision.claude import ClaudeAdapter

    adapter = ClaudeAdapter(api_key="test-key")
    mock_response = MagicMock()
    mock_response.content = [MagicMock(text="  ```json\n{}\n```  \n")]

    with patch("nutrition_decoder.vision.claude.AsyncAnthropic") as mock_cls:
        mock_anthropic = AsyncMock()
        mock_anthropic.messages.create = AsyncMock(return_value=mock_response)
        mock_cls.return_value = mock_anthropic

        result = await adapter.analyze(make_request(encoded_image))

    assert result == "```json\n{}\n```"


async def test_claude_missing_key_fails_before_network(encoded_image):
    from nutrition_decoder.vision.claude import ClaudeAdapter

    adapter = ClaudeAdapter(api_key=None)

    with patch("nutrition_decoder.vision.claude.AsyncAnthropic") as mock_cls:
        with pytest.raises(ConfigurationError, match="Missing API key"):
            await adapter.analyze(make_request(encoded_image))

    mock_cls.assert_not_called()


async def test_claude_api_error_becomes_backend_error(encoded_image):
    from nutrition_decoder.vision.claude import ClaudeAdapter

    adapter = ClaudeAdapter(api_key="test-key")

    with patch("nutrition_decoder.vision.claude.AsyncAnthropic") as mock_cls:
        mock_anthropic = AsyncMock()
        mock_anthropic.messages.create = AsyncMock(side_effect=RuntimeError("quota exceeded"))
        mock_cls.return_value = mock_anthropic

        with pytest.raises(BackendError, match="quota exceeded"):
            await adapter.analyze(make_request(encoded_image))

    mock_anthropic.messages.create.assert_called_once()


async def test_claude_empty_content_becomes_backend_error(encoded_image):
    from nutrition_decoder.vision.claude import ClaudeAdapter

    adapter = ClaudeAdapter(api_key="test-key")
    mock_response = MagicMock()
    mock_response.content = []

    with patch("nutrition_decoder.vision.claude.AsyncAnthropic") as mock_cls:
        mock_anthropic = AsyncMock()
        mock_anthropic.messages.create = AsyncMock(return_value=mock_response)
        mock_cls.return_value = mock_anthropic

        with pytest.raises(BackendError):
            await adapter.analyze(make_request(encoded_image))


async def test_claude_timeout_becomes_backend_error(encoded_image):
    from nutrition_decoder.vision.claude import ClaudeAdapter

    adapter = ClaudeAdapter(api_key="test-key", timeout=0.05)

    async def _slow(**_):
        await asyncio.sleep(5)

    with patch("nutrition_decoder.vision.claude.AsyncAnthropic") as mock_cls:
        mock_anthropic = AsyncMock()
        mock_anthropic.messages.create = _slow
        mock_cls.return_value = mock_anthropic

        with pytest.raises(BackendError, match="timed out"):
            await adapter.analyze(make_request(encoded_image))


def test_claude_default_model_and_override():
    from nutrition_decoder.vision.claude import ClaudeAdapter

    assert ClaudeAdapter(api_key="k").model == "claude-sonnet-4-20250514"
    assert ClaudeAdapter(api_key="k", model="claude-opus-4-1").model == "claude-opus-4-1"


# ── GeminiAdapter ─────────────────────────────────────────────────────────────


def make_gemini_client(text=None, side_effect=None) -> MagicMock:
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(
        return_value=MagicMock(text=text), side_effect=side_effect
    )
    return client


async def test_gemini_analyze_sends_instruction_then_inline_images(encoded_image):
    from nutrition_decoder.vision.gemini import GeminiAdapter

    adapter = GeminiAdapter(api_key="test-key")
    mock_client = make_gemini_client(text='{"productName": "X"}')

    with patch("nutrition_decoder.vision.gemini.Client", return_value=mock_client) as mock_cls:
        result = await adapter.analyze(make_request(encoded_image, count=2))

    assert result == '{"productName": "X"}'
    mock_cls.assert_called_once_with(api_key="test-key")
    call_kwargs = mock_client.aio.models.generate_content.call_args.kwargs
    parts = call_kwargs["contents"]
    assert call_kwargs["model"] == "test-model"
    assert parts[0].text == "decode this label"
    assert len(parts) == 3
    assert parts[1].inline_data.data == b"fake-jpeg"
    assert parts[1].inline_data.mime_type == "image/jpeg"


async def test_gemini_missing_key_fails_before_network(encoded_image):
    from nutrition_decoder.vision.gemini import GeminiAdapter

    adapter = GeminiAdapter(api_key="")

    with patch("nutrition_decoder.vision.gemini.Client") as mock_cls:
        with pytest.raises(ConfigurationError):
            await adapter.analyze(make_request(encoded_image))

    mock_cls.assert_not_called()


async def test_gemini_api_error_becomes_backend_error(encoded_image):
    from nutrition_decoder.vision.gemini import GeminiAdapter

    adapter = GeminiAdapter(api_key="test-key")
    mock_client = make_gemini_client(side_effect=RuntimeError("API down"))

    with patch("nutrition_decoder.vision.gemini.Client", return_value=mock_client):
        with pytest.raises(BackendError, match="API down"):
            await adapter.analyze(make_request(encoded_image))


async def test_gemini_empty_text_becomes_backend_error(encoded_image):
    from nutrition_decoder.vision.gemini import GeminiAdapter

    adapter = GeminiAdapter(api_key="test-key")
    mock_client = make_gemini_client(text=None)

    with patch("nutrition_decoder.vision.gemini.Client", return_value=mock_client):
        with pytest.raises(BackendError, match="Empty response"):
            await adapter.analyze(make_request(encoded_image))


async def test_gemini_reuses_one_client_across_analyses(encoded_image):
    from nutrition_decoder.vision.gemini import GeminiAdapter

    adapter = GeminiAdapter(api_key="test-key")
    mock_client = make_gemini_client(text="{}")

    with patch("nutrition_decoder.vision.gemini.Client", return_value=mock_client) as mock_cls:
        await adapter.analyze(make_request(encoded_image))
        await adapter.analyze(make_request(encoded_image))

    mock_cls.assert_called_once_with(api_key="test-key")
    assert mock_client.aio.models.generate_content.await_count == 2


def test_gemini_default_model():
    from nutrition_decoder.vision.gemini import GeminiAdapter

    assert GeminiAdapter(api_key="k").model == "gemini-2.5-flash"


# ── factory ───────────────────────────────────────────────────────────────────


def make_config(backend: str):
    from nutrition_decoder.config import Config

    return Config(
        backend=backend,
        gemini_api_key="gm",
        claude_api_key="cl",
        model=None,
        timeout=60,
        max_image_edge=1024,
        jpeg_quality=80,
        log_level="INFO",
        api_host="127.0.0.1",
        api_port=8000,
    )


def test_create_backend_selects_gemini():
    from nutrition_decoder.vision.factory import create_backend
    from nutrition_decoder.vision.gemini import GeminiAdapter

    assert isinstance(create_backend(make_config("gemini")), GeminiAdapter)


def test_create_backend_selects_claude():
    from nutrition_decoder.vision.claude import ClaudeAdapter
    from nutrition_decoder.vision.factory import create_backend

    assert isinstance(create_backend(make_config("claude")), ClaudeAdapter)


def test_create_backend_unknown_fails():
    from nutrition_decoder.vision.factory import create_backend

    with pytest.raises(ValueError):
        create_backend(make_config("llama"))
