from unittest.mock import MagicMock

import httpx
import openai
import pytest

from app.recipe.exception import ExtractionErrorCode, ExtractionException
from app.recipe.generator import RecipeGenerator

CHAT_URL = "https://api.openai.com/v1/chat/completions"
DATA_URI = "data:image/jpeg;base64,/9j/4AAQSkZJRg=="
RECIPE_JSON = '{"title": "Pancakes", "steps": ["Mix", "Fry"]}'


def _status_error(cls, status_code):
    request = httpx.Request("POST", CHAT_URL)
    return cls("upstream error", response=httpx.Response(status_code, request=request), body=None)


def _completion(content):
    response = MagicMock()
    response.choices = [MagicMock(message=MagicMock(content=content))]
    return response


@pytest.fixture
def mock_client():
    client = MagicMock()
    client.chat.completions.create.return_value = _completion(RECIPE_JSON)
    return client


@pytest.fixture
def generator(mock_client):
    return RecipeGenerator(client_provider=lambda: mock_client, vision_model="gpt-4o", text_model="gpt-4o-mini")


def test_extract_from_image_sends_data_uri_and_json_mode(generator, mock_client):
    """The image goes out as an image_url part; JSON mode and sampling settings are fixed."""
    # When
    raw = generator.extract_from_image(DATA_URI)

    # Then
    assert raw == RECIPE_JSON
    kwargs = mock_client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4o"
    assert kwargs["response_format"] == {"type": "json_object"}
    assert kwargs["temperature"] == 0.3
    assert kwargs["max_tokens"] == 4096

    content = kwargs["messages"][0]["content"]
    assert content[0]["type"] == "text"
    assert content[1] == {"type": "image_url", "image_url": {"url": DATA_URI}}


def test_extract_from_text_embeds_source_and_url(generator, mock_client):
    # When
    generator.extract_from_text(
        "Easy recipe: boil pasta, add sauce",
        "https://www.tiktok.com/@chef/video/123",
        "tiktok",
    )

    # Then
    kwargs = mock_client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4o-mini"
    prompt = kwargs["messages"][0]["content"]
    assert "Recipe from TikTok:" in prompt
    assert "Easy recipe: boil pasta, add sauce" in prompt
    assert "Video URL: https://www.tiktok.com/@chef/video/123" in prompt


@pytest.mark.parametrize("source_kind", ["image", "text"])
def test_prompt_carries_every_extraction_rule(generator, source_kind):
    """Both paths share the same extraction rules."""
    prompt = generator.render_prompt(source_kind=source_kind, source_text="boil eggs", source_url="https://x.test")

    assert "only valid JSON" in prompt
    assert "reasonable estimate" in prompt
    assert "Preserve **all steps" in prompt
    assert "atomic cooking actions" in prompt
    assert "in parentheses" in prompt
    assert "emoji" in prompt
    assert "edgy joke" in prompt
    assert "up to 3 strings" in prompt


def test_prompt_uses_generic_label_for_unknown_platform(generator):
    prompt = generator.render_prompt(source_kind="text", source_text="bake bread", source_url="https://example.com/v")

    assert "Recipe from video:" in prompt


def test_image_prompt_has_no_source_section(generator):
    prompt = generator.render_prompt(source_kind="image")

    assert "Video URL:" not in prompt


def test_no_choices_raises(generator, mock_client):
    # Given
    mock_client.chat.completions.create.return_value = MagicMock(choices=[])

    # When / Then
    with pytest.raises(ExtractionException) as exc_info:
        generator.extract_from_image(DATA_URI)
    assert exc_info.value.code == ExtractionErrorCode.UPSTREAM_NO_CHOICES


def test_missing_message_raises(generator, mock_client):
    mock_client.chat.completions.create.return_value = MagicMock(choices=[MagicMock(message=None)])

    with pytest.raises(ExtractionException) as exc_info:
        generator.extract_from_image(DATA_URI)
    assert exc_info.value.code == ExtractionErrorCode.UPSTREAM_NO_MESSAGE


@pytest.mark.parametrize("content", [None, "", "   \n"])
def test_empty_content_raises(generator, mock_client, content):
    mock_client.chat.completions.create.return_value = _completion(content)

    with pytest.raises(ExtractionException) as exc_info:
        generator.extract_from_text("boil water", "https://youtu.be/abc", "youtube")
    assert exc_info.value.code == ExtractionErrorCode.UPSTREAM_EMPTY_CONTENT


def test_rate_limit_maps_to_429(generator, mock_client):
    # Given
    mock_client.chat.completions.create.side_effect = _status_error(openai.RateLimitError, 429)

    # When
    with pytest.raises(ExtractionException) as exc_info:
        generator.extract_from_image(DATA_URI)

    # Then
    assert exc_info.value.code == ExtractionErrorCode.RATE_LIMITED
    assert exc_info.value.status_code == 429


def test_authentication_error_maps_to_auth_error(generator, mock_client):
    mock_client.chat.completions.create.side_effect = _status_error(openai.AuthenticationError, 401)

    with pytest.raises(ExtractionException) as exc_info:
        generator.extract_from_image(DATA_URI)
    assert exc_info.value.code == ExtractionErrorCode.UPSTREAM_AUTH_ERROR


def test_connection_error_maps_to_transient_error(generator, mock_client):
    mock_client.chat.completions.create.side_effect = openai.APIConnectionError(
        request=httpx.Request("POST", CHAT_URL)
    )

    with pytest.raises(ExtractionException) as exc_info:
        generator.extract_from_image(DATA_URI)
    assert exc_info.value.code == ExtractionErrorCode.TRANSIENT_NETWORK_ERROR


def test_other_api_error_maps_to_extraction_failed(generator, mock_client):
    mock_client.chat.completions.create.side_effect = _status_error(openai.InternalServerError, 500)

    with pytest.raises(ExtractionException) as exc_info:
        generator.extract_from_image(DATA_URI)
    assert exc_info.value.code == ExtractionErrorCode.EXTRACTION_FAILED


def test_missing_api_key_is_reported_as_auth_error(mock_client):
    """The client is only built on the first model call, and a missing key surfaces there."""
    # Given
    def missing_key():
        raise ExtractionException(ExtractionErrorCode.UPSTREAM_AUTH_ERROR)

    generator = RecipeGenerator(client_provider=missing_key)

    # When
    with pytest.raises(ExtractionException) as exc_info:
        generator.extract_from_text("boil water", "https://youtu.be/abc", "youtube")

    # Then
    assert exc_info.value.code == ExtractionErrorCode.UPSTREAM_AUTH_ERROR
    mock_client.chat.completions.create.assert_not_called()
