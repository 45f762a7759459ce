import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import openai
from jinja2 import Environment, FileSystemLoader
from openai import OpenAI

from app.constants import AIConfig, TimeoutConfig, VideoConfig
from app.recipe.exception import ExtractionErrorCode, ExtractionException

PROMPT_DIR = Path(__file__).parent / "prompt"


class RecipeGenerator:
    """Vision and text recipe extraction through OpenAI chat completions.

    Both paths share one prompt template so the extraction rules stay
    identical; only the source section differs.
    """

    TEMPLATE_NAME = "extract.md.jinja2"

    def __init__(
        self,
        *,
        client_provider: Callable[[], OpenAI],
        vision_model: str = AIConfig.VISION_MODEL,
        text_model: str = AIConfig.TEXT_MODEL,
        temperature: float = AIConfig.TEMPERATURE,
        max_tokens: int = AIConfig.MAX_TOKENS,
        timeout: float = TimeoutConfig.MODEL,
        prompt_dir: Path = PROMPT_DIR,
    ):
        self.logger = logging.getLogger(__name__)
        # Client is created on first model call
        self.client_provider = client_provider
        self.vision_model = vision_model
        self.text_model = text_model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout

        env = Environment(
            loader=FileSystemLoader(str(prompt_dir)),
            autoescape=False,
            trim_blocks=True,
            keep_trailing_newline=True,
        )
        self.template = env.get_template(self.TEMPLATE_NAME)

    def render_prompt(
        self,
        *,
        source_kind: str,
        source_text: Optional[str] = None,
        source_url: Optional[str] = None,
        platform: Optional[str] = None,
    ) -> str:
        platform_label = VideoConfig.PLATFORM_LABELS.get(platform or "", "video")
        return self.template.render(
            source_kind=source_kind,
            source_text=source_text or "",
            source_url=source_url or "",
            platform_label=platform_label,
        )

    def __complete(self, model: str, messages: List[Dict[str, Any]]) -> str:
        client = self.client_provider()
        try:
            response = client.chat.completions.create(
                model=model,
                messages=messages,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                response_format={"type": "json_object"},
                timeout=self.timeout,
            )
        except openai.RateLimitError as e:
            self.logger.warning(f"OpenAI rate limit hit: model={model}, error={e}")
            raise ExtractionException(ExtractionErrorCode.RATE_LIMITED)
        except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
            self.logger.error(f"OpenAI rejected credentials: model={model}, error={e}")
            raise ExtractionException(ExtractionErrorCode.UPSTREAM_AUTH_ERROR)
        except openai.APIConnectionError as e:
            self.logger.error(f"OpenAI connection failed: model={model}, error={e}")
            raise ExtractionException(ExtractionErrorCode.TRANSIENT_NETWORK_ERROR)
        except openai.APIError as e:
            self.logger.exception(f"OpenAI API call failed: model={model}, error={e}")
            raise ExtractionException(ExtractionErrorCode.EXTRACTION_FAILED)

        choices = getattr(response, "choices", None) or []
        if not choices:
            self.logger.error(f"OpenAI returned no choices: model={model}")
            raise ExtractionException(ExtractionErrorCode.UPSTREAM_NO_CHOICES)

        message = getattr(choices[0], "message", None)
        if message is None:
            self.logger.error(f"OpenAI returned a choice without a message: model={model}")
            raise ExtractionException(ExtractionErrorCode.UPSTREAM_NO_MESSAGE)

        content = getattr(message, "content", None)
        if not isinstance(content, str) or not content.strip():
            self.logger.error(f"OpenAI returned empty content: model={model}")
            raise ExtractionException(ExtractionErrorCode.UPSTREAM_EMPTY_CONTENT)

        return content

    def extract_from_image(self, data_uri: str) -> str:
        prompt = self.render_prompt(source_kind="image")
        messages = [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": prompt},
                    {"type": "image_url", "image_url": {"url": data_uri}},
                ],
            }
        ]
        return self.__complete(self.vision_model, messages)

    def extract_from_text(self, source_text: str, source_url: str, platform: Optional[str] = None) -> str:
        prompt = self.render_prompt(
            source_kind="text",
            source_text=source_text,
            source_url=source_url,
            platform=platform,
        )
        return self.__complete(self.text_model, [{"role": "user", "content": prompt}])
