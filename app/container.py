from dotenv import load_dotenv

load_dotenv()

from dependency_injector import containers, providers

from app.constants import AIConfig, AudioConfig, TimeoutConfig
from app.image.service import ImageService
from app.openai_client import create_openai_client
from app.recipe.generator import RecipeGenerator
from app.recipe.validator import RecipeResponseValidator
from app.video.client import VideoLinkClient
from app.video.service import VideoService
from app.video.transcriber import MediaTranscriber


class Container(containers.DeclarativeContainer):
    """Dependency injection container"""

    # Configuration
    wiring_config = containers.WiringConfiguration(
        packages=[
            "app.image",
            "app.video",
        ]
    )
    config = providers.Configuration()
    config.openai.api_key.from_env("OPENAI_API_KEY")
    config.openai.vision_model.from_env("OPENAI_VISION_MODEL", default=AIConfig.VISION_MODEL)
    config.openai.text_model.from_env("OPENAI_TEXT_MODEL", default=AIConfig.TEXT_MODEL)
    config.openai.transcribe_model.from_env("OPENAI_TRANSCRIBE_MODEL", default=AudioConfig.TRANSCRIBE_MODEL)

    config.timeout.resolve.from_env("RESOLVE_TIMEOUT_SECONDS", default=TimeoutConfig.RESOLVE, as_=float)
    config.timeout.describe.from_env("DESCRIBE_TIMEOUT_SECONDS", default=TimeoutConfig.DESCRIBE, as_=float)
    config.timeout.render.from_env("RENDER_TIMEOUT_SECONDS", default=TimeoutConfig.RENDER, as_=float)
    config.timeout.download.from_env("DOWNLOAD_TIMEOUT_SECONDS", default=TimeoutConfig.DOWNLOAD, as_=float)
    config.timeout.transcribe.from_env("TRANSCRIBE_TIMEOUT_SECONDS", default=TimeoutConfig.TRANSCRIBE, as_=float)
    config.timeout.model.from_env("MODEL_TIMEOUT_SECONDS", default=TimeoutConfig.MODEL, as_=float)

    # OpenAI
    openai_client = providers.ThreadSafeSingleton(
        create_openai_client,
        api_key=config.openai.api_key,
        timeout=config.timeout.model,
    )

    # Recipe
    recipe_generator = providers.Singleton(
        RecipeGenerator,
        client_provider=openai_client.provider,
        vision_model=config.openai.vision_model,
        text_model=config.openai.text_model,
        temperature=AIConfig.TEMPERATURE,
        max_tokens=AIConfig.MAX_TOKENS,
        timeout=config.timeout.model,
    )
    response_validator = providers.Singleton(RecipeResponseValidator)

    # Image
    image_service = providers.Factory(
        ImageService,
        generator=recipe_generator,
        validator=response_validator,
    )

    # Video
    video_link_client = providers.Singleton(
        VideoLinkClient,
        resolve_timeout=config.timeout.resolve,
        describe_timeout=config.timeout.describe,
    )
    media_transcriber = providers.Singleton(
        MediaTranscriber,
        client_provider=openai_client.provider,
        model=config.openai.transcribe_model,
        render_timeout=config.timeout.render,
        download_timeout=config.timeout.download,
        transcribe_timeout=config.timeout.transcribe,
        max_bytes=AudioConfig.MAX_FILE_SIZE_BYTES,
    )
    video_service = providers.Factory(
        VideoService,
        client=video_link_client,
        transcriber=media_transcriber,
        generator=recipe_generator,
        validator=response_validator,
    )


# Global container instance
container = Container()
