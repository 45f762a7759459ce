import asyncio
import logging
from typing import Any, Dict, Optional

from app.recipe.exception import ExtractionErrorCode, ExtractionException
from app.recipe.generator import RecipeGenerator
from app.recipe.likelihood import looks_like_recipe
from app.recipe.schema import ResolvedSource, VideoLinkExtractionRequest, with_source_url
from app.recipe.validator import RecipeResponseValidator
from app.utils.cancellation import CancellationToken, raise_if_cancelled
from app.video.client import VideoLinkClient
from app.video.platform import detect_platform
from app.video.transcriber import MediaTranscriber


class VideoService:
    def __init__(
        self,
        client: VideoLinkClient,
        transcriber: MediaTranscriber,
        generator: RecipeGenerator,
        validator: RecipeResponseValidator,
    ):
        self.logger = logging.getLogger(__name__)
        self.client = client
        self.transcriber = transcriber
        self.generator = generator
        self.validator = validator

    async def resolve_source(
        self,
        url: str,
        token: Optional[CancellationToken] = None,
    ) -> ResolvedSource:
        raise_if_cancelled(token)
        canonical_url = await asyncio.to_thread(self.client.resolve, url)
        if not canonical_url:
            self.logger.info(f"[Step 1] Could not resolve video link: url={url}")
            raise ExtractionException(ExtractionErrorCode.RESOLUTION_FAILED)

        raise_if_cancelled(token)
        description = await asyncio.to_thread(self.client.describe, canonical_url)

        return ResolvedSource(
            canonical_url=canonical_url,
            description_text=description,
            platform=detect_platform(canonical_url),
        )

    async def select_recipe_text(
        self,
        source: ResolvedSource,
        token: Optional[CancellationToken] = None,
    ) -> Optional[str]:
        """Prefer the caption; fall back to transcribing the video audio."""
        if looks_like_recipe(source.description_text):
            self.logger.info(f"[Step 2] Using video description: url={source.canonical_url}")
            return source.description_text

        self.logger.info(f"[Step 2] Description unusable, falling back to transcription: url={source.canonical_url}")
        transcript = await self.transcriber.transcribe(source.canonical_url, token)
        if transcript is not None and looks_like_recipe(transcript.text):
            return transcript.text

        return None

    async def extract(
        self,
        request: VideoLinkExtractionRequest,
        token: Optional[CancellationToken] = None,
    ) -> Dict[str, Any]:
        if not request.url or not request.url.strip():
            raise ExtractionException(ExtractionErrorCode.VIDEO_URL_MISSING)

        try:
            # 1) Resolve link and fetch caption
            source = await self.resolve_source(request.url.strip(), token)

            # 2) Pick recipe text
            recipe_text = await self.select_recipe_text(source, token)
            if not recipe_text:
                self.logger.info(f"No recipe found in description or audio: url={source.canonical_url}")
                raise ExtractionException(ExtractionErrorCode.NO_RECIPE_FOUND)

            # 3) Extract recipe with the language model
            raise_if_cancelled(token)
            raw = await asyncio.to_thread(
                self.generator.extract_from_text, recipe_text, source.canonical_url, source.platform
            )

            # 4) Validate
            draft = self.validator.validate(raw)
            self.logger.info(f"[Step 4] Recipe extracted from video: url={source.canonical_url}, title={draft.get('title')!r}")
            return with_source_url(draft, source.canonical_url)

        except ExtractionException:
            raise
        except Exception as e:
            self.logger.exception(f"Failed to extract recipe from video link: url={request.url}, error={e}")
            raise ExtractionException(ExtractionErrorCode.EXTRACTION_FAILED)
