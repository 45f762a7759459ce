import asyncio
import logging
from typing import Optional

from app.image.encoder import encode_image_to_data_uri
from app.recipe.exception import ExtractionErrorCode, ExtractionException
from app.recipe.generator import RecipeGenerator
from app.recipe.schema import ImageExtractionRequest, RecipeDraft
from app.recipe.validator import RecipeResponseValidator
from app.utils.cancellation import CancellationToken, raise_if_cancelled


class ImageService:
    def __init__(self, generator: RecipeGenerator, validator: RecipeResponseValidator):
        self.logger = logging.getLogger(__name__)
        self.generator = generator
        self.validator = validator

    async def extract(
        self,
        request: ImageExtractionRequest,
        token: Optional[CancellationToken] = None,
    ) -> RecipeDraft:
        if not request.image:
            raise ExtractionException(ExtractionErrorCode.IMAGE_MISSING)

        try:
            # 1) Encode image
            data_uri = encode_image_to_data_uri(request.image, request.mime_type)
            self.logger.info(f"[Step 1] Image encoded: mime_type={request.mime_type}, bytes={len(request.image)}")

            # 2) Call vision model
            raise_if_cancelled(token)
            raw = await asyncio.to_thread(self.generator.extract_from_image, data_uri)

            # 3) Validate response
            draft = self.validator.validate(raw)
            self.logger.info(f"[Step 2] Recipe extracted from image: title={draft.get('title')!r}")
            return draft

        except ExtractionException:
            raise
        except Exception as e:
            self.logger.exception(f"Failed to extract recipe from image: {e}")
            raise ExtractionException(ExtractionErrorCode.EXTRACTION_FAILED)
