import mimetypes
from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, File, Request, UploadFile

from app.constants import ImageConfig
from app.container import Container
from app.image.service import ImageService
from app.recipe.schema import ErrorResponse, ImageExtractionRequest
from app.utils.cancellation import run_until_disconnected

router = APIRouter()


def _resolve_mime_type(upload: UploadFile) -> str:
    content_type = (upload.content_type or "").strip()
    if content_type.startswith("image/"):
        return content_type

    guessed, _ = mimetypes.guess_type(upload.filename or "")
    if guessed and guessed.startswith("image/"):
        return guessed

    return ImageConfig.DEFAULT_MIME_TYPE


@router.post(
    "/extract/image",
    responses={400: {"model": ErrorResponse}, 429: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
@inject
async def extract_recipe_from_image(
    request: Request,
    image: Optional[UploadFile] = File(None),
    image_service: ImageService = Depends(Provide[Container.image_service]),
):
    """Parse a recipe photo into a RecipeDraft."""
    content = await image.read() if image is not None else b""
    mime_type = _resolve_mime_type(image) if image is not None else ImageConfig.DEFAULT_MIME_TYPE

    extraction_request = ImageExtractionRequest(image=content, mime_type=mime_type)
    return await run_until_disconnected(
        request, lambda token: image_service.extract(extraction_request, token)
    )
