from typing import Any

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Body, Depends, Request

from app.container import Container
from app.recipe.schema import ErrorResponse, VideoLinkExtractionRequest, VideoLinkRequest
from app.utils.cancellation import run_until_disconnected
from app.video.service import VideoService

router = APIRouter()


@router.post(
    "/extract/video-link",
    responses={400: {"model": ErrorResponse}, 429: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
@inject
async def extract_recipe_from_video_link(
    request: Request,
    body: Any = Body(None, examples=[{"videoUrl": "https://vm.tiktok.com/ZMabc/"}]),
    video_service: VideoService = Depends(Provide[Container.video_service]),
):
    """Parse a short-video link into a RecipeDraft with its resolved source_url."""
    video_url = VideoLinkRequest.from_payload(body).video_url
    extraction_request = VideoLinkExtractionRequest(url=video_url or "")
    return await run_until_disconnected(
        request, lambda token: video_service.extract(extraction_request, token)
    )
