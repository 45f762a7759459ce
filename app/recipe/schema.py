from __future__ import annotations

from typing import Any, Dict, List, Optional, TypedDict, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

Number = Union[int, float, str]


class RecipeDraft(TypedDict, total=False):
    """Recipe object produced by the language model.

    Every field is optional and numeric fields may arrive as strings. The
    pipeline returns the parsed object as-is; callers coerce when storing.
    """
    title: str
    description: str
    ingredients: List[str]
    steps: List[str]
    prep_time: Number
    cook_time: Number
    servings: Number
    tags: List[str]
    protein: Number
    calories: Number


class ImageExtractionRequest(BaseModel):
    """A single uploaded recipe photo"""
    model_config = ConfigDict(frozen=True)

    image: bytes = Field(..., description="Raw image bytes")
    mime_type: str = Field(..., description="Declared media type")


class VideoLinkExtractionRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str = Field(..., description="Short-video link as submitted by the user")


class VideoLinkRequest(BaseModel):
    """POST /extract/video-link body"""
    video_url: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("videoUrl", "tiktokUrl", "video_url"),
        description="Short-video URL",
    )

    @field_validator("video_url", mode="before")
    @classmethod
    def _strings_only(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None

    @classmethod
    def from_payload(cls, payload: Any) -> VideoLinkRequest:
        """Lenient parse of the raw JSON body. Anything but an object carries no URL."""
        if not isinstance(payload, dict):
            return cls()
        return cls.model_validate(payload)


class ResolvedSource(BaseModel):
    model_config = ConfigDict(frozen=True)

    canonical_url: str = Field(..., description="Redirect-terminal URL")
    description_text: Optional[str] = Field(None, description="oEmbed caption, None when unusable")
    platform: Optional[str] = Field(None, description="tiktok / youtube / instagram")


class TranscriptSource(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Speech-to-text transcript")


class ErrorResponse(BaseModel):
    error: str
    error_code: str


def with_source_url(draft: RecipeDraft, source_url: str) -> Dict[str, Any]:
    return {**draft, "source_url": source_url}
