"""
Application-wide constants
"""


class AIConfig:
    """Language model settings"""
    VISION_MODEL = "gpt-4o"
    TEXT_MODEL = "gpt-4o-mini"
    MAX_TOKENS = 4096
    TEMPERATURE = 0.3


class AudioConfig:
    """Speech-to-text settings"""
    MAX_FILE_SIZE_MB = 25
    MAX_FILE_SIZE_BYTES = MAX_FILE_SIZE_MB * 1024 * 1024

    TRANSCRIBE_MODEL = "gpt-4o-mini-transcribe"
    UPLOAD_FILENAME = "video.mp4"
    UPLOAD_MIME_TYPE = "audio/mp4"
    DOWNLOAD_CHUNK_SIZE = 64 * 1024


class TimeoutConfig:
    """Per-stage timeouts in seconds"""
    RESOLVE = 5.0
    DESCRIBE = 5.0
    RENDER = 30.0
    DOWNLOAD = 60.0
    TRANSCRIBE = 120.0
    MODEL = 60.0


class ImageConfig:
    DEFAULT_MIME_TYPE = "image/jpeg"


class VideoConfig:
    """Short-video platform settings"""
    # Desktop UA for oEmbed and link resolution
    USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36"
    # Mobile UA for page rendering, TikTok/Instagram serve a plain <video> to it
    MOBILE_USER_AGENT = (
        "Mozilla/5.0 (iPhone; CPU iPhone OS 16_0 like Mac OS X) "
        "AppleWebKit/605.1.15 (KHTML, like Gecko) Version/16.0 "
        "Mobile/15E148 Safari/604.1"
    )

    OEMBED_ENDPOINTS = {
        "tiktok": "https://www.tiktok.com/oembed",
        "youtube": "https://www.youtube.com/oembed",
    }

    PLATFORM_LABELS = {
        "tiktok": "TikTok",
        "youtube": "YouTube",
        "instagram": "Instagram",
    }


class ErrorMessages:
    OPENAI_API_KEY_MISSING = "OPENAI_API_KEY is not set"
