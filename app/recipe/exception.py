from enum import Enum

from app.exception import BusinessException


class ExtractionErrorCode(Enum):
    IMAGE_MISSING = ("EXTRACT_001", "No image file provided.", 400)
    VIDEO_URL_MISSING = ("EXTRACT_002", "A video URL is required.", 400)
    RESOLUTION_FAILED = ("EXTRACT_003", "Could not resolve the video link.", 400)
    NO_RECIPE_FOUND = ("EXTRACT_004", "No recipe found in the video description or audio.", 400)
    UPSTREAM_NO_CHOICES = ("EXTRACT_005", "The AI model did not return any choices.", 500)
    UPSTREAM_NO_MESSAGE = ("EXTRACT_006", "The AI model returned a choice without a message.", 500)
    UPSTREAM_EMPTY_CONTENT = ("EXTRACT_007", "The AI model did not return any content.", 500)
    INVALID_MODEL_OUTPUT = ("EXTRACT_008", "The AI model returned a malformed recipe.", 500)
    RATE_LIMITED = ("EXTRACT_009", "The AI model is rate limited. Please try again shortly.", 429)
    UPSTREAM_AUTH_ERROR = ("EXTRACT_010", "The AI model credentials are missing or invalid.", 500)
    TRANSIENT_NETWORK_ERROR = ("EXTRACT_011", "Could not reach the AI model.", 500)
    EXTRACTION_FAILED = ("EXTRACT_012", "Failed to parse recipe with AI.", 500)
    CLIENT_DISCONNECTED = ("EXTRACT_013", "The client disconnected before extraction finished.", 499)

    def __init__(self, code: str, message: str, status_code: int):
        self._code = code
        self._message = message
        self._status_code = status_code

    @property
    def code(self) -> str:
        return self._code

    @property
    def message(self) -> str:
        return self._message

    @property
    def status_code(self) -> int:
        return self._status_code


class ExtractionException(BusinessException):
    def __init__(self, code: ExtractionErrorCode):
        super().__init__(code, status_code=code.status_code)
        self.code = code
