import logging
from typing import Optional

from openai import OpenAI

from app.constants import ErrorMessages
from app.recipe.exception import ExtractionErrorCode, ExtractionException

logger = logging.getLogger(__name__)


def create_openai_client(api_key: Optional[str], timeout: float) -> OpenAI:
    # No SDK retries
    if not api_key:
        logger.error(ErrorMessages.OPENAI_API_KEY_MISSING)
        raise ExtractionException(ExtractionErrorCode.UPSTREAM_AUTH_ERROR)
    return OpenAI(api_key=api_key, timeout=timeout, max_retries=0)
