import json
import logging

from app.recipe.exception import ExtractionErrorCode, ExtractionException
from app.recipe.schema import RecipeDraft


class RecipeResponseValidator:
    def __init__(self):
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def __reject_constant(name: str):
        raise ValueError(f"non-standard JSON constant: {name}")

    def validate(self, raw: str) -> RecipeDraft:
        """Parse model output into a RecipeDraft without touching its fields."""
        try:
            parsed = json.loads(raw, parse_constant=self.__reject_constant)
        except (TypeError, ValueError, RecursionError) as e:
            self.logger.error(f"Model output is not valid JSON: error={e}, raw={raw!r}")
            raise ExtractionException(ExtractionErrorCode.INVALID_MODEL_OUTPUT)

        if not isinstance(parsed, dict):
            self.logger.error(f"Model output is not a JSON object: type={type(parsed).__name__}, raw={raw!r}")
            raise ExtractionException(ExtractionErrorCode.INVALID_MODEL_OUTPUT)

        return parsed
