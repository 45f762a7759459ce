from typing import Optional

RECIPE_KEYWORDS = ("recipe", "ingredients", "cook", "bake", "boil", "serve")


def looks_like_recipe(text: Optional[str]) -> bool:
    """Cheap keyword check used to decide whether transcription is needed."""
    if not text:
        return False
    lowered = text.lower()
    return any(word in lowered for word in RECIPE_KEYWORDS)
