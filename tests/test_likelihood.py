import pytest

from app.recipe.likelihood import RECIPE_KEYWORDS, looks_like_recipe


def test_keyword_match_is_case_insensitive():
    assert looks_like_recipe("Here's my favorite BAKE recipe!") is True


def test_text_without_keywords_is_rejected():
    assert looks_like_recipe("nice weather today") is False


@pytest.mark.parametrize("keyword", RECIPE_KEYWORDS)
def test_every_keyword_matches_in_upper_case(keyword):
    """Each keyword alone is enough, regardless of case."""
    assert looks_like_recipe(f"watch me {keyword.upper()} tonight") is True


@pytest.mark.parametrize("text", [None, "", "   "])
def test_missing_text_is_rejected(text):
    assert looks_like_recipe(text) is False


def test_substring_match_counts():
    # "cooking" contains "cook"
    assert looks_like_recipe("Sunday cooking vlog") is True
