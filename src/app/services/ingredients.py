"""Ingredients are stored as a list but edited as one comma separated string."""
from __future__ import annotations

from typing import Iterable

SEPARATOR = ","


def join_ingredients(ingredients: Iterable[str] | str | None) -> str:
    if ingredients is None:
        return ""
    if isinstance(ingredients, str):
        return ingredients
    return f"{SEPARATOR} ".join(ingredients)


def split_ingredients(text: str | None) -> list[str]:
    """Split on commas, trim each piece, drop empty pieces."""
    if not text:
        return []
    return [piece.strip() for piece in text.split(SEPARATOR) if piece.strip()]
