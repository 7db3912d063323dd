"""
Which recipe, if any, is open in the detail panel and whether it is being edited.

    Browsing --select--> Viewing --edit--> Editing
    Editing --save/cancel--> Viewing --close--> Browsing
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Union

from src.app.domain.models import Recipe
from src.app.services.ingredients import join_ingredients


@dataclass(frozen=True)
class EditDraft:
    title: str
    description: str
    ingredients: str

    @classmethod
    def from_recipe(cls, recipe: Recipe) -> "EditDraft":
        return cls(
            title=recipe.title,
            description=recipe.description,
            ingredients=join_ingredients(recipe.ingredients),
        )


@dataclass(frozen=True)
class Browsing:
    pass


@dataclass(frozen=True)
class Viewing:
    recipe: Recipe


@dataclass(frozen=True)
class Editing:
    recipe: Recipe
    draft: EditDraft


DetailState = Union[Browsing, Viewing, Editing]


def select(recipe: Recipe) -> Viewing:
    return Viewing(recipe=recipe)


def start_edit(state: DetailState) -> Editing:
    if isinstance(state, Editing):
        return state
    if not isinstance(state, Viewing):
        raise ValueError("No recipe selected")
    return Editing(recipe=state.recipe, draft=EditDraft.from_recipe(state.recipe))


def revise(state: Editing, **values: str) -> Editing:
    return Editing(recipe=state.recipe, draft=replace(state.draft, **values))


def cancel_edit(state: DetailState) -> DetailState:
    if isinstance(state, Editing):
        return Viewing(recipe=state.recipe)
    return state


def close() -> Browsing:
    return Browsing()


def selected_recipe(state: DetailState) -> Optional[Recipe]:
    if isinstance(state, (Viewing, Editing)):
        return state.recipe
    return None
