# src/app/infra/db/base.py
"""
Abstract repositories for the three tables the application consumes.
The schema itself is owned by the backend; these only describe the calls made.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional

from src.app.domain.models import Profile, Recipe


class ProfileRepository(ABC):

    @abstractmethod
    def insert(self, profile: Profile) -> None:
        pass

    @abstractmethod
    def get_by_id(self, profile_id: str) -> Optional[Profile]:
        pass

    @abstractmethod
    def upsert(self, profile: Profile) -> Profile:
        """Insert or replace the row keyed on profile.id."""
        pass


class RecipeRepository(ABC):

    @abstractmethod
    def insert(
        self,
        *,
        title: str,
        description: str,
        image_url: str,
        ingredients: list[str],
        user_id: str,
    ) -> str:
        """
        Create a recipe row.

        Returns:
            The id assigned by the store
        """
        pass

    @abstractmethod
    def list_recent(self) -> list[Recipe]:
        """All recipes ordered by created_at, newest first."""
        pass

    @abstractmethod
    def get_by_ids(self, recipe_ids: Iterable[str]) -> list[Recipe]:
        pass

    @abstractmethod
    def update(self, recipe_id: str, changes: dict[str, Any]) -> None:
        pass

    @abstractmethod
    def delete(self, recipe_id: str) -> None:
        pass


class FavoriteRepository(ABC):

    @abstractmethod
    def list_recipe_ids(self, user_id: str) -> list[str]:
        pass

    @abstractmethod
    def add(self, user_id: str, recipe_id: str) -> None:
        pass

    @abstractmethod
    def remove(self, user_id: str, recipe_id: str) -> None:
        pass
