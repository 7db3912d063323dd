from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Iterable, Optional

from supabase import Client

from src.app.domain.errors import BackendError, reason_of
from src.app.domain.models import Profile, Recipe
from src.app.infra.db.base import FavoriteRepository, ProfileRepository, RecipeRepository

logger = logging.getLogger(__name__)


def _parse_datetime(value: str | datetime | None) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        return None

    try:
        normalized = value.replace("Z", "+00:00") if value.endswith("Z") else value
        return datetime.fromisoformat(normalized)
    except ValueError:
        return None


def _safe_str(value: object) -> str | None:
    return str(value) if value else None


def _ingredients(value: object) -> list[str]:
    if isinstance(value, list):
        return [str(item) for item in value]
    if isinstance(value, str) and value:
        # legacy rows stored a comma separated string
        return [part.strip() for part in value.split(",") if part.strip()]
    return []


def _row_to_recipe(row: dict[str, Any]) -> Recipe:
    return Recipe(
        id=str(row["id"]),
        title=str(row.get("title") or ""),
        description=str(row.get("description") or ""),
        image_url=str(row.get("image_url") or ""),
        ingredients=_ingredients(row.get("ingredients")),
        user_id=_safe_str(row.get("user_id")),
        created_at=_parse_datetime(row.get("created_at")),
    )


def _row_to_profile(row: dict[str, Any]) -> Profile:
    return Profile(
        id=str(row["id"]),
        email=_safe_str(row.get("email")),
        avatar_url=_safe_str(row.get("avatar_url")),
    )


class _SupabaseTable:
    TABLE_NAME = ""

    def __init__(self, client: Client):
        self._client = client

    def _table(self):
        return self._client.table(self.TABLE_NAME)

    def _execute(self, operation: str, query) -> list[dict[str, Any]]:
        try:
            response = query.execute()
        except Exception as exc:
            logger.warning("%s.%s failed: %s", self.TABLE_NAME, operation, exc)
            raise BackendError(operation, reason_of(exc)) from exc
        return response.data or []


class SupabaseProfileRepository(_SupabaseTable, ProfileRepository):
    TABLE_NAME = "profiles"

    def insert(self, profile: Profile) -> None:
        payload = {"id": profile.id, "email": profile.email, "avatar_url": profile.avatar_url}
        self._execute("insert", self._table().insert(payload))

    def get_by_id(self, profile_id: str) -> Optional[Profile]:
        rows = self._execute(
            "get_by_id",
            self._table().select("*").eq("id", profile_id).limit(1),
        )
        return _row_to_profile(rows[0]) if rows else None

    def upsert(self, profile: Profile) -> Profile:
        payload = {"id": profile.id, "email": profile.email, "avatar_url": profile.avatar_url}
        rows = self._execute("upsert", self._table().upsert(payload))
        return _row_to_profile(rows[0]) if rows else profile


class SupabaseRecipeRepository(_SupabaseTable, RecipeRepository):
    TABLE_NAME = "recipes"

    def insert(
        self,
        *,
        title: str,
        description: str,
        image_url: str,
        ingredients: list[str],
        user_id: str,
    ) -> str:
        payload = {
            "title": title,
            "description": description,
            "image_url": image_url,
            "ingredients": list(ingredients),
            "user_id": user_id,
        }
        rows = self._execute("insert", self._table().insert(payload))
        if not rows:
            raise BackendError("insert", "Recipe was not created")
        return str(rows[0]["id"])

    def list_recent(self) -> list[Recipe]:
        rows = self._execute(
            "list_recent",
            self._table().select("*").order("created_at", desc=True),
        )
        return [_row_to_recipe(row) for row in rows]

    def get_by_ids(self, recipe_ids: Iterable[str]) -> list[Recipe]:
        ids = [str(rid) for rid in recipe_ids if rid]
        if not ids:
            return []
        rows = self._execute("get_by_ids", self._table().select("*").in_("id", ids))
        return [_row_to_recipe(row) for row in rows]

    def update(self, recipe_id: str, changes: dict[str, Any]) -> None:
        self._execute("update", self._table().update(changes).eq("id", recipe_id))

    def delete(self, recipe_id: str) -> None:
        self._execute("delete", self._table().delete().eq("id", recipe_id))


class SupabaseFavoriteRepository(_SupabaseTable, FavoriteRepository):
    TABLE_NAME = "favorites"

    def list_recipe_ids(self, user_id: str) -> list[str]:
        rows = self._execute(
            "list_recipe_ids",
            self._table().select("recipe_id").eq("user_id", user_id),
        )
        return [str(row["recipe_id"]) for row in rows if row.get("recipe_id") is not None]

    def add(self, user_id: str, recipe_id: str) -> None:
        self._execute("add", self._table().insert({"user_id": user_id, "recipe_id": recipe_id}))

    def remove(self, user_id: str, recipe_id: str) -> None:
        self._execute(
            "remove",
            self._table().delete().eq("user_id", user_id).eq("recipe_id", recipe_id),
        )
