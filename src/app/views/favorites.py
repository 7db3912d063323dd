from __future__ import annotations

import logging
from typing import Optional

from src.app.config import settings
from src.app.domain.errors import AuthenticationError, BackendError
from src.app.domain.models import Account, Recipe
from src.app.views import detail_state
from src.app.views.base import LOGIN_PATH, View
from src.app.views.detail_state import Browsing, Viewing
from src.app.views.recipe_list import truncate_description

logger = logging.getLogger(__name__)


class FavoritesView(View):
    """Read-only grid of the current user's favorite recipes."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.current_user: Optional[Account] = None
        self.favorite_ids: list[str] = []
        self.recipes: list[Recipe] = []
        self.state: Browsing | Viewing = Browsing()

    async def load(self) -> bool:
        try:
            account = await self._call(self.backend.auth.get_account)
        except AuthenticationError as exc:
            logger.info("No current user: %s", exc.reason)
            account = None
        if account is None:
            self.notifier.error("Please log in to view favorites")
            self.navigate(LOGIN_PATH)
            return False
        self.current_user = account

        try:
            ids = await self._call(self.backend.favorites.list_recipe_ids, account.id)
        except BackendError as exc:
            self.notifier.error(exc.reason)
            return False
        if self.disposed:
            return False
        self.favorite_ids = ids
        if not ids:
            return True

        try:
            recipes = await self._call(self.backend.recipes.get_by_ids, ids)
        except BackendError as exc:
            self.notifier.error(exc.reason)
            return False
        if not self.disposed:
            self.recipes = recipes
        return True

    @property
    def selected(self) -> Optional[Recipe]:
        return detail_state.selected_recipe(self.state)

    def open_detail(self, recipe_id: str) -> bool:
        recipe = next((r for r in self.recipes if r.id == str(recipe_id)), None)
        if recipe is None:
            return False
        self.state = detail_state.select(recipe)
        return True

    def close_detail(self) -> None:
        self.state = detail_state.close()

    def preview(self, recipe: Recipe) -> str:
        return truncate_description(recipe.description, settings.DESCRIPTION_PREVIEW_CHARS)
