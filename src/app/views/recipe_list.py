from __future__ import annotations

import asyncio
import logging
from typing import Optional

from src.app.config import settings
from src.app.domain.errors import (
    AuthenticationError,
    BackendError,
    FormValidationError,
    OwnershipError,
    StorageError,
)
from src.app.domain.models import Account, ImageFile, Profile, Recipe
from src.app.schemas.forms import RecipeEditForm, validate_form
from src.app.views import detail_state
from src.app.views.base import LOGIN_PATH, View
from src.app.views.detail_state import Browsing, DetailState, Editing, Viewing

logger = logging.getLogger(__name__)


def truncate_description(text: Optional[str], limit: int = 80) -> str:
    text = text or ""
    if len(text) > limit:
        return text[:limit] + "..."
    return text


class RecipeListView(View):
    """
    The hub page: every recipe, newest first, with the signed-in user's
    favorites and profile.

    Concurrent actions from the same user are not serialized; two writes
    racing on one recipe are resolved by the backend in arrival order.
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.recipes: list[Recipe] = []
        self.favorite_ids: set[str] = set()
        self.current_user: Optional[Account] = None
        self.profile: Optional[Profile] = None
        self.state: DetailState = Browsing()

    async def load(self) -> None:
        await asyncio.gather(self.list_recipes(), self.load_user_context())

    async def list_recipes(self) -> None:
        try:
            recipes = await self._call(self.backend.recipes.list_recent)
        except BackendError as exc:
            self.notifier.error(exc.reason)
            return
        if self.disposed:
            return
        self.recipes = recipes

    async def load_user_context(self) -> None:
        try:
            account = await self._call(self.backend.auth.get_account)
        except AuthenticationError as exc:
            logger.info("No current user: %s", exc.reason)
            account = None
        if self.disposed:
            return
        self.current_user = account
        if account is None:
            return
        await asyncio.gather(self._load_favorites(account.id), self._load_profile(account.id))

    async def _load_favorites(self, user_id: str) -> None:
        try:
            ids = await self._call(self.backend.favorites.list_recipe_ids, user_id)
        except BackendError as exc:
            logger.warning("Could not load favorites for user=%s: %s", user_id, exc.reason)
            self.notifier.error(exc.reason)
            return
        if not self.disposed:
            self.favorite_ids = set(ids)

    async def _load_profile(self, user_id: str) -> None:
        try:
            profile = await self._call(self.backend.profiles.get_by_id, user_id)
        except BackendError as exc:
            logger.warning("Could not load profile for user=%s: %s", user_id, exc.reason)
            self.notifier.error(exc.reason)
            return
        if not self.disposed and profile is not None:
            self.profile = profile

    # -- queries used by the page

    @property
    def favorites_count(self) -> int:
        return len(self.favorite_ids)

    @property
    def selected(self) -> Optional[Recipe]:
        return detail_state.selected_recipe(self.state)

    @property
    def editing(self) -> bool:
        return isinstance(self.state, Editing)

    def is_favorite(self, recipe: Recipe) -> bool:
        return recipe.id in self.favorite_ids

    def can_modify(self, recipe: Recipe) -> bool:
        return recipe.is_owned_by(self.current_user)

    def find(self, recipe_id: str) -> Optional[Recipe]:
        return next((r for r in self.recipes if r.id == str(recipe_id)), None)

    def preview(self, recipe: Recipe) -> str:
        return truncate_description(recipe.description, settings.DESCRIPTION_PREVIEW_CHARS)

    # -- detail panel

    def open_detail(self, recipe_id: str) -> bool:
        recipe = self.find(recipe_id)
        if recipe is None:
            return False
        self.state = detail_state.select(recipe)
        return True

    def close_detail(self) -> None:
        self.state = detail_state.close()

    def edit(self) -> bool:
        recipe = self.selected
        if recipe is None:
            return False
        try:
            self._require_owner(recipe)
        except OwnershipError as exc:
            self.notifier.error(str(exc))
            return False
        self.state = detail_state.start_edit(self.state)
        return True

    def cancel_edit(self) -> None:
        self.state = detail_state.cancel_edit(self.state)

    async def save_edit(self, title: str, description: str, ingredients: str) -> bool:
        if not isinstance(self.state, Editing):
            return False
        self.state = detail_state.revise(
            self.state, title=title or "", description=description or "", ingredients=ingredients or ""
        )
        recipe = self.state.recipe
        try:
            self._require_owner(recipe)
            form = validate_form(
                RecipeEditForm,
                {"title": title, "description": description, "ingredients": ingredients},
            )
        except OwnershipError as exc:
            self.notifier.error(str(exc))
            return False
        except FormValidationError as exc:
            for message in exc.errors:
                self.notifier.error(message)
            return False

        changes = form.changes()
        try:
            await self._call(self.backend.recipes.update, recipe.id, changes)
        except BackendError as exc:
            self.notifier.error(exc.reason or "Failed to update recipe")
            return False
        if self.disposed:
            return True

        updated = Recipe(
            id=recipe.id,
            title=changes["title"],
            description=changes["description"],
            image_url=recipe.image_url,
            ingredients=changes["ingredients"],
            user_id=recipe.user_id,
            created_at=recipe.created_at,
        )
        self.recipes = [updated if r.id == recipe.id else r for r in self.recipes]
        self.state = Viewing(recipe=updated)
        logger.info("Recipe %s updated by user=%s", recipe.id, recipe.user_id)
        self.notifier.success("Recipe updated successfully!")
        return True

    # -- card actions

    async def toggle_favorite(self, recipe_id: str) -> bool:
        if self.current_user is None:
            self.notifier.error("Please login first!")
            return False
        recipe = self.find(recipe_id)
        title = recipe.title if recipe else "Recipe"
        user_id = self.current_user.id
        recipe_id = str(recipe_id)

        if recipe_id in self.favorite_ids:
            try:
                await self._call(self.backend.favorites.remove, user_id, recipe_id)
            except BackendError as exc:
                self.notifier.error(exc.reason)
                return False
            self.favorite_ids.discard(recipe_id)
            self.notifier.info(f"{title} removed from favorites.")
        else:
            try:
                await self._call(self.backend.favorites.add, user_id, recipe_id)
            except BackendError as exc:
                self.notifier.error(exc.reason)
                return False
            self.favorite_ids.add(recipe_id)
            self.notifier.success(f"{title} added to favorites!")
        return True

    async def delete(self, recipe_id: str) -> bool:
        recipe = self.find(recipe_id)
        if recipe is None:
            self.notifier.error("Recipe not found")
            return False
        try:
            self._require_owner(recipe)
        except OwnershipError as exc:
            self.notifier.error(str(exc))
            return False

        try:
            await self._call(self.backend.recipes.delete, recipe.id)
        except BackendError as exc:
            self.notifier.error(exc.reason)
            return False

        logger.info("Recipe %s deleted by user=%s", recipe.id, recipe.user_id)
        self.notifier.success("Recipe deleted!")
        await self.list_recipes()
        self.close_detail()
        return True

    async def upload_avatar(self, image: Optional[ImageFile]) -> bool:
        user = self.current_user
        if user is None:
            self.notifier.error("Please login first!")
            return False
        if image is None or not image.content:
            self.notifier.error("Please choose an image")
            return False

        storage = self.backend.storage
        bucket = settings.AVATARS_BUCKET
        object_name = storage.avatar_name(user.id, image)
        try:
            await self._call(storage.upload, bucket, object_name, image)
        except StorageError:
            self.notifier.error("Error uploading avatar")
            return False
        try:
            avatar_url = await self._call(storage.get_public_url, bucket, object_name)
        except StorageError:
            self.notifier.error("Error reading avatar URL")
            return False
        try:
            profile = await self._call(
                self.backend.profiles.upsert,
                Profile(id=user.id, email=user.email, avatar_url=avatar_url),
            )
        except BackendError:
            self.notifier.error("Error updating profile")
            return False

        if not self.disposed:
            self.profile = profile
        self.notifier.success("Profile picture updated!")
        return True

    async def logout(self) -> bool:
        try:
            await self._call(self.backend.auth.sign_out)
        except AuthenticationError as exc:
            logger.warning("Sign out failed: %s", exc.reason)
            self.notifier.error("Error during logout")
            return False
        self.notifier.success("Logged out successfully!")
        self.navigate(LOGIN_PATH)
        return True

    def _require_owner(self, recipe: Recipe) -> None:
        if not self.can_modify(recipe):
            raise OwnershipError(recipe.id)
