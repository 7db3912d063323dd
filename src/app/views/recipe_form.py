from __future__ import annotations

import logging
from typing import Optional

from src.app.config import settings
from src.app.domain.errors import AuthenticationError, BackendError, FormValidationError, StorageError
from src.app.domain.models import ImageFile
from src.app.schemas.forms import RecipeDraft, validate_form
from src.app.views.base import LOGIN_PATH, RECIPES_PATH, View

logger = logging.getLogger(__name__)


class RecipeFormView(View):
    async def submit(
        self,
        title: str,
        description: str,
        ingredients: list[str],
        image: Optional[ImageFile],
    ) -> Optional[str]:
        """
        Upload the image, then create the recipe row pointing at its public URL.
        Nothing is written when validation or the upload fails.

        Returns:
            The new recipe id, or None when nothing was created
        """
        errors: list[str] = []
        draft: Optional[RecipeDraft] = None
        try:
            draft = validate_form(
                RecipeDraft,
                {"title": title, "description": description, "ingredients": list(ingredients or [])},
            )
        except FormValidationError as exc:
            errors.extend(exc.errors)
        if image is None or not image.content:
            errors.append("Please upload an image")
        if draft is None or errors:
            for message in errors:
                self.notifier.error(message)
            return None

        try:
            account = await self._call(self.backend.auth.get_account)
        except AuthenticationError as exc:
            logger.warning("Could not resolve current user: %s", exc.reason)
            account = None
        if account is None:
            self.notifier.error("Please login first!")
            self.navigate(LOGIN_PATH)
            return None

        storage = self.backend.storage
        bucket = settings.RECIPE_IMAGES_BUCKET
        object_name = storage.recipe_image_name(image)
        try:
            await self._call(storage.upload, bucket, object_name, image)
            image_url = await self._call(storage.get_public_url, bucket, object_name)
        except StorageError:
            self.notifier.error("Image upload failed")
            return None

        try:
            recipe_id = await self._call(
                self.backend.recipes.insert,
                title=draft.title,
                description=draft.description,
                image_url=image_url,
                ingredients=draft.ingredients,
                user_id=account.id,
            )
        except BackendError as exc:
            self.notifier.error(exc.reason)
            return None

        logger.info("Recipe %s created by user=%s", recipe_id, account.id)
        self.notifier.success("Recipe added successfully!")
        self.navigate(RECIPES_PATH)
        return recipe_id
