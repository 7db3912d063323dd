from __future__ import annotations

import logging

from src.app.domain.errors import AuthenticationError, FormValidationError
from src.app.schemas.forms import CredentialsForm, validate_form
from src.app.views.base import RECIPES_PATH, View

logger = logging.getLogger(__name__)


class LoginView(View):
    async def submit(self, email: str, password: str) -> bool:
        try:
            form = validate_form(CredentialsForm, {"email": email, "password": password})
        except FormValidationError as exc:
            for message in exc.errors:
                self.notifier.error(message)
            return False

        try:
            session = await self._call(self.backend.auth.sign_in, form.email, form.password)
        except AuthenticationError as exc:
            self.notifier.error(exc.reason)
            return False

        logger.info("User %s signed in", session.account.id)
        self.notifier.success("Login successful!")
        self.navigate(RECIPES_PATH)
        return True
