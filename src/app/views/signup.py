from __future__ import annotations

import logging

from src.app.domain.errors import AuthenticationError, BackendError, FormValidationError
from src.app.domain.models import Profile
from src.app.schemas.forms import CredentialsForm, validate_form
from src.app.views.base import LOGIN_PATH, View

logger = logging.getLogger(__name__)


class SignupView(View):
    async def submit(self, email: str, password: str) -> bool:
        try:
            form = validate_form(CredentialsForm, {"email": email, "password": password})
        except FormValidationError as exc:
            for message in exc.errors:
                self.notifier.error(message)
            return False

        try:
            account = await self._call(self.backend.auth.sign_up, form.email, form.password)
        except AuthenticationError as exc:
            self.notifier.error(exc.reason)
            return False

        if account is not None:
            profile = Profile(id=account.id, email=form.email, avatar_url=None)
            try:
                await self._call(self.backend.profiles.insert, profile)
            except BackendError as exc:
                # the account exists already; keep the signup successful
                logger.error("Profile insert error for user=%s: %s", account.id, exc.reason)
                self.notifier.error("Profile creation failed")
            else:
                logger.info("Created profile for user=%s", account.id)

        self.notifier.success("Signup successful! Please check your email.")
        self.navigate(LOGIN_PATH)
        return True
