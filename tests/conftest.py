from __future__ import annotations

import os

os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SESSION_SECRET_KEY", "test-session-secret")

import itertools
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, Optional
from uuid import uuid4

import pytest

from src.app.domain.errors import AuthenticationError, BackendError, StorageError, StorageUploadError
from src.app.domain.models import Account, AuthSession, ImageFile, Profile, Recipe
from src.app.infra.auth.base import SIGNED_IN, SIGNED_OUT, AuthProvider, SessionListener, Unsubscribe
from src.app.infra.backend import Backend
from src.app.infra.db.base import FavoriteRepository, ProfileRepository, RecipeRepository
from src.app.infra.storage.base import StorageProvider

EPOCH = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)


class AuthProviderStub(AuthProvider):
    def __init__(self) -> None:
        self.accounts: dict[str, tuple[Account, str]] = {}
        self.session: Optional[AuthSession] = None
        self.listeners: list[SessionListener] = []
        self.sign_up_error: Optional[str] = None
        self.sign_out_error: Optional[str] = None
        self.withhold_account = False

    def sign_up(self, email: str, password: str) -> Optional[Account]:
        if self.sign_up_error:
            raise AuthenticationError("sign_up", self.sign_up_error)
        if email in self.accounts:
            raise AuthenticationError("sign_up", "User already registered")
        account = Account(id=uuid4().hex, email=email)
        self.accounts[email] = (account, password)
        return None if self.withhold_account else account

    def sign_in(self, email: str, password: str) -> AuthSession:
        known = self.accounts.get(email)
        if known is None or known[1] != password:
            raise AuthenticationError("sign_in", "Invalid login credentials")
        self.session = AuthSession(
            access_token=f"access-{known[0].id}",
            refresh_token=f"refresh-{known[0].id}",
            account=known[0],
        )
        self.emit(SIGNED_IN, self.session)
        return self.session

    def sign_out(self) -> None:
        if self.sign_out_error:
            raise AuthenticationError("sign_out", self.sign_out_error)
        self.session = None
        self.emit(SIGNED_OUT, None)

    def get_session(self) -> Optional[AuthSession]:
        return self.session

    def get_account(self) -> Optional[Account]:
        return self.session.account if self.session else None

    def subscribe(self, listener: SessionListener) -> Unsubscribe:
        self.listeners.append(listener)
        return lambda: self.listeners.remove(listener)

    def emit(self, event: str, session: Optional[AuthSession]) -> None:
        for listener in list(self.listeners):
            listener(event, session)

    def register(self, email: str, password: str = "pw123456") -> Account:
        account = Account(id=uuid4().hex, email=email)
        self.accounts[email] = (account, password)
        return account

    def login_as(self, email: str, password: str = "pw123456") -> Account:
        if email not in self.accounts:
            self.register(email, password)
        self.sign_in(email, self.accounts[email][1])
        return self.accounts[email][0]


class _FailingStub:
    def __init__(self) -> None:
        self.failures: dict[str, str] = {}
        self.calls: list[str] = []

    def _enter(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.failures:
            raise BackendError(operation, self.failures[operation])


class ProfileRepositoryStub(_FailingStub, ProfileRepository):
    def __init__(self) -> None:
        super().__init__()
        self.rows: dict[str, Profile] = {}

    def insert(self, profile: Profile) -> None:
        self._enter("insert")
        if profile.id in self.rows:
            raise BackendError("insert", "duplicate key value violates unique constraint")
        self.rows[profile.id] = replace(profile)

    def get_by_id(self, profile_id: str) -> Optional[Profile]:
        self._enter("get_by_id")
        row = self.rows.get(profile_id)
        return replace(row) if row else None

    def upsert(self, profile: Profile) -> Profile:
        self._enter("upsert")
        self.rows[profile.id] = replace(profile)
        return replace(profile)


class RecipeRepositoryStub(_FailingStub, RecipeRepository):
    def __init__(self) -> None:
        super().__init__()
        self.rows: dict[str, Recipe] = {}
        self._ids = itertools.count(1)
        self._ticks = itertools.count(0)

    def insert(
        self,
        *,
        title: str,
        description: str,
        image_url: str,
        ingredients: list[str],
        user_id: str,
    ) -> str:
        self._enter("insert")
        recipe_id = str(next(self._ids))
        self.rows[recipe_id] = Recipe(
            id=recipe_id,
            title=title,
            description=description,
            image_url=image_url,
            ingredients=list(ingredients),
            user_id=user_id,
            created_at=EPOCH + timedelta(minutes=next(self._ticks)),
        )
        return recipe_id

    def list_recent(self) -> list[Recipe]:
        self._enter("list_recent")
        rows = sorted(self.rows.values(), key=lambda r: r.created_at, reverse=True)
        return [replace(r, ingredients=list(r.ingredients)) for r in rows]

    def get_by_ids(self, recipe_ids: Iterable[str]) -> list[Recipe]:
        self._enter("get_by_ids")
        wanted = set(recipe_ids)
        return [replace(r) for r in self.rows.values() if r.id in wanted]

    def update(self, recipe_id: str, changes: dict[str, Any]) -> None:
        self._enter("update")
        if recipe_id in self.rows:
            self.rows[recipe_id] = replace(self.rows[recipe_id], **changes)

    def delete(self, recipe_id: str) -> None:
        self._enter("delete")
        self.rows.pop(recipe_id, None)


class FavoriteRepositoryStub(_FailingStub, FavoriteRepository):
    def __init__(self) -> None:
        super().__init__()
        self.pairs: list[tuple[str, str]] = []

    def list_recipe_ids(self, user_id: str) -> list[str]:
        self._enter("list_recipe_ids")
        return [recipe_id for owner, recipe_id in self.pairs if owner == user_id]

    def add(self, user_id: str, recipe_id: str) -> None:
        self._enter("add")
        if (user_id, recipe_id) in self.pairs:
            raise BackendError("add", "duplicate key value violates unique constraint")
        self.pairs.append((user_id, recipe_id))

    def remove(self, user_id: str, recipe_id: str) -> None:
        self._enter("remove")
        self.pairs = [p for p in self.pairs if p != (user_id, recipe_id)]


class StorageProviderStub(StorageProvider):
    BASE_URL = "https://storage.test/object/public"

    def __init__(self) -> None:
        self.objects: dict[tuple[str, str], ImageFile] = {}
        self.should_fail_upload = False
        self.should_fail_url = False

    def upload(self, bucket: str, object_name: str, image: ImageFile) -> None:
        if self.should_fail_upload:
            raise StorageUploadError(bucket, object_name, "Simulated upload failure")
        self.objects[(bucket, object_name)] = image

    def get_public_url(self, bucket: str, object_name: str) -> str:
        if self.should_fail_url:
            raise StorageError("get_public_url", "Simulated URL failure")
        return f"{self.BASE_URL}/{bucket}/{object_name}"


def make_backend() -> Backend:
    return Backend(
        auth=AuthProviderStub(),
        profiles=ProfileRepositoryStub(),
        recipes=RecipeRepositoryStub(),
        favorites=FavoriteRepositoryStub(),
        storage=StorageProviderStub(),
    )


@pytest.fixture
def backend() -> Backend:
    return make_backend()


@pytest.fixture
def image() -> ImageFile:
    return ImageFile(filename="soup.png", content=b"\x89PNG fake", content_type="image/png")


@pytest.fixture
def make_recipe(backend: Backend):
    def _make(owner: Account, title: str = "Soup", **fields: Any) -> Recipe:
        recipe_id = backend.recipes.insert(
            title=title,
            description=fields.get("description", f"{title} description"),
            image_url=fields.get("image_url", f"https://img.test/{title}.png"),
            ingredients=fields.get("ingredients", ["water", "salt"]),
            user_id=owner.id,
        )
        return backend.recipes.rows[recipe_id]

    return _make
