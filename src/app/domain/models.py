"""
Domain models for the recipe sharing application.
These are pure data structures with no infrastructure dependencies.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class NoticeLevel(str, Enum):
    """Severity of a user-visible notification."""
    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True)
class Notice:
    level: NoticeLevel
    message: str


@dataclass
class Account:
    """Identity managed by the external auth service."""
    id: str
    email: Optional[str] = None


@dataclass
class AuthSession:
    access_token: str
    refresh_token: str
    account: Account


@dataclass
class Profile:
    """Application metadata keyed by account id (1:1 with Account)."""
    id: str
    email: Optional[str] = None
    avatar_url: Optional[str] = None


@dataclass
class Recipe:
    """
    A user-authored post.
    Only the owner (user_id) may change title, description or ingredients.
    """
    id: str
    title: str
    description: str
    image_url: str
    ingredients: list[str] = field(default_factory=list)
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None

    def is_owned_by(self, account: Optional[Account]) -> bool:
        return account is not None and self.user_id is not None and account.id == self.user_id


@dataclass(frozen=True)
class Favorite:
    user_id: str
    recipe_id: str


@dataclass
class ImageFile:
    """A file picked by the user, held in memory until uploaded."""
    filename: str
    content: bytes
    content_type: Optional[str] = None

    @property
    def extension(self) -> str:
        if "." not in self.filename:
            return ""
        return self.filename.rsplit(".", 1)[-1]
