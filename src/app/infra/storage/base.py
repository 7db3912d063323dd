# src/app/infra/storage/base.py
"""
Abstract base class for blob storage providers.
Objects are only ever referenced through their public URL.
"""
from __future__ import annotations

import re
import time
from abc import ABC, abstractmethod

from src.app.domain.models import ImageFile


def _epoch_millis() -> int:
    return int(time.time() * 1000)


class StorageProvider(ABC):
    """
    Abstract interface for bucket storage operations.

    Implementations:
    - SupabaseStorageProvider: Supabase Storage buckets
    """

    @abstractmethod
    def upload(self, bucket: str, object_name: str, image: ImageFile) -> None:
        """
        Store the file under object_name in bucket.

        Raises:
            StorageUploadError: If the upload was rejected
        """
        pass

    @abstractmethod
    def get_public_url(self, bucket: str, object_name: str) -> str:
        pass

    def recipe_image_name(self, image: ImageFile, now_ms: int | None = None) -> str:
        """
        Name for a recipe image: {epoch_ms}-{original filename}.
        """
        stamp = now_ms if now_ms is not None else _epoch_millis()
        safe_filename = re.sub(r"[^a-zA-Z0-9._-]", "_", image.filename)
        return f"{stamp}-{safe_filename}"

    def avatar_name(self, user_id: str, image: ImageFile, now_ms: int | None = None) -> str:
        """
        Name for an avatar: {user_id}-{epoch_ms}.{extension}.
        """
        stamp = now_ms if now_ms is not None else _epoch_millis()
        extension = image.extension or "png"
        return f"{user_id}-{stamp}.{extension}"
