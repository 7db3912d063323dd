# src/app/infra/storage/supabase_provider.py
"""
Supabase Storage provider implementation.
"""
from __future__ import annotations

import logging

from supabase import Client

from src.app.domain.errors import StorageError, StorageUploadError, reason_of
from src.app.domain.models import ImageFile
from src.app.infra.storage.base import StorageProvider

logger = logging.getLogger(__name__)


class SupabaseStorageProvider(StorageProvider):
    def __init__(self, client: Client):
        self._storage = client.storage

    def upload(self, bucket: str, object_name: str, image: ImageFile) -> None:
        file_options = {"content-type": image.content_type or "application/octet-stream"}
        try:
            self._storage.from_(bucket).upload(
                path=object_name,
                file=image.content,
                file_options=file_options,
            )
        except Exception as exc:
            logger.warning("Upload to %s/%s failed: %s", bucket, object_name, exc)
            raise StorageUploadError(bucket, object_name, reason_of(exc)) from exc

        logger.info("Uploaded %s/%s (%d bytes)", bucket, object_name, len(image.content))

    def get_public_url(self, bucket: str, object_name: str) -> str:
        try:
            url = self._storage.from_(bucket).get_public_url(object_name)
        except Exception as exc:
            raise StorageError("get_public_url", reason_of(exc)) from exc
        return str(url)
