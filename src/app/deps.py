# src/app/deps.py (one backend client per browser session, tokens kept in the signed cookie)

from __future__ import annotations

import logging
from typing import Iterator

from fastapi import Depends, Request, UploadFile

from src.app.config import settings
from src.app.domain.errors import AuthenticationError, LoginRequiredError
from src.app.domain.models import AuthSession, ImageFile
from src.app.infra.auth.supabase_auth import SupabaseAuthProvider
from src.app.infra.backend import Backend, create_user_client, supabase_backend
from src.app.services.session_cookie import SessionCookie
from src.app.views.session_gate import SessionGate

logger = logging.getLogger(__name__)


def get_backend(request: Request) -> Iterator[Backend]:
    client = create_user_client(str(settings.SUPABASE_URL), settings.SUPABASE_ANON_KEY)
    backend = supabase_backend(client)
    cookie = SessionCookie(request.session)

    tokens = cookie.tokens()
    if tokens and isinstance(backend.auth, SupabaseAuthProvider):
        try:
            restored = backend.auth.restore(*tokens)
        except AuthenticationError as exc:
            logger.info("Stored session rejected: %s", exc.reason)
            cookie.forget()
        else:
            if restored is not None:
                cookie.remember(restored)

    unsubscribe = backend.auth.subscribe(cookie.on_change)
    try:
        yield backend
    finally:
        unsubscribe()


async def require_session(backend: Backend = Depends(get_backend)) -> AuthSession:
    """Gate for pages that need a signed-in user; redirects to login otherwise."""
    async with SessionGate(backend.auth) as gate:
        if not gate.allowed or gate.session is None:
            raise LoginRequiredError()
        return gate.session


async def read_image(upload: UploadFile | None) -> ImageFile | None:
    """Turn a multipart file field into an in-memory image; None when nothing was picked."""
    if upload is None or not upload.filename:
        return None
    content = await upload.read()
    if not content:
        return None
    return ImageFile(filename=upload.filename, content=content, content_type=upload.content_type)
