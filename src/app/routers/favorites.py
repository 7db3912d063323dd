from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, Response

from src.app.deps import get_backend
from src.app.infra.backend import Backend
from src.app.templating import finish, render
from src.app.views.base import LOGIN_PATH
from src.app.views.favorites import FavoritesView

router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.get("", response_class=HTMLResponse)
async def favorites_page(
    request: Request,
    selected: str | None = None,
    backend: Backend = Depends(get_backend),
) -> Response:
    view = FavoritesView(backend)
    await view.load()
    if view.redirect_to:
        return finish(request, view, LOGIN_PATH)
    if selected:
        view.open_detail(selected)
    return render(request, "favorites.html", view)
