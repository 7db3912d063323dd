from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from src.app.services.notifications import flash, pop_flashed
from src.app.views.base import View

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))


def render(
    request: Request,
    name: str,
    view: View | None = None,
    **context: Any,
) -> HTMLResponse:
    notices = pop_flashed(request.session)
    if view is not None:
        notices.extend(view.notifier.notices)
        view.dispose()
    return templates.TemplateResponse(
        request,
        name,
        {"view": view, "notices": notices, **context},
    )


def redirect(path: str) -> RedirectResponse:
    return RedirectResponse(path, status_code=303)


def finish(request: Request, view: View, fallback: str) -> RedirectResponse:
    """Flash what the view reported and send the browser where it asked to go."""
    flash(request.session, view.notifier.notices)
    view.dispose()
    return redirect(view.redirect_to or fallback)
