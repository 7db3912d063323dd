# src/app/main.py
from __future__ import annotations

import logging
import sys
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from src.app.config import settings
from src.app.domain.errors import LoginRequiredError
from src.app.routers.auth import router as auth_router
from src.app.routers.favorites import router as favorites_router
from src.app.routers.recipe_form import router as recipe_form_router
from src.app.routers.recipes import router as recipes_router
from src.app.views.base import LOGIN_PATH

# stdout logging, same format for dev and containers
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Recipe Share", version="0.1.0")

app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET_KEY,
    session_cookie=settings.SESSION_COOKIE_NAME,
    max_age=settings.SESSION_MAX_AGE_SECONDS,
    same_site="lax",
    https_only=settings.APP_ENV != "local",
)

static_dir = Path(__file__).resolve().parent / "static"
app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

app.include_router(auth_router)
app.include_router(recipes_router)
app.include_router(recipe_form_router)
app.include_router(favorites_router)


@app.exception_handler(LoginRequiredError)
async def login_required(request: Request, exc: LoginRequiredError) -> RedirectResponse:
    logger.info("Redirecting anonymous visitor away from %s", request.url.path)
    return RedirectResponse(LOGIN_PATH, status_code=303)


@app.get("/health")
def health():
    return {"ok": True}
