from __future__ import annotations

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from src.app.deps import get_backend
from src.app.infra.backend import Backend
from src.app.templating import finish, render
from src.app.views.base import LOGIN_PATH, SIGNUP_PATH
from src.app.views.login import LoginView
from src.app.views.signup import SignupView

router = APIRouter(tags=["auth"])


@router.get("/", response_class=HTMLResponse)
async def login_page(request: Request) -> HTMLResponse:
    return render(request, "login.html")


@router.post("/login")
async def login(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    backend: Backend = Depends(get_backend),
) -> RedirectResponse:
    view = LoginView(backend)
    await view.submit(email, password)
    return finish(request, view, LOGIN_PATH)


@router.get("/signup", response_class=HTMLResponse)
async def signup_page(request: Request) -> HTMLResponse:
    return render(request, "signup.html")


@router.post("/signup")
async def signup(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    backend: Backend = Depends(get_backend),
) -> RedirectResponse:
    view = SignupView(backend)
    await view.submit(email, password)
    return finish(request, view, SIGNUP_PATH)
