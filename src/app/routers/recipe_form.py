from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import HTMLResponse, Response

from src.app.deps import get_backend, read_image, require_session
from src.app.domain.models import AuthSession
from src.app.infra.backend import Backend
from src.app.templating import finish, render
from src.app.views.base import RECIPES_PATH
from src.app.views.recipe_form import RecipeFormView

router = APIRouter(prefix="/add", tags=["recipes"])


@router.get("", response_class=HTMLResponse)
async def add_recipe_page(
    request: Request,
    session: AuthSession = Depends(require_session),
) -> HTMLResponse:
    return render(request, "recipe_form.html", draft={"ingredients": [""]})


@router.post("", response_class=HTMLResponse)
async def add_recipe(
    request: Request,
    title: str = Form(""),
    description: str = Form(""),
    ingredients: list[str] = Form([]),
    image: UploadFile | None = File(None),
    session: AuthSession = Depends(require_session),
    backend: Backend = Depends(get_backend),
) -> Response:
    view = RecipeFormView(backend)
    recipe_id = await view.submit(title, description, ingredients, await read_image(image))
    if recipe_id is not None or view.redirect_to:
        return finish(request, view, RECIPES_PATH)
    draft = {
        "title": title,
        "description": description,
        "ingredients": ingredients or [""],
    }
    return render(request, "recipe_form.html", view, draft=draft)
