from __future__ import annotations

from urllib.parse import urlencode

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import HTMLResponse, Response

from src.app.deps import get_backend, read_image
from src.app.infra.backend import Backend
from src.app.templating import finish, render
from src.app.views.base import RECIPES_PATH
from src.app.views.recipe_list import RecipeListView

router = APIRouter(tags=["recipes"])


def _list_url(selected: str | None = None, mode: str | None = None) -> str:
    params = {}
    if selected:
        params["selected"] = selected
        if mode:
            params["mode"] = mode
    return f"{RECIPES_PATH}?{urlencode(params)}" if params else RECIPES_PATH


async def _loaded(backend: Backend) -> RecipeListView:
    view = RecipeListView(backend)
    await view.load()
    return view


@router.get("/recipe", response_class=HTMLResponse)
async def recipe_list(
    request: Request,
    selected: str | None = None,
    mode: str | None = None,
    backend: Backend = Depends(get_backend),
) -> HTMLResponse:
    view = await _loaded(backend)
    if selected and view.open_detail(selected) and mode == "edit":
        view.edit()
    return render(request, "recipe_list.html", view)


@router.post("/recipe/{recipe_id}/favorite")
async def toggle_favorite(
    request: Request,
    recipe_id: str,
    selected: str = Form(""),
    backend: Backend = Depends(get_backend),
) -> Response:
    view = await _loaded(backend)
    await view.toggle_favorite(recipe_id)
    return finish(request, view, _list_url(selected))


@router.post("/recipe/{recipe_id}/delete")
async def delete_recipe(
    request: Request,
    recipe_id: str,
    backend: Backend = Depends(get_backend),
) -> Response:
    view = await _loaded(backend)
    if view.open_detail(recipe_id):
        await view.delete(recipe_id)
    else:
        view.notifier.error("Recipe not found")
    return finish(request, view, _list_url(view.selected.id if view.selected else None))


@router.post("/recipe/{recipe_id}/edit", response_class=HTMLResponse)
async def save_recipe_edit(
    request: Request,
    recipe_id: str,
    title: str = Form(""),
    description: str = Form(""),
    ingredients: str = Form(""),
    backend: Backend = Depends(get_backend),
) -> Response:
    view = await _loaded(backend)
    if not view.open_detail(recipe_id):
        view.notifier.error("Recipe not found")
        return finish(request, view, RECIPES_PATH)
    if not view.edit():
        return finish(request, view, _list_url(recipe_id))
    if await view.save_edit(title, description, ingredients):
        return finish(request, view, _list_url(recipe_id))
    # keep the draft on screen
    return render(request, "recipe_list.html", view)


@router.post("/profile/avatar")
async def upload_avatar(
    request: Request,
    avatar: UploadFile | None = File(None),
    backend: Backend = Depends(get_backend),
) -> Response:
    view = RecipeListView(backend)
    await view.load_user_context()
    await view.upload_avatar(await read_image(avatar))
    return finish(request, view, RECIPES_PATH)


@router.post("/logout")
async def logout(
    request: Request,
    backend: Backend = Depends(get_backend),
) -> Response:
    view = RecipeListView(backend)
    await view.logout()
    return finish(request, view, RECIPES_PATH)
