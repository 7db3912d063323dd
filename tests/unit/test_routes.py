from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from src.app.deps import get_backend
from src.app.main import app


@pytest.fixture
def client(backend) -> Iterator[TestClient]:
    app.dependency_overrides[get_backend] = lambda: backend
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _add_soup(client: TestClient) -> None:
    response = client.post(
        "/add",
        data={"title": "Soup", "description": "Warm soup", "ingredients": ["water", "salt"]},
        files={"image": ("soup.png", b"\x89PNG fake", "image/png")},
        follow_redirects=False,
    )
    assert response.status_code == 303
    assert response.headers["location"] == "/recipe"


class TestPages:
    def test_health(self, client: TestClient) -> None:
        assert client.get("/health").json() == {"ok": True}

    def test_login_and_signup_pages(self, client: TestClient) -> None:
        assert client.get("/").status_code == 200
        assert client.get("/signup").status_code == 200

    def test_recipe_list_is_public(self, client: TestClient) -> None:
        response = client.get("/recipe")
        assert response.status_code == 200
        assert "No recipes yet." in response.text


class TestAccessControl:
    def test_add_page_requires_session(self, client: TestClient) -> None:
        response = client.get("/add", follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == "/"

    def test_add_submit_requires_session(self, client: TestClient, backend) -> None:
        response = client.post("/add", data={"title": "Soup"}, follow_redirects=False)
        assert response.status_code == 303
        assert backend.recipes.rows == {}

    def test_favorites_redirects_with_notice(self, client: TestClient) -> None:
        response = client.get("/favorites", follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == "/"
        assert "Please log in to view favorites" in client.get("/").text


class TestAuthFlow:
    def test_signup_then_login(self, client: TestClient, backend) -> None:
        response = client.post(
            "/signup",
            data={"email": "a@x.com", "password": "pw123456"},
            follow_redirects=False,
        )
        assert response.headers["location"] == "/"
        assert "Signup successful! Please check your email." in client.get("/").text

        response = client.post(
            "/login",
            data={"email": "a@x.com", "password": "pw123456"},
            follow_redirects=False,
        )
        assert response.headers["location"] == "/recipe"
        assert "Login successful!" in client.get("/recipe").text

    def test_failed_login_stays_on_login(self, client: TestClient) -> None:
        response = client.post(
            "/login",
            data={"email": "a@x.com", "password": "nope"},
            follow_redirects=False,
        )
        assert response.headers["location"] == "/"
        assert "Invalid login credentials" in client.get("/").text

    def test_logout(self, client: TestClient, backend) -> None:
        backend.auth.login_as("a@x.com")
        response = client.post("/logout", follow_redirects=False)
        assert response.headers["location"] == "/"
        assert backend.auth.session is None


class TestRecipeFlow:
    def test_add_favorite_edit_delete(self, client: TestClient, backend) -> None:
        account = backend.auth.login_as("a@x.com")
        assert "Enter recipe title" in client.get("/add").text

        _add_soup(client)
        [recipe] = backend.recipes.rows.values()
        assert recipe.user_id == account.id
        assert recipe.ingredients == ["water", "salt"]
        page = client.get("/recipe").text
        assert "Recipe added successfully!" in page
        assert "Soup" in page

        client.post(f"/recipe/{recipe.id}/favorite", follow_redirects=False)
        assert backend.favorites.pairs == [(account.id, recipe.id)]
        assert "Soup" in client.get("/favorites").text

        response = client.post(
            f"/recipe/{recipe.id}/edit",
            data={"title": "Stew", "description": "Thick", "ingredients": "salt, pepper"},
            follow_redirects=False,
        )
        assert response.status_code == 303
        assert response.headers["location"] == f"/recipe?selected={recipe.id}"
        assert backend.recipes.rows[recipe.id].ingredients == ["salt", "pepper"]

        response = client.post(f"/recipe/{recipe.id}/delete", follow_redirects=False)
        assert response.headers["location"] == "/recipe"
        assert backend.recipes.rows == {}
        assert "Recipe deleted!" in client.get("/recipe").text

    def test_invalid_add_keeps_draft(self, client: TestClient, backend) -> None:
        backend.auth.login_as("a@x.com")

        response = client.post(
            "/add",
            data={"title": "Soup", "description": "Warm soup", "ingredients": ["water"]},
            follow_redirects=False,
        )

        assert response.status_code == 200
        assert "Please upload an image" in response.text
        assert 'value="Soup"' in response.text
        assert backend.recipes.rows == {}

    def test_invalid_edit_rerenders_draft(self, client: TestClient, backend, make_recipe) -> None:
        account = backend.auth.login_as("a@x.com")
        recipe = make_recipe(account, "Soup")

        response = client.post(
            f"/recipe/{recipe.id}/edit",
            data={"title": "Stew", "description": "", "ingredients": "salt"},
            follow_redirects=False,
        )

        assert response.status_code == 200
        assert "Please enter description" in response.text
        assert 'value="Stew"' in response.text
        assert backend.recipes.rows[recipe.id].title == "Soup"

    def test_favorite_keeps_open_detail(self, client: TestClient, backend, make_recipe) -> None:
        account = backend.auth.login_as("a@x.com")
        recipe = make_recipe(account, "Soup")

        page = client.get(f"/recipe?selected={recipe.id}").text
        assert f'name="selected" value="{recipe.id}"' in page

        response = client.post(
            f"/recipe/{recipe.id}/favorite",
            data={"selected": recipe.id},
            follow_redirects=False,
        )

        assert response.headers["location"] == f"/recipe?selected={recipe.id}"
        assert backend.favorites.pairs == [(account.id, recipe.id)]

    def test_edit_mode_only_for_owner(self, client: TestClient, backend, make_recipe) -> None:
        recipe = make_recipe(backend.auth.register("owner@x.com"), "Soup")
        backend.auth.login_as("other@x.com")

        page = client.get(f"/recipe?selected={recipe.id}&mode=edit").text

        assert "Edit Recipe" not in page
        assert "Ingredients:" in page

    def test_avatar_upload(self, client: TestClient, backend) -> None:
        account = backend.auth.login_as("a@x.com")

        response = client.post(
            "/profile/avatar",
            files={"avatar": ("me.jpg", b"jpeg", "image/jpeg")},
            follow_redirects=False,
        )

        assert response.headers["location"] == "/recipe"
        assert backend.profiles.rows[account.id].avatar_url.endswith(".jpg")
        assert "Profile picture updated!" in client.get("/recipe").text
