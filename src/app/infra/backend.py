from __future__ import annotations

from dataclasses import dataclass

from supabase import Client, ClientOptions, create_client

from src.app.infra.auth.base import AuthProvider
from src.app.infra.auth.supabase_auth import SupabaseAuthProvider
from src.app.infra.db.base import FavoriteRepository, ProfileRepository, RecipeRepository
from src.app.infra.db.supabase_repos import (
    SupabaseFavoriteRepository,
    SupabaseProfileRepository,
    SupabaseRecipeRepository,
)
from src.app.infra.storage.base import StorageProvider
from src.app.infra.storage.supabase_provider import SupabaseStorageProvider


@dataclass
class Backend:
    """Every external collaborator a view may talk to."""
    auth: AuthProvider
    profiles: ProfileRepository
    recipes: RecipeRepository
    favorites: FavoriteRepository
    storage: StorageProvider


def create_user_client(url: str, anon_key: str) -> Client:
    # one client per browser session; tokens live in the signed cookie, not in the client
    options = ClientOptions(persist_session=False, auto_refresh_token=False)
    return create_client(url, anon_key, options=options)


def supabase_backend(client: Client) -> Backend:
    return Backend(
        auth=SupabaseAuthProvider(client),
        profiles=SupabaseProfileRepository(client),
        recipes=SupabaseRecipeRepository(client),
        favorites=SupabaseFavoriteRepository(client),
        storage=SupabaseStorageProvider(client),
    )
