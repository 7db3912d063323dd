from __future__ import annotations

from pydantic import AnyUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8-sig",
        case_sensitive=False,
        extra="ignore",
    )

    SUPABASE_URL: AnyUrl
    SUPABASE_ANON_KEY: str
    SESSION_SECRET_KEY: str
    APP_ENV: str = "local"
    LOG_LEVEL: str = "INFO"

    RECIPE_IMAGES_BUCKET: str = "recipe-images"
    AVATARS_BUCKET: str = "avatars"

    SESSION_COOKIE_NAME: str = "recipe_share_session"
    SESSION_MAX_AGE_SECONDS: int = 14 * 24 * 60 * 60

    DESCRIPTION_PREVIEW_CHARS: int = 80


settings = Settings()
