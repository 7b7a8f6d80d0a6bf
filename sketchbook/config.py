"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    sketchbook_env: str = "development"
    sketchbook_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:5173"]

    # Pen catalog JSON; the bundled catalog when empty
    pen_catalog_path: str = ""

    # Seed used when a render request carries none; random when unset
    default_seed: int | None = None

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
