"""Configuration centralisée (backend core) avec validation minimale."""

from __future__ import annotations

import os
from dataclasses import dataclass

CATALOG_BACKENDS: tuple[str, ...] = ("json", "sql")


def _bool_env(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AppSettings:
    app_env: str = "development"
    catalog_backend: str = "json"
    data_file: str = "stockpile_data.json"
    database_url: str = ""
    db_pool_size: int = 10
    db_pool_max_overflow: int = 20
    seed_defaults: bool = True
    cors_allowed_origins: list[str] = None
    jwt_secret_keys: list[str] = None

    @staticmethod
    def load() -> "AppSettings":
        backend = os.getenv("CATALOG_BACKEND", "json").strip().lower()
        if backend not in CATALOG_BACKENDS:
            raise ValueError(
                f"CATALOG_BACKEND invalide ({backend!r}). Choisissez parmi {', '.join(CATALOG_BACKENDS)}."
            )
        cors_raw = os.getenv("CORS_ALLOWED_ORIGINS")
        cors = [entry.strip() for entry in cors_raw.split(",") if entry.strip()] if cors_raw else []
        jwt_raw = os.getenv("JWT_SECRET_KEYS") or os.getenv("JWT_SECRET_KEY") or ""
        jwt_keys = [entry.strip() for entry in jwt_raw.split(",") if entry.strip()]
        return AppSettings(
            app_env=os.getenv("APP_ENV", os.getenv("ENV", "development")).lower(),
            catalog_backend=backend,
            data_file=os.getenv("STOCKPILE_DATA_FILE", "stockpile_data.json"),
            database_url=os.getenv("DATABASE_URL", ""),
            db_pool_size=int(os.getenv("DB_POOL_SIZE", "10")),
            db_pool_max_overflow=int(os.getenv("DB_POOL_MAX_OVERFLOW", "20")),
            seed_defaults=not _bool_env("SKIP_SEED"),
            cors_allowed_origins=cors,
            jwt_secret_keys=jwt_keys,
        )
