"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API can start without any configuration; in production you should at
least override ``SECRET_KEY``, ``ADMIN_TOKEN`` and ``DATABASE_URL``.

The carousel limits are policy values rather than technical ones and
are therefore configurable as well.
"""

import os
from dataclasses import dataclass


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Noïta API")
    api_version: str = os.getenv("API_VERSION", "2.0.0")
    api_prefix: str = os.getenv("API_PREFIX", "/api")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))
    algorithm: str = os.getenv("ALGORITHM", "HS256")

    # Optional long-lived token for the site administrator.  Requests
    # carrying it in the Authorization header bypass token decoding.
    admin_static_token: str = os.getenv("ADMIN_TOKEN", "")

    # Path of the SQLite database.  Relative paths are resolved against
    # the working directory by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "noita.db")
    # Seconds a writer waits for the database lock before giving up.
    database_timeout: float = float(os.getenv("DATABASE_TIMEOUT", "30"))

    # Uploaded images are written to ``upload_dir`` and served under
    # ``image_url_prefix``.
    upload_dir: str = os.getenv("UPLOAD_DIR", "public/images")
    upload_max_size: int = int(os.getenv("UPLOAD_MAX_SIZE", str(10 * 1024 * 1024)))
    image_url_prefix: str = os.getenv("IMAGE_URL_PREFIX", "/images")
    image_placeholder: str = os.getenv("IMAGE_PLACEHOLDER", "temp")

    carousel_min_pictures: int = int(os.getenv("CAROUSEL_MIN_PICTURES", "3"))
    carousel_max_pictures: int = int(os.getenv("CAROUSEL_MAX_PICTURES", "100"))
    carousel_max_position: int = int(os.getenv("CAROUSEL_MAX_POSITION", "100"))
    # Parking slot used while two pictures swap positions.  Must lie
    # outside the range of real positions.
    carousel_position_sentinel: int = int(os.getenv("CAROUSEL_POSITION_SENTINEL", "1000"))

    cors_origins: str = os.getenv("CORS_ORIGINS", "https://noita.ch,http://localhost:3000")

    @property
    def cors_origin_list(self) -> list[str]:
        return _split_csv(self.cors_origins)


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should therefore be set before importing this module.
settings = Settings()
