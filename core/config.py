"""
core/config.py -- Centralized configuration for the blogstack services via pydantic-settings.

All environment variable reads happen here. No module should call os.getenv()
or os.environ.get() directly -- import get_settings() instead.

  Singleton via lru_cache: get_settings() instantiates Settings once at first
      call and returns the cached instance on every subsequent call.

  BaseSettings (pydantic-settings): field names map to env var names
      (e.g. jwt_key -> JWT_KEY). Type coercion is built in.

JWT_KEY is deliberately not validated at startup. A service started without
it still serves every route; token issuance fails at request time and the
error translator collapses that failure to the generic 400 response.

Layer rule: core/ is the kernel. This module may not import from api/,
auth/, or comments/.
"""

import logging
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("blogstack.config")


class Settings(BaseSettings):
    """Settings for both services, loaded from the environment and .env file.

    All fields have defaults so Settings() can be instantiated in tests
    without a real .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Core
    # ------------------------------------------------------------------

    debug: bool = False
    log_level: str = "INFO"

    # ------------------------------------------------------------------
    # Auth service
    # ------------------------------------------------------------------

    # Empty string means "not configured"; signing raises at request time.
    jwt_key: str = ""
    secure_cookies: bool = False
    session_cookie_name: str = "session"
    auth_host: str = "0.0.0.0"  # noqa: S104 -- container bind address
    auth_port: int = 3000
    auth_db_url: str = "sqlite:///blogstack_auth.db"

    # ------------------------------------------------------------------
    # Comments service
    # ------------------------------------------------------------------

    comments_host: str = "0.0.0.0"  # noqa: S104
    comments_port: int = 4001
    # Empty string selects the in-memory store.
    comments_db_url: str = ""
    cors_origins: list[str] = ["*"]


@lru_cache
def get_settings() -> Settings:
    """Return the application Settings singleton.

    In tests: call get_settings.cache_clear() after changing environment
    variables so the next call picks them up.
    """
    return Settings()
