"""Application settings — all configuration loaded from environment variables.

Usage:
    from config.settings import Settings
    settings = Settings()
    settings.validate()   # raises ValueError on an unusable configuration
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

DEFAULT_API_BASE_URL = "https://hn.algolia.com/api/v1"
DEFAULT_DB_PATH = Path(__file__).parent.parent / "data" / "session.db"


def _db_path_from_env() -> Path:
    env = os.environ.get("DB_PATH")
    return Path(env) if env else DEFAULT_DB_PATH


@dataclass
class Settings:
    """Centralised application configuration.

    All values are read from environment variables at instantiation time
    so that tests can override them by patching ``os.environ``.
    """

    # ── Search API ──────────────────────────────────────────────────────────
    api_base_url: str = field(
        default_factory=lambda: os.environ.get("HN_API_BASE_URL", DEFAULT_API_BASE_URL)
    )
    http_timeout: float = field(
        default_factory=lambda: float(os.environ.get("HTTP_TIMEOUT", "10"))
    )
    #: Serve the built-in demo stories instead of calling the API.
    offline: bool = field(
        default_factory=lambda: os.environ.get("OFFLINE", "0") == "1"
    )

    # ── Session ─────────────────────────────────────────────────────────────
    db_path: Path = field(default_factory=_db_path_from_env)
    search_storage_key: str = field(
        default_factory=lambda: os.environ.get("SEARCH_STORAGE_KEY", "search")
    )
    history_size: int = field(
        default_factory=lambda: int(os.environ.get("HISTORY_SIZE", "5"))
    )

    # ── Flask ───────────────────────────────────────────────────────────────
    debug: bool = field(
        default_factory=lambda: os.environ.get("FLASK_DEBUG", "0") == "1"
    )
    port: int = field(
        default_factory=lambda: int(os.environ.get("PORT", "5000"))
    )

    def validate(self) -> None:
        """Raise ``ValueError`` if any setting is unusable."""
        scheme: Optional[str] = urlparse(self.api_base_url).scheme
        if scheme not in ("http", "https"):
            raise ValueError(
                f"HN_API_BASE_URL must be an http(s) URL, got {self.api_base_url!r}."
            )
        if self.http_timeout <= 0:
            raise ValueError("HTTP_TIMEOUT must be a positive number of seconds.")
        if self.history_size < 0:
            raise ValueError("HISTORY_SIZE must not be negative.")
