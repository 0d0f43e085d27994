"""Client configuration.

Why here:
- Centralizes environment variables (pydantic-settings) away from the CLI.
- Lets adapters (HTTP client factory, request engine) read config the same way.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import set_key
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """`$XDG_CONFIG_HOME/rest-client`, falling back to `~/.config/rest-client`."""

    root = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(root) / "rest-client"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def write_user_env_vars(values: dict[str, str | None]) -> Path:
    """Set keys in the user .env, leaving other entries untouched. `None` values are skipped."""

    env_path = get_user_env_file()
    if not env_path.exists():
        env_path.parent.mkdir(parents=True, exist_ok=True)
        env_path.write_text("# rest-client user config (.env)\n", encoding="utf-8")

    for key, value in values.items():
        if value is not None:
            set_key(env_path, key, value, quote_mode="never")
    return env_path


class ClientSettings(BaseSettings):
    """Central client configuration.

    Why pydantic-settings:
    - Typed and validated at the edge (env vars, .env files).
    - One configuration contract for the CLI and the adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="REST_CLIENT_",
        extra="ignore",
        case_sensitive=False,
        # Order: project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    base_uri: str = Field(
        default="http://localhost/",
        min_length=1,
        description="Absolute base URI every call path is resolved against.",
    )
    auth_token: str | None = Field(
        default=None,
        description="Bearer token sent in the Authorization header.",
    )
    client_name: str = Field(
        default="rest-client",
        min_length=1,
        description="Name of the registered HTTP client (also the User-Agent product).",
    )
    client_version: str = Field(
        default="0.1.0",
        min_length=1,
        description="Version reported in the User-Agent header.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Per request timeout (seconds).",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level used by the CLI.",
    )
