"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) so the CLI only
  overrides what the user passed explicitly.
- Lets adapters (HTTP, alias lookup) read config the same way.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Default alias configuration directory (same place `mc` uses).

    `MC_CONFIG_DIR` is honoured through `AppSettings.config_dir`; this is only
    the fallback.
    """

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("USERPROFILE", str(Path.home())))
        return base / "mc"
    return Path.home() / ".mc"


def get_alias_config_file(config_dir: Path) -> Path:
    return config_dir / "config.json"


class AppSettings(BaseSettings):
    """Central application configuration.

    Every global CLI flag has an `MC_*` counterpart here, so scripts can set
    `MC_JSON=1` once instead of repeating `--json`.
    """

    model_config = SettingsConfigDict(
        env_prefix="MC_",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    config_dir: Path = Field(
        default_factory=get_user_config_dir,
        description="Directory holding config.json with the alias table.",
    )
    region: str = Field(
        default="us-east-1",
        min_length=1,
        description="Region used when signing requests (SigV4).",
    )
    http_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    user_agent: str = Field(
        default="mc-replicate/0.1",
        min_length=1,
        description="User-Agent sent to the storage server.",
    )
    insecure: bool = Field(
        default=False,
        description="Skip TLS certificate verification.",
    )
    json_output: bool = Field(
        default=False,
        validation_alias="MC_JSON",
        description="Emit JSON documents instead of colored text.",
    )
    no_color: bool = Field(
        default=False,
        description="Disable colored output.",
    )
    quiet: bool = Field(
        default=False,
        description="Suppress success messages.",
    )
    debug: bool = Field(
        default=False,
        description="Log HTTP traffic and internal decisions to stderr.",
    )

    def override(self, **flags: bool | Path | None) -> "AppSettings":
        """Return a copy where CLI flags win over env/.env values.

        `None` and `False` mean "flag not passed" and keep the settings value.
        """

        updates = {key: value for key, value in flags.items() if value not in (None, False)}
        return self.model_copy(update=updates)
