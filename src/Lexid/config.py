"""Settings loader for Lexid."""

from pathlib import Path
from typing import Any, Literal

import tomllib
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _norm_level(value: Any, default: str) -> str:
    # [logging] console/to_file accept a level name or a legacy bool
    if isinstance(value, str):
        return value.upper()
    if isinstance(value, bool):
        return default if value else "NONE"
    return default


def _toml_settings_source() -> dict[str, Any]:
    """Load settings from config.toml with keys mapped to Settings fields.

    This source has LOWER priority than env/.env so those can override TOML.
    """
    cfg_path = Path("config.toml")
    if not cfg_path.exists():
        return {}
    with cfg_path.open("rb") as f:
        t = tomllib.load(f)

    log_cfg = t.get("logging", {}) or {}
    overall = str(log_cfg.get("level", "INFO")).upper()
    out: dict[str, Any] = {
        "env": (t.get("app", {}) or {}).get("env", "dev"),
        "logging_level": overall,
        "logging_console": _norm_level(log_cfg.get("console"), overall),
        # File output stays off unless [logging].to_file asks for it
        "logging_file": _norm_level(log_cfg.get("to_file", False), overall),
        "logging_file_path": log_cfg.get("file_path", "logs/lexid.jsonl"),
        "logging_max_bytes": log_cfg.get("max_bytes", 5_000_000),
        "logging_backup_count": log_cfg.get("backup_count", 5),
    }

    cli_cfg = t.get("cli", {}) or {}
    if "output" in cli_cfg:
        out["cli_output"] = cli_cfg["output"]
    return out


class Settings(BaseSettings):
    env: str = Field(default="dev")

    # --- Logging ---
    logging_level: str = "INFO"
    # Per-handler levels: INFO|DEBUG|WARNING|ERROR|CRITICAL|NONE
    logging_console: str = "INFO"
    logging_file: str = "NONE"
    logging_file_path: str = "logs/lexid.jsonl"
    logging_max_bytes: int = 5_000_000
    logging_backup_count: int = 5

    # --- CLI ---
    cli_output: Literal["text", "json"] = Field(
        default="text", description="Default output format for scripts/cli.py."
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
        env_file=".env",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # Precedence (highest to lowest):
        # 1) init_settings (explicit overrides in code/tests)
        # 2) dotenv (.env in cwd)
        # 3) env_settings (OS env)
        # 4) TOML (config.toml in cwd)
        # 5) file_secret_settings
        return (
            init_settings,
            dotenv_settings,
            env_settings,
            _toml_settings_source,
            file_secret_settings,
        )


def load_settings() -> Settings:
    return Settings()
