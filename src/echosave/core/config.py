"""Configuration management for EchoSave.

Backend credentials come from the environment (optionally a ``.env`` file);
everything else may be set in an optional YAML file.

Example YAML::

    echosave:
      table: code_groups
      workspace_root: ~/projects/notes
      log_level: DEBUG
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlparse

import yaml
from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ValidationError, ValidationInfo, field_validator

from .errors import ConfigError
from .logging import DEFAULT_LOG_DIR
from .supabase_store import DEFAULT_TABLE

URL_ENV = "SUPABASE_URL"
KEY_ENV = "SUPABASE_ANON_KEY"


class Settings(BaseModel):
    """Application settings."""

    # Supabase credentials
    supabase_url: str = ""
    supabase_key: str = ""
    table: str = DEFAULT_TABLE

    # Where opened files are written
    workspace_root: Optional[Path] = None
    fallback_dir: Path = Path.home() / ".echosave" / "files"

    # Logging
    log_dir: Path = DEFAULT_LOG_DIR
    log_level: str = "INFO"

    request_timeout: float = 30.0

    @field_validator("workspace_root", "fallback_dir", "log_dir", mode="before")
    @classmethod
    def _coerce_path(cls, v, info: ValidationInfo):
        # Blank values mean "use the default"
        if v is None or v == "":
            return cls.model_fields[info.field_name].default
        return Path(v).expanduser() if not isinstance(v, Path) else v.expanduser()

    def credential_problems(self) -> List[str]:
        """Describe what is wrong with the backend credentials (empty when fine)."""
        problems = []
        if not self.supabase_url:
            problems.append(f"{URL_ENV} is not set")
        elif urlparse(self.supabase_url).scheme not in ("http", "https"):
            problems.append(f"{URL_ENV} must be an http(s) URL: {self.supabase_url}")
        if not self.supabase_key:
            problems.append(f"{KEY_ENV} is not set")
        return problems


def check_credentials(settings: Settings) -> None:
    """Raise ConfigError when the backend credentials are unusable."""
    problems = settings.credential_problems()
    if problems:
        raise ConfigError("Supabase credentials are missing! " + "; ".join(problems))


def load_settings(config_path: Optional[Path] = None, env_file: Optional[Path] = None) -> Settings:
    """Load Settings from the environment, a ``.env`` file and an optional YAML file."""
    if env_file is not None:
        load_dotenv(env_file, override=False)
    else:
        load_dotenv(find_dotenv(usecwd=True), override=False)

    data = {}
    if config_path:
        p = Path(config_path).expanduser()
        if not p.exists():
            raise ConfigError(f"Config file not found: {p}")
        try:
            with open(p, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load config from {p}: {e}")
        if not isinstance(data, dict):
            raise ConfigError(f"Config file must contain a mapping: {p}")
        # Allow top-level 'echosave' key or flat structure
        if isinstance(data.get("echosave"), dict):
            data = data["echosave"]

    if os.environ.get(URL_ENV):
        data["supabase_url"] = os.environ[URL_ENV]
    if os.environ.get(KEY_ENV):
        data["supabase_key"] = os.environ[KEY_ENV]

    try:
        return Settings(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}")
