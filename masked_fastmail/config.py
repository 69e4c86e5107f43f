from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from .errors import ConfigError

DEFAULT_API_URL = "https://api.fastmail.com/jmap/api"

ENV_ACCOUNT_ID = "FASTMAIL_ACCOUNT_ID"
ENV_API_KEY = "FASTMAIL_API_KEY"
ENV_API_URL = "FASTMAIL_API_URL"


class ProviderSettings(BaseModel):
    account_id: str
    api_key: str
    api_url: str = DEFAULT_API_URL
    timeout_seconds: float = 30.0

    @field_validator("account_id", "api_key", mode="before")
    @classmethod
    def _strip_credentials(cls, value: Any) -> str:
        text = "" if value is None else str(value).strip()
        if not text:
            raise ValueError("must not be blank")
        return text

    @field_validator("timeout_seconds")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("must be positive")
        return value


class Settings(BaseModel):
    provider: ProviderSettings

    @classmethod
    def load(cls, path: Path) -> "Settings":
        return cls.model_validate(_read_yaml(path))

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        path: Optional[Path] = None,
    ) -> "Settings":
        """Optional YAML file first, then FASTMAIL_* environment variables on top."""
        environ = os.environ if environ is None else environ
        raw = _read_yaml(path) if path else {}
        section = raw.get("provider") or {}
        if not isinstance(section, dict):
            raise ConfigError(f"config {path}: 'provider' must be a mapping")
        provider: Dict[str, Any] = dict(section)
        overrides = {
            "account_id": environ.get(ENV_ACCOUNT_ID),
            "api_key": environ.get(ENV_API_KEY),
            "api_url": environ.get(ENV_API_URL),
        }
        for key, value in overrides.items():
            if value:
                provider[key] = value
        if not str(provider.get("account_id") or "").strip():
            raise ConfigError(f"{ENV_ACCOUNT_ID} environment variable must be set")
        if not str(provider.get("api_key") or "").strip():
            raise ConfigError(f"{ENV_API_KEY} environment variable must be set")
        try:
            return cls.model_validate({**raw, "provider": provider})
        except ValidationError as exc:
            raise ConfigError(f"invalid configuration: {exc}") from exc


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except OSError as exc:
        raise ConfigError(f"cannot read config {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {path}: {exc}") from exc
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"config {path} must contain a mapping")
    return raw


def find_config(explicit_path: Optional[Path]) -> Optional[Path]:
    if explicit_path:
        return explicit_path
    cwd = Path.cwd()
    candidates = (
        cwd / "masked_fastmail.yaml",
        cwd / "masked_fastmail.yml",
        Path.home() / ".config" / "masked_fastmail" / "config.yaml",
    )
    for candidate in candidates:
        if candidate.exists():
            return candidate
    return None
