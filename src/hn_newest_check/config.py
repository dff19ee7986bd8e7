from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

DEFAULT_START_URL = "https://news.ycombinator.com/newest"
DEFAULT_TARGET_COUNT = 100
DEFAULT_TIMEOUT_MS = 30_000
DEFAULT_USER_AGENT = "hn-newest-check/0.1"


class RunConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    target_count: int = Field(default=DEFAULT_TARGET_COUNT, ge=1)
    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, ge=1)


class Settings(BaseModel):
    target_count: int = Field(default=DEFAULT_TARGET_COUNT, ge=1)
    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, ge=1)
    headless: bool = True
    driver: Literal["browser", "http"] = "browser"
    start_url: str = DEFAULT_START_URL
    user_agent: str = DEFAULT_USER_AGENT
    artifacts_dir: Path | None = None
    log_level: str = "INFO"
    log_file: str = ""

    @field_validator("start_url")
    @classmethod
    def _validate_start_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("START_URL must use http:// or https://")
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        upper = value.upper()
        if upper not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"LOG_LEVEL must be a standard logging level, got {value!r}")
        return upper

    def run_config(self) -> RunConfig:
        return RunConfig(target_count=self.target_count, timeout_ms=self.timeout_ms)


def _env_value(environ: Mapping[str, str], key: str) -> str:
    return environ.get(key, "").strip()


def _env_flag(environ: Mapping[str, str], key: str, default: bool) -> bool:
    value = _env_value(environ, key).lower()
    if not value:
        return default
    return value not in {"false", "0", "no", "off"}


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    source = os.environ if environ is None else environ
    artifacts_dir = _env_value(source, "ARTIFACTS_DIR")
    try:
        payload = {
            "target_count": int(_env_value(source, "TARGET_COUNT") or DEFAULT_TARGET_COUNT),
            "timeout_ms": int(_env_value(source, "TIMEOUT_MS") or DEFAULT_TIMEOUT_MS),
            "headless": _env_flag(source, "HEADLESS", True),
            "driver": _env_value(source, "DRIVER").lower() or "browser",
            "start_url": _env_value(source, "START_URL") or DEFAULT_START_URL,
            "user_agent": _env_value(source, "USER_AGENT") or DEFAULT_USER_AGENT,
            "artifacts_dir": Path(artifacts_dir) if artifacts_dir else None,
            "log_level": _env_value(source, "LOG_LEVEL") or "INFO",
            "log_file": _env_value(source, "LOG_FILE"),
        }
        return Settings(**payload)
    except (ValidationError, ValueError) as exc:
        raise ValueError(str(exc)) from exc
