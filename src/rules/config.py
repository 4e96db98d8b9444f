from __future__ import annotations

import re
from typing import Any

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

from contract.xrefmap import (
    CONFIG_FILENAME,
    DEFAULT_LINK_TIMEOUT,
    DEFAULT_PACKAGE_REGEX,
    DEFAULT_UNITY_API_URL,
)
from xref.resolve import SiteMode, detect_site_mode

from pathlib import Path


class XrefMapsConfig(BaseModel):
    """Configuration for fixing and checking xref maps."""

    model_config = ConfigDict(extra="forbid")

    api_url: str = Field(
        default=DEFAULT_UNITY_API_URL,
        description="Base URL of the online API docs; {0} is the short version",
    )
    trim_namespaces: list[str] = Field(
        default_factory=list,
        description="Namespaces removed from editor-site page names",
    )
    package_regex: str = Field(
        default=DEFAULT_PACKAGE_REGEX,
        description="Regular expression matching package API URLs",
    )
    site_mode: SiteMode | None = Field(
        default=None,
        description="Explicit site layout (default: detected from api_url)",
    )
    timeout: float = Field(
        default=DEFAULT_LINK_TIMEOUT,
        gt=0,
        description="Seconds to wait for each link check",
    )

    @field_validator("package_regex")
    @classmethod
    def validate_package_regex(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as e:
            msg = f"Invalid package_regex '{v}': {e}"
            raise ValueError(msg) from e
        return v

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        if not v.endswith("/"):
            msg = f"api_url must end with '/': {v}"
            raise ValueError(msg)
        return v

    def resolve_site_mode(self, api_url: str | None = None) -> SiteMode:
        """Return the explicit site mode, or detect it from the API URL."""
        if self.site_mode is not None:
            return self.site_mode
        return detect_site_mode(api_url or self.api_url, self.package_regex)


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def load_config(root: Path) -> XrefMapsConfig:
    """Load configuration from xrefmaps.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return XrefMapsConfig()

    try:
        with config_path.open("rb") as f:
            data: dict[str, Any] = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return XrefMapsConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
