"""Configuration for xref map tooling."""

from rules.config import (
    ConfigError,
    XrefMapsConfig,
    load_config,
)

__all__ = [
    "ConfigError",
    "XrefMapsConfig",
    "load_config",
]
