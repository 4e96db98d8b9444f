"""Stable surface for reading, writing and checking xref map files.

Constants are importable eagerly; serializer and validator helpers are loaded
on first access so that importing the constants does not pull in PyYAML.
"""

from contract.xrefmap import (
    CONFIG_FILENAME,
    DEFAULT_LINK_TIMEOUT,
    DEFAULT_PACKAGE_REGEX,
    DEFAULT_UNITY_API_URL,
    XREFMAP_FILENAME,
    YAML_MIME_HEADER,
)


def __getattr__(name: str) -> object:
    if name in {
        "XrefMapFormatError",
        "dumps_xref_map",
        "load_xref_map",
        "loads_xref_map",
        "save_xref_map",
    }:
        from contract import serialize

        return getattr(serialize, name)

    if name in {"ValidationMessage", "ValidationResult", "validate_xref_map"}:
        from contract import validation

        return getattr(validation, name)

    msg = f"module 'contract' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_LINK_TIMEOUT",
    "DEFAULT_PACKAGE_REGEX",
    "DEFAULT_UNITY_API_URL",
    "XREFMAP_FILENAME",
    "YAML_MIME_HEADER",
    "ValidationMessage",
    "ValidationResult",
    "XrefMapFormatError",
    "dumps_xref_map",
    "load_xref_map",
    "loads_xref_map",
    "save_xref_map",
    "validate_xref_map",
]
