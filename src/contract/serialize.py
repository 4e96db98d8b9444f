"""YAML (de)serialization of xref maps."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import yaml
from pydantic import ValidationError

from contract.xrefmap import YAML_MIME_HEADER
from xref.models import ReferenceMap

if TYPE_CHECKING:
    from pathlib import Path

# The generator emits bare ``<digit>:`` tokens that are not mapping keys.
_DIGIT_COLON = re.compile(r"(\d):")


class XrefMapFormatError(Exception):
    """Raised when an xref map document cannot be parsed."""


def strip_digit_colons(text: str) -> str:
    return _DIGIT_COLON.sub(r"\1", text)


def loads_xref_map(text: str) -> ReferenceMap:
    """Parse an xref map document.

    Scalars are loaded as strings so that names such as ``1.0`` or ``True``
    keep their textual form.
    """
    try:
        data = yaml.load(strip_digit_colons(text), Loader=yaml.BaseLoader)
    except yaml.YAMLError as e:
        msg = f"Invalid YAML: {e}"
        raise XrefMapFormatError(msg) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        msg = "Expected a mapping at the top level of the xref map"
        raise XrefMapFormatError(msg)

    try:
        return ReferenceMap.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid xref map: {e}"
        raise XrefMapFormatError(msg) from e


def load_xref_map(path: Path) -> ReferenceMap:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        msg = f"Failed to read {path}: {e}"
        raise XrefMapFormatError(msg) from e
    return loads_xref_map(text)


def dumps_xref_map(xref_map: ReferenceMap) -> str:
    body = yaml.safe_dump(
        xref_map.to_yaml_dict(),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=4096,
    )
    return f"{YAML_MIME_HEADER}\n{body}"


def save_xref_map(path: Path, xref_map: ReferenceMap) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps_xref_map(xref_map), encoding="utf-8")


__all__ = [
    "XrefMapFormatError",
    "dumps_xref_map",
    "load_xref_map",
    "loads_xref_map",
    "save_xref_map",
    "strip_digit_colons",
]
