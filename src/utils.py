"""Shared utilities for xref map tooling."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import orjson

if TYPE_CHECKING:
    from pathlib import Path

_VERSION = re.compile(r"(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)")


def short_version(tag: str) -> str:
    """Return the ``major.minor`` part of a release tag.

    Examples:
        >>> short_version("6000.0.1f1")
        '6000.0'
        >>> short_version("v1.17.0")
        '1.17'
    """
    match = _VERSION.search(tag)
    if match is None:
        msg = f"No major.minor.patch version in tag '{tag}'"
        raise ValueError(msg)
    return f"{match.group('major')}.{match.group('minor')}"


def format_api_url(api_url: str, version: str | None = None) -> str:
    """Substitute the short version of ``version`` into an API URL template.

    Templates use ``{0}`` as the version placeholder, e.g.
    ``https://docs.unity3d.com/{0}/Documentation/ScriptReference/``. URLs
    without a placeholder are returned unchanged.
    """
    if "{0}" not in api_url:
        return api_url
    if version is None:
        msg = f"API URL '{api_url}' needs a version for its {{0}} placeholder"
        raise ValueError(msg)
    return api_url.replace("{0}", short_version(version))


def format_release_path(path: str, version: str | None = None) -> str:
    """Substitute the full release tag into an output path template.

    ``_site/{0}/xrefmap.yml`` with ``6000.0.1f1`` gives
    ``_site/6000.0.1f1/xrefmap.yml``.
    """
    if "{0}" not in path:
        return path
    if version is None:
        msg = f"Output path '{path}' needs a version for its {{0}} placeholder"
        raise ValueError(msg)
    return path.replace("{0}", version)


def dumps_json(payload: object) -> bytes:
    opts = orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2
    return orjson.dumps(payload, option=opts)


def write_json(path: Path, payload: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(dumps_json(payload))
