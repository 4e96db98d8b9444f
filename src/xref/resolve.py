"""Href resolution for xref map references.

Two documentation layouts are supported:

- ``editor``: the versioned scripting reference, one page per type or
  member, e.g. ``ScriptReference/GameObject-transform.html``.
- ``package``: per-package API docs, one page per type with members
  addressed by fragment, e.g.
  ``api/UnityEngine.InputSystem.InputActionAsset.html#UnityEngine_InputSystem_InputActionAsset_Enable``.

Both resolvers are pure functions of their inputs.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import Enum

from contract.xrefmap import DEFAULT_PACKAGE_REGEX
from xref.comment_id import MEMBER_KINDS, SymbolKind, parse_comment_id
from xref.errors import ResolutionError
from xref.models import ReferenceRecord

_GENERIC_ARITY = re.compile(r"`{2}\d")
_TRAILING_POINTER = re.compile(r"\*$")
_PARAMETER_LIST = re.compile(r"\(.*\)")
_LOWERCASE_MEMBER = re.compile(r"\.([a-z].*)$")
_NON_WORD = re.compile(r"\W")
_METHOD_NAME = re.compile(r"([^<>]*).*\(")

# Applied in order after ``.op_`` has become ``.operator_``.
OPERATOR_SUBSTITUTIONS: tuple[tuple[str, str], ...] = (
    (".operator_Subtraction", ".operator_subtract"),
    (".operator_Multiply", ".operator_multiply"),
    (".operator_Division", ".operator_divide"),
    (".operator_Addition", ".operator_add"),
    (".operator_Equality", ".operator_eq"),
    (".operator_Implicit~", ".operator_"),
)


class SiteMode(str, Enum):
    """Documentation site layout targeted by the resolved hrefs."""

    EDITOR = "editor"
    PACKAGE = "package"


def detect_site_mode(api_url: str, package_regex: str = DEFAULT_PACKAGE_REGEX) -> SiteMode:
    """Pick the site layout for an API base URL."""
    if re.search(package_regex, api_url):
        return SiteMode.PACKAGE
    return SiteMode.EDITOR


def resolve_href(
    api_url: str,
    record: ReferenceRecord,
    trim_namespaces: Iterable[str],
    site_mode: SiteMode,
) -> str:
    """Compute the public documentation URL for a reference.

    Args:
        api_url: Base URL of the API documentation, ending in ``/``.
        record: Reference whose ``commentId`` (and ``name`` in package mode)
            drives the resolution.
        trim_namespaces: Namespaces stripped from editor-site page names.
            Ignored in package mode.
        site_mode: Target documentation layout.

    Returns:
        The absolute href.

    Raises:
        MalformedIdentifierError: If the comment ID cannot be parsed.
        ResolutionError: If the owner type cannot be located in the uid.
    """
    comment_id = parse_comment_id(record.comment_id)

    if site_mode == SiteMode.PACKAGE:
        return resolve_package_href(api_url, comment_id.kind, comment_id.uid, record.name)

    return resolve_editor_href(api_url, comment_id.kind, comment_id.uid, trim_namespaces)


def resolve_editor_href(
    api_url: str, kind: str, uid: str, trim_namespaces: Iterable[str] = ()
) -> str:
    # Namespaces have no page of their own on the scripting reference.
    if kind == SymbolKind.NAMESPACE:
        return f"{api_url}index.html"

    href = uid
    for namespace in trim_namespaces:
        href = href.replace(namespace + ".", "")

    href = href.replace(".#ctor", "-ctor")

    href = _GENERIC_ARITY.sub("", href)
    href = href.replace("`", "_")

    # Overloads share a single page.
    href = _TRAILING_POINTER.sub("", href)
    href = _PARAMETER_LIST.sub("", href)

    if kind == SymbolKind.METHOD and ".op_" in uid:
        href = href.replace(".op_", ".operator_")
        for raw, rewritten in OPERATOR_SUBSTITUTIONS:
            href = href.replace(raw, rewritten)

    if kind in MEMBER_KINDS:
        href = _LOWERCASE_MEMBER.sub(r"-\1", href)

    return f"{api_url}{href}.html"


def resolve_package_href(api_url: str, kind: str, uid: str, name: str | None) -> str:
    if kind in (SymbolKind.NAMESPACE, SymbolKind.TYPE):
        return f"{api_url}{uid}.html"

    if name is None:
        raise ResolutionError(uid, "reference has no name")

    if kind == SymbolKind.METHOD:
        match = _METHOD_NAME.match(name)
        if match is None:
            raise ResolutionError(uid, f"no method name in '{name}'")
        member_name = match.group(1)
    else:
        member_name = name

    owner = _owner_name(uid, member_name)
    return f"{api_url}{owner}.html#{_NON_WORD.sub('_', uid)}"


def _owner_name(uid: str, member_name: str) -> str:
    """Return the part of ``uid`` before ``member_name`` and its separator."""
    index = uid.find(member_name) if member_name else -1
    if index < 1:
        raise ResolutionError(uid, f"member '{member_name}' not found after an owner")
    return uid[: index - 1]


__all__ = [
    "OPERATOR_SUBSTITUTIONS",
    "SiteMode",
    "detect_site_mode",
    "resolve_editor_href",
    "resolve_href",
    "resolve_package_href",
]
