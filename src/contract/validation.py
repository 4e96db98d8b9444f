"""Offline validation of fixed xref maps."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from contract.serialize import XrefMapFormatError, loads_xref_map
from contract.xrefmap import YAML_MIME_HEADER
from xref.comment_id import parse_comment_id
from xref.errors import MalformedIdentifierError

if TYPE_CHECKING:
    from pathlib import Path

    from xref.models import ReferenceRecord


@dataclass(frozen=True)
class ValidationMessage:
    path: Path
    message: str
    index: int | None = None
    uid: str | None = None

    def location(self) -> str:
        if self.index is None:
            return str(self.path)
        return f"{self.path}:references[{self.index}]"

    def to_dict(self) -> dict[str, object]:
        return {
            "path": str(self.path),
            "index": self.index,
            "uid": self.uid,
            "message": self.message,
        }


@dataclass
class ValidationResult:
    errors: list[ValidationMessage] = field(default_factory=list)
    warnings: list[ValidationMessage] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def href_problem(href: str | None) -> str | None:
    """Describe why ``href`` is not a fixed documentation URL, or return None."""
    if not href:
        return "Missing href."

    parts = urlsplit(href)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        return f"Href is not an absolute URL: {href}."
    if parts.query:
        return f"Href has a query string: {href}."
    if not parts.path.endswith(".html"):
        return f"Href does not point at an .html page: {href}."
    return None


def validate_xref_map(path: Path) -> ValidationResult:
    """Check that every reference of a fixed xref map has a usable href.

    Missing or unreadable files, unparseable documents, overload entries,
    malformed comment IDs and badly shaped hrefs are errors. A missing
    ``YamlMime`` header line is a warning.
    """
    result = ValidationResult()

    if not path.exists():
        result.errors.append(
            ValidationMessage(path=path, message="Xref map file does not exist.")
        )
        return result

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        result.errors.append(
            ValidationMessage(path=path, message=f"Failed to read file: {exc}.")
        )
        return result

    if not text.startswith(YAML_MIME_HEADER):
        result.warnings.append(
            ValidationMessage(
                path=path, message=f"Missing '{YAML_MIME_HEADER}' header line."
            )
        )

    try:
        xref_map = loads_xref_map(text)
    except XrefMapFormatError as exc:
        result.errors.append(ValidationMessage(path=path, message=f"{exc}."))
        return result

    for index, reference in enumerate(xref_map.references, 1):
        _validate_reference(path, index, reference, result)

    return result


def _validate_reference(
    path: Path, index: int, reference: ReferenceRecord, result: ValidationResult
) -> None:
    try:
        comment_id = parse_comment_id(reference.comment_id)
    except MalformedIdentifierError as exc:
        result.errors.append(
            ValidationMessage(path=path, index=index, uid=reference.uid, message=f"{exc}.")
        )
        return

    if comment_id.is_overload:
        result.errors.append(
            ValidationMessage(
                path=path,
                index=index,
                uid=reference.uid,
                message="Overload entries must be removed from fixed xref maps.",
            )
        )
        return

    problem = href_problem(reference.href)
    if problem is not None:
        result.errors.append(
            ValidationMessage(path=path, index=index, uid=reference.uid, message=problem)
        )


__all__ = [
    "ValidationMessage",
    "ValidationResult",
    "href_problem",
    "validate_xref_map",
]
