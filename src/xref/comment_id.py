"""Comment ID parsing.

A comment ID is the compact symbol identifier emitted by the documentation
generator, ``<Kind>:<uid>``, e.g. ``M:UnityEngine.Object.Destroy(UnityEngine.Object)``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from xref.errors import MalformedIdentifierError


class SymbolKind(str, Enum):
    """Known comment ID kind prefixes."""

    NAMESPACE = "N"
    TYPE = "T"
    METHOD = "M"
    PROPERTY = "P"
    FIELD = "F"
    OVERLOAD = "Overload"


MEMBER_KINDS = frozenset(
    kind.value for kind in (SymbolKind.FIELD, SymbolKind.METHOD, SymbolKind.PROPERTY)
)


@dataclass(frozen=True)
class CommentId:
    kind: str
    uid: str

    @property
    def is_overload(self) -> bool:
        return self.kind == SymbolKind.OVERLOAD


def parse_comment_id(comment_id: str | None) -> CommentId:
    """Split a comment ID on its first ``:`` into kind and uid.

    The uid is not validated; unexpected shapes surface later when the
    resolution rules fail to match.

    Raises:
        MalformedIdentifierError: If the comment ID is missing or has no ``:``.
    """
    if not comment_id or ":" not in comment_id:
        msg = f"Malformed comment ID {comment_id!r}: expected '<kind>:<uid>'"
        raise MalformedIdentifierError(msg)

    kind, uid = comment_id.split(":", 1)
    return CommentId(kind=kind, uid=uid)


__all__ = ["MEMBER_KINDS", "CommentId", "SymbolKind", "parse_comment_id"]
