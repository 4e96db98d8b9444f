"""Errors raised while turning a reference record into a documentation URL."""

from __future__ import annotations


class XrefError(Exception):
    """Base class for per-record resolution failures."""


class MalformedIdentifierError(XrefError):
    """Raised when a comment ID lacks the ``kind:uid`` separator."""


class ResolutionError(XrefError):
    """Raised when the owner or member name cannot be located in a uid."""

    def __init__(self, uid: str | None, reason: str) -> None:
        self.uid = uid
        self.reason = reason
        super().__init__(f"Cannot resolve href for '{uid}': {reason}")
