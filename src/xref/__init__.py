"""Symbol reference resolution for xref maps."""

from xref.comment_id import CommentId, SymbolKind, parse_comment_id
from xref.errors import MalformedIdentifierError, ResolutionError, XrefError
from xref.models import ReferenceMap, ReferenceRecord
from xref.pipeline import DroppedReference, ProcessReport, fix_xref_map, process_references
from xref.resolve import SiteMode, detect_site_mode, resolve_href

__all__ = [
    "CommentId",
    "DroppedReference",
    "MalformedIdentifierError",
    "ProcessReport",
    "ReferenceMap",
    "ReferenceRecord",
    "ResolutionError",
    "SiteMode",
    "SymbolKind",
    "XrefError",
    "detect_site_mode",
    "fix_xref_map",
    "parse_comment_id",
    "process_references",
    "resolve_href",
]
