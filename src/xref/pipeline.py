"""Filter and rewrite the references of an xref map."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from xref.comment_id import parse_comment_id
from xref.errors import XrefError
from xref.models import ReferenceMap, ReferenceRecord
from xref.resolve import SiteMode, resolve_href

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DroppedReference:
    uid: str | None
    comment_id: str | None
    error: XrefError

    @property
    def message(self) -> str:
        return str(self.error)

    def to_dict(self) -> dict[str, object]:
        return {
            "uid": self.uid,
            "comment_id": self.comment_id,
            "message": self.message,
        }


@dataclass
class ProcessReport:
    references: list[ReferenceRecord] = field(default_factory=list)
    dropped: list[DroppedReference] = field(default_factory=list)
    overloads_skipped: int = 0

    @property
    def ok(self) -> bool:
        return not self.dropped

    @property
    def dropped_uids(self) -> list[str | None]:
        return [item.uid for item in self.dropped]

    def to_dict(self) -> dict[str, object]:
        return {
            "resolved": len(self.references),
            "overloads_skipped": self.overloads_skipped,
            "dropped": [item.to_dict() for item in self.dropped],
        }


def process_references(
    api_url: str,
    references: Iterable[ReferenceRecord],
    trim_namespaces: Iterable[str],
    site_mode: SiteMode,
) -> ProcessReport:
    """Resolve the href of every valid reference, in input order.

    Overload group entries are skipped. A reference that cannot be resolved
    is logged and reported in ``ProcessReport.dropped``; it never stops the
    remaining references from being processed. Input records are left
    untouched, resolved copies are returned.
    """
    trim_namespaces = list(trim_namespaces)
    report = ProcessReport()

    for reference in references:
        try:
            if parse_comment_id(reference.comment_id).is_overload:
                report.overloads_skipped += 1
                continue
            href = resolve_href(api_url, reference, trim_namespaces, site_mode)
        except XrefError as e:
            log.warning(f"Error fixing href: {reference.uid}: {e}")
            report.dropped.append(
                DroppedReference(uid=reference.uid, comment_id=reference.comment_id, error=e)
            )
            continue

        report.references.append(reference.model_copy(update={"href": href}))

    log.debug(
        f"Resolved {len(report.references)} references, "
        f"skipped {report.overloads_skipped} overloads, dropped {len(report.dropped)}."
    )
    return report


def fix_xref_map(
    xref_map: ReferenceMap,
    api_url: str,
    trim_namespaces: Iterable[str],
    site_mode: SiteMode,
) -> tuple[ReferenceMap, ProcessReport]:
    """Return a copy of ``xref_map`` whose references point at ``api_url``."""
    report = process_references(api_url, xref_map.references, trim_namespaces, site_mode)
    fixed = ReferenceMap(sorted=xref_map.sorted, references=report.references)
    return fixed, report


__all__ = [
    "DroppedReference",
    "ProcessReport",
    "fix_xref_map",
    "process_references",
]
