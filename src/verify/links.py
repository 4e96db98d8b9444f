"""Online existence checks for the hrefs of a fixed xref map."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import httpx

from contract.xrefmap import DEFAULT_LINK_TIMEOUT

if TYPE_CHECKING:
    from xref.models import ReferenceMap

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class InvalidLink:
    uid: str | None
    href: str | None


@dataclass
class LinkCheckResult:
    checked: int = 0
    invalid: list[InvalidLink] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.invalid


def check_href(client: httpx.Client, href: str | None) -> bool:
    """Return True when a HEAD request on ``href`` answers with a 2xx status.

    A 404 is an expected outcome and is not logged; any other non-2xx status
    or transport failure is logged as an error.
    """
    if not href:
        return False

    try:
        response = client.head(href)
    except httpx.HTTPError as e:
        log.error(f"Exception on {href}: {e}")
        return False

    if not response.is_success and response.status_code != httpx.codes.NOT_FOUND:
        log.error(f"HTTP response code on {href} is {response.status_code}")

    return response.is_success


def check_xref_map_links(
    xref_map: ReferenceMap,
    client: httpx.Client | None = None,
    *,
    timeout: float = DEFAULT_LINK_TIMEOUT,
) -> LinkCheckResult:
    """Check every reference href of ``xref_map``.

    Args:
        xref_map: Map whose hrefs have already been fixed.
        client: Client to issue requests with. A client with ``timeout`` is
            created (and closed) when omitted.
        timeout: Per-request timeout in seconds for the default client.
    """
    if client is None:
        with httpx.Client(timeout=timeout, follow_redirects=True) as own_client:
            return check_xref_map_links(xref_map, own_client)

    result = LinkCheckResult()
    for reference in xref_map.references:
        result.checked += 1
        if check_href(client, reference.href):
            continue
        log.warning(f"Invalid URL {reference.href} for {reference.uid} uid")
        result.invalid.append(InvalidLink(uid=reference.uid, href=reference.href))

    return result


__all__ = ["InvalidLink", "LinkCheckResult", "check_href", "check_xref_map_links"]
