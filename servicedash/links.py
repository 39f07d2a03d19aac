"""Rewrite dashboard anchors so they point at the current host."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Protocol, Sequence, Tuple

from servicedash.config import LINK_BINDINGS, ServiceDirectory, logger

SERVICE_ATTR = "data-service"


class Anchor(Protocol):
    href: Optional[str]

    def get(self, attr: str) -> Optional[str]:
        ...


class Document(Protocol):
    def anchors(self) -> Iterable[Anchor]:
        ...


@dataclass
class LinkRewrite:
    service: str
    old_href: Optional[str]
    new_href: str


@dataclass
class SyncReport:
    host: str
    rewrites: List[LinkRewrite] = field(default_factory=list)
    unresolved: int = 0

    @property
    def rewritten(self) -> int:
        return len(self.rewrites)


def _rewrite(anchor: Anchor, service: str, directory: ServiceDirectory, report: SyncReport) -> None:
    url = directory.get_service_url(service)
    if not url:
        report.unresolved += 1
        return
    report.rewrites.append(LinkRewrite(service, anchor.href, url))
    anchor.href = url


def find_anchor_by_port(anchors: Sequence[Anchor], port_literal: str) -> Optional[Anchor]:
    """First anchor without a data-service binding whose href contains the port."""
    for anchor in anchors:
        if anchor.get(SERVICE_ATTR) is not None:
            continue
        if anchor.href and port_literal in anchor.href:
            return anchor
    return None


def update_service_links(
    directory: ServiceDirectory,
    document: Document,
    bindings: Sequence[Tuple[str, str]] = LINK_BINDINGS,
) -> SyncReport:
    """Point every bound anchor in ``document`` at its service URL.

    Anchors declaring ``data-service`` are bound by name; an empty name
    counts as unresolved and keeps the anchor out of port matching. The remaining
    anchors are matched against ``bindings``: for each (port, service) pair
    the first href containing the port literal is rewritten. Unknown
    services and missing anchors leave the document untouched.
    """
    anchors = list(document.anchors())
    report = SyncReport(host=directory.host)

    for anchor in anchors:
        service = anchor.get(SERVICE_ATTR)
        if service is not None:
            _rewrite(anchor, service, directory, report)

    for port_literal, service in bindings:
        anchor = find_anchor_by_port(anchors, port_literal)
        if anchor is not None:
            _rewrite(anchor, service, directory, report)

    logger.info(f"Service links updated for IP: {directory.host}", rewritten=report.rewritten)
    return report
