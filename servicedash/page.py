"""HTML page whose anchors can be rewritten in place."""
from __future__ import annotations
import html
from html.parser import HTMLParser
from typing import List, Optional, Sequence, Tuple

from servicedash.config import LINK_BINDINGS, ServiceDirectory
from servicedash.links import SyncReport, update_service_links


class PageAnchor:
    """An ``<a>`` start tag found in the page source."""

    def __init__(self, offset: int, raw: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        self.offset = offset
        self.raw = raw
        self.attrs = list(attrs)
        self.modified = False

    def get(self, attr: str) -> Optional[str]:
        attr = attr.lower()
        for name, value in self.attrs:
            if name == attr:
                # valueless attributes read as "", as in the DOM
                return "" if value is None else value
        return None

    @property
    def href(self) -> Optional[str]:
        return self.get("href")

    @href.setter
    def href(self, value: str) -> None:
        if value == self.href:
            return
        for i, (name, _) in enumerate(self.attrs):
            if name == "href":
                self.attrs[i] = (name, value)
                break
        else:
            self.attrs.append(("href", value))
        self.modified = True

    def render(self) -> str:
        if not self.modified:
            return self.raw
        parts = ["<a"]
        for name, value in self.attrs:
            if value is None:
                parts.append(f" {name}")
            else:
                parts.append(f' {name}="{html.escape(value, quote=True)}"')
        parts.append("/>" if self.raw.endswith("/>") else ">")
        return "".join(parts)


class _AnchorCollector(HTMLParser):
    def __init__(self, source: str) -> None:
        super().__init__(convert_charrefs=True)
        # getpos() reports (line, column); map lines back to string offsets
        self._line_starts = [0]
        for i, ch in enumerate(source):
            if ch == "\n":
                self._line_starts.append(i + 1)
        self.anchors: List[PageAnchor] = []

    def handle_starttag(self, tag, attrs):
        if tag != "a":
            return
        lineno, column = self.getpos()
        offset = self._line_starts[lineno - 1] + column
        self.anchors.append(PageAnchor(offset, self.get_starttag_text(), attrs))


class HtmlPage:
    """Parsed HTML source exposing its anchors as a link-sync document."""

    def __init__(self, source: str) -> None:
        self.source = source
        collector = _AnchorCollector(source)
        collector.feed(source)
        collector.close()
        self._anchors = collector.anchors

    def anchors(self) -> List[PageAnchor]:
        return list(self._anchors)

    def render(self) -> str:
        """Return the source with modified anchor tags rebuilt."""
        chunks = []
        cursor = 0
        for anchor in self._anchors:
            if not anchor.modified:
                continue
            chunks.append(self.source[cursor:anchor.offset])
            chunks.append(anchor.render())
            cursor = anchor.offset + len(anchor.raw)
        chunks.append(self.source[cursor:])
        return "".join(chunks)


def sync_page(
    source: str,
    directory: ServiceDirectory,
    bindings: Sequence[Tuple[str, str]] = LINK_BINDINGS,
) -> Tuple[str, SyncReport]:
    page = HtmlPage(source)
    report = update_service_links(directory, page, bindings)
    return page.render(), report
