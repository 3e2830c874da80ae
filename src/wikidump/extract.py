"""Streaming extraction of sites, pages and revisions from MediaWiki XML dumps."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from enum import Enum
from typing import Iterable, List, Optional, Union

from wikidump.errors import MalformedDumpError
from wikidump.models import Page, PageRevision, Site

logger = logging.getLogger(__name__)


class ScanState(Enum):
    OUTSIDE = "outside"
    IN_SITE_INFO = "in_site_info"
    IN_PAGE = "in_page"


def strip_ns(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


class DumpScanner:
    """Build a :class:`Site` from the structural events of a dump.

    Data is pushed with :meth:`feed` and the site is returned by :meth:`close`.
    The dump is assumed to be well-formed: any tokenizer error aborts the scan
    with :class:`MalformedDumpError`.

    Args:
        exclude_pages: Skip every page whose namespace is not ``0``.
    """

    def __init__(self, exclude_pages: bool = True):
        self.exclude_pages = exclude_pages
        self.site = Site()
        self.state = ScanState.OUTSIDE
        self.skipped_pages = 0
        self._open: List[str] = []
        self._page = Page()
        self._revision = PageRevision()
        self.root: Optional[ET.Element] = None
        self._skipping_current_page = False
        self._parser = ET.XMLPullParser(events=("start", "end"))

    def feed(self, data: Union[bytes, str]) -> None:
        try:
            self._parser.feed(data)
            self._drain()
        except ET.ParseError as exc:
            raise MalformedDumpError(f"Malformed dump: {exc}") from exc

    def close(self) -> Site:
        # XMLPullParser queues syntax errors and raises them from read_events().
        try:
            self._parser.close()
            self._drain()
        except ET.ParseError as exc:
            raise MalformedDumpError(f"Malformed dump: {exc}") from exc
        logger.info(
            "Scanned %d pages (%d revisions), skipped %d",
            len(self.site.pages),
            self.site.revision_count(),
            self.skipped_pages,
        )
        return self.site

    def _drain(self) -> None:
        for event, elem in self._parser.read_events():
            name = strip_ns(elem.tag)
            if event == "start":
                if self.root is None:
                    self.root = elem
                self._start(name)
            else:
                self._end(name, elem)

    def _start(self, name: str) -> None:
        self._open.append(name)
        if name == "siteinfo":
            self.state = ScanState.IN_SITE_INFO
        elif name == "page":
            self.state = ScanState.IN_PAGE

    def _end(self, name: str, elem: ET.Element) -> None:
        self._open.pop()
        if self.state is ScanState.IN_SITE_INFO:
            self._end_in_site_info(name, elem)
        elif self.state is ScanState.IN_PAGE:
            self._end_in_page(name, elem)

    def _end_in_site_info(self, name: str, elem: ET.Element) -> None:
        if name == "sitename":
            self.site.name = elem.text or ""
        elif name == "base":
            self.site.url = elem.text or ""
        elif name == "siteinfo":
            self.state = ScanState.OUTSIDE

    def _end_in_page(self, name: str, elem: ET.Element) -> None:
        if name == "page":
            self._close_page()
            elem.clear()
            # Finished pages stay attached to the root unless it is emptied too.
            self.root.clear()
            return
        if self._skipping_current_page:
            return

        parent = self._open[-1] if self._open else None
        if name == "title" and parent == "page":
            self._page.title = elem.text or ""
        elif name == "ns" and parent == "page" and self.exclude_pages:
            if (elem.text or "").strip() != "0":
                self._skipping_current_page = True
        elif name == "text" and "revision" in self._open:
            self._revision.text = elem.text or ""
        elif name == "revision":
            self._page.revisions.append(self._revision)
            self._revision = PageRevision()
            elem.clear()

    def _close_page(self) -> None:
        if self._skipping_current_page:
            self.skipped_pages += 1
            logger.debug("Skipped page outside the article namespace: %s", self._page.title)
        else:
            self.site.pages.append(self._page)
        self._page = Page()
        self._revision = PageRevision()
        self._skipping_current_page = False
        self.state = ScanState.OUTSIDE


def scan_dump(chunks: Iterable[Union[bytes, str]], exclude_pages: bool = True) -> Site:
    """Scan a dump delivered as a sequence of chunks into a :class:`Site`."""
    scanner = DumpScanner(exclude_pages=exclude_pages)
    for chunk in chunks:
        scanner.feed(chunk)
    return scanner.close()
