"""Records produced by scanning a MediaWiki dump."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class PageRevision:
    """A single revision of a page.

    Attributes:
        text: Revision text. Either the raw wiki markup or its flattened
            plain-text form, depending on whether markup processing is on.
        raw: The original markup, kept only when markup processing is on.
    """

    text: str = ""
    raw: str = ""


@dataclass
class Page:
    """A wiki page and its revisions in dump order."""

    title: str = ""
    revisions: List[PageRevision] = field(default_factory=list)


@dataclass
class Site:
    """A MediaWiki site, such as Wikipedia.

    Attributes:
        name: Site name, e.g. ``"Wikipedia"``.
        url: Base URL, e.g. ``"https://en.wikipedia.org/wiki/Main_Page"``.
        pages: Pages in the order they appear in the dump.
    """

    name: str = ""
    url: str = ""
    pages: List[Page] = field(default_factory=list)

    def revision_count(self) -> int:
        return sum(len(page.revisions) for page in self.pages)
