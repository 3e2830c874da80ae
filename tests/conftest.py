"""Shared dump fixtures."""

from __future__ import annotations

import bz2
from typing import Iterable, Tuple
from xml.sax.saxutils import escape

import pytest

from wikidump.markup import MarkupParser
from wikidump.profiles import english

EXPORT_NS = "http://www.mediawiki.org/xml/export-0.10/"

# (title, ns, revision texts)
PAGES = [
    (
        "alpha",
        "0",
        [
            "This is an article.\n== Header ==\nThis is text under the header.",
            "First paragraph.\n\nSecond paragraph.",
        ],
    ),
    ("beta", "42", ["Not an article."]),
    ("gamma", "0", ["A [[link|linked word]] and [[apple]]s."]),
]


def build_dump(pages: Iterable[Tuple[str, str, Iterable[str]]], sitename: str = "Wikipedia") -> str:
    parts = [
        f'<mediawiki xmlns="{EXPORT_NS}" version="0.10" xml:lang="en">',
        "  <siteinfo>",
        f"    <sitename>{sitename}</sitename>",
        "    <dbname>enwiki</dbname>",
        "    <base>https://en.wikipedia.org/wiki/Main_Page</base>",
        "    <namespaces>",
        '      <namespace key="0" case="first-letter" />',
        '      <namespace key="1" case="first-letter">Talk</namespace>',
        "    </namespaces>",
        "  </siteinfo>",
    ]
    for page_id, (title, ns, texts) in enumerate(pages, start=1):
        parts += [
            "  <page>",
            f"    <title>{escape(title)}</title>",
            f"    <ns>{ns}</ns>",
            f"    <id>{page_id}</id>",
        ]
        for revision_id, text in enumerate(texts, start=1):
            parts += [
                "    <revision>",
                f"      <id>{page_id * 100 + revision_id}</id>",
                "      <contributor><username>Editor</username><id>7</id></contributor>",
                "      <comment>edit</comment>",
                f'      <text bytes="{len(text)}" xml:space="preserve">{escape(text)}</text>',
                "    </revision>",
            ]
        parts.append("  </page>")
    parts.append("</mediawiki>")
    return "\n".join(parts) + "\n"


@pytest.fixture
def dump_text() -> str:
    return build_dump(PAGES)


@pytest.fixture
def dump_path(tmp_path, dump_text):
    path = tmp_path / "dump.xml"
    path.write_bytes(dump_text.encode("utf-8"))
    return path


@pytest.fixture
def bz2_dump_path(tmp_path, dump_text):
    path = tmp_path / "dump.xml.bz2"
    path.write_bytes(bz2.compress(dump_text.encode("utf-8")))
    return path


@pytest.fixture
def markup_parser() -> MarkupParser:
    return MarkupParser(english())
