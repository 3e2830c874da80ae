"""Wiki markup dialect profiles for MediaWiki sites and languages.

Currently supported:

* Wikipedia, English (``english``)
* Simple English Wikipedia (``simple_english``)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Tuple


@dataclass(frozen=True)
class MarkupProfile:
    """Site-specific vocabulary used when interpreting wiki markup.

    Attributes:
        category_namespaces: Lowercase namespace names of category links.
        extension_tags: Lowercase names of parser extension tags, like ``ref``.
        file_namespaces: Lowercase namespace names of file/image links.
        link_trail: Characters that join a link's text when they directly
            follow the closing brackets, as in ``[[apple]]s``.
        magic_words: Behaviour switch names written as ``__NAME__``.
        protocols: URL prefixes recognized in external links.
        redirect_magic_words: Words introducing a redirect, like ``REDIRECT``.
    """

    category_namespaces: Tuple[str, ...]
    extension_tags: Tuple[str, ...]
    file_namespaces: Tuple[str, ...]
    link_trail: str
    magic_words: Tuple[str, ...]
    protocols: Tuple[str, ...]
    redirect_magic_words: Tuple[str, ...]


def english() -> MarkupProfile:
    """Profile for the English Wikipedia."""
    return MarkupProfile(
        category_namespaces=("category",),
        extension_tags=(
            "categorytree",
            "ce",
            "charinsert",
            "chem",
            "gallery",
            "graph",
            "hiero",
            "imagemap",
            "indicator",
            "inputbox",
            "mapframe",
            "maplink",
            "math",
            "nowiki",
            "poem",
            "pre",
            "ref",
            "references",
            "score",
            "section",
            "source",
            "syntaxhighlight",
            "templatedata",
            "templatestyles",
            "timeline",
        ),
        file_namespaces=("file", "image"),
        link_trail="ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz",
        magic_words=(
            "DISAMBIG",
            "EXPECTUNUSEDCATEGORY",
            "FORCETOC",
            "HIDDENCAT",
            "INDEX",
            "NEWSECTIONLINK",
            "NOCC",
            "NOCOLLABORATIONHUBTOC",
            "NOCONTENTCONVERT",
            "NOEDITSECTION",
            "NOGALLERY",
            "NOGLOBAL",
            "NOINDEX",
            "NONEWSECTIONLINK",
            "NOTC",
            "NOTITLECONVERT",
            "NOTOC",
            "STATICREDIRECT",
            "TOC",
        ),
        protocols=(
            "//",
            "bitcoin:",
            "ftp://",
            "ftps://",
            "geo:",
            "git://",
            "gopher://",
            "http://",
            "https://",
            "irc://",
            "ircs://",
            "magnet:",
            "mailto:",
            "mms://",
            "news:",
            "nntp://",
            "redis://",
            "sftp://",
            "sip:",
            "sips:",
            "sms:",
            "ssh://",
            "svn://",
            "tel:",
            "telnet://",
            "urn:",
            "worldwind://",
            "xmpp:",
        ),
        redirect_magic_words=("REDIRECT",),
    )


def simple_english() -> MarkupProfile:
    """Profile for Simple English Wikipedia, identical to ``english`` for now."""
    return english()


PROFILES: Dict[str, Callable[[], MarkupProfile]] = {
    "english": english,
    "simple_english": simple_english,
}


def get_profile(name: str) -> MarkupProfile:
    try:
        factory = PROFILES[name]
    except KeyError as exc:
        choices = ", ".join(sorted(PROFILES))
        raise ValueError(f"Unknown markup profile {name!r} (expected one of: {choices})") from exc
    return factory()
