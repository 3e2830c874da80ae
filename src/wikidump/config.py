"""Parser options shared by the scanner and the revision post-processor."""

from __future__ import annotations

from dataclasses import dataclass, field

from wikidump.profiles import MarkupProfile, english


@dataclass(frozen=True)
class ParserOptions:
    """Options for a dump parse.

    Instances are immutable so worker processes can share them read-only.

    Attributes:
        process_text: Flatten wiki markup into plain text. The original
            markup is then kept in ``PageRevision.raw``.
        remove_newlines: Strip newline and carriage-return characters from
            revision text.
        exclude_pages: Keep only article pages (namespace ``0``), skipping
            Talk, User, Special and every other namespace.
        profile: Markup dialect used when flattening. Best results come from
            the profile matching the dumped site.
        workers: Number of processes flattening revisions. ``1`` or less
            runs in the calling process.
        show_progress: Display a progress bar while flattening.
    """

    process_text: bool = True
    remove_newlines: bool = False
    exclude_pages: bool = True
    profile: MarkupProfile = field(default_factory=english)
    workers: int = 1
    show_progress: bool = False
