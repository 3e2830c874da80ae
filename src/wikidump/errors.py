"""Exceptions raised while reading MediaWiki dumps."""

from __future__ import annotations


class WikidumpError(Exception):
    """Base class for dump parsing errors."""


class DumpReadError(WikidumpError):
    """The dump could not be opened, read or decompressed.

    These failures depend on the environment (paths, permissions, a damaged
    download) and can be retried once the cause is fixed.
    """


class MalformedDumpError(WikidumpError):
    """The dump content is not well-formed XML or not valid UTF-8.

    The parse is aborted and no partial site is returned.
    """
