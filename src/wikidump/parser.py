"""Parse MediaWiki XML dumps into :class:`~wikidump.models.Site` values.

Example::

    from wikidump.parser import DumpParser
    from wikidump.profiles import english

    parser = DumpParser(profile=english())
    site = parser.parse_file("enwiki-articles-partial.xml.bz2")
    for page in site.pages:
        print(page.title)
        for revision in page.revisions:
            print("\\t" + revision.text)
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Iterable, Optional, Union

from wikidump.compression import PathLike, iter_chunks, open_dump
from wikidump.config import ParserOptions
from wikidump.errors import MalformedDumpError
from wikidump.extract import scan_dump
from wikidump.models import Site
from wikidump.postprocess import process_site

logger = logging.getLogger(__name__)


class DumpParser:
    """Parser for plain or bzip2-compressed MediaWiki XML dumps.

    Accepts either a ready :class:`ParserOptions` or its fields as keyword
    arguments, e.g. ``DumpParser(exclude_pages=False, remove_newlines=True)``.

    Raises from the parse methods:
        DumpReadError: The file could not be opened, read or decompressed.
        MalformedDumpError: The dump is not well-formed or not valid UTF-8.
    """

    def __init__(self, options: Optional[ParserOptions] = None, **overrides: Any):
        options = options or ParserOptions()
        self.options = replace(options, **overrides) if overrides else options

    def parse_file(self, path: PathLike) -> Site:
        """Parse a dump file, decompressing it first when it is bzip2 data."""
        logger.info("Parsing dump file %s", path)
        with open_dump(path) as handle:
            return self._parse(iter_chunks(handle))

    def parse_str(self, text: str) -> Site:
        """Parse a dump held in memory as text."""
        try:
            data = text.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise MalformedDumpError(f"Dump text is not valid UTF-8: {exc}") from exc
        return self._parse([data])

    def _parse(self, chunks: Iterable[Union[bytes, str]]) -> Site:
        site = scan_dump(chunks, exclude_pages=self.options.exclude_pages)
        return process_site(site, self.options)
