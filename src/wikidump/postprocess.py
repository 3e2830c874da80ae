"""Per-revision markup flattening and its fan-out over a whole site."""

from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor
from typing import Iterator, List, Optional, Tuple

from tqdm import tqdm

from wikidump.config import ParserOptions
from wikidump.flatten import flatten, remove_escape_artifacts, remove_line_breaks
from wikidump.markup import MarkupParser
from wikidump.models import PageRevision, Site

logger = logging.getLogger(__name__)

# Set once per worker process by _init_worker.
_worker_options: Optional[ParserOptions] = None
_worker_parser: Optional[MarkupParser] = None


def render_revision(text: str, options: ParserOptions, markup_parser: MarkupParser) -> Tuple[str, str]:
    """Compute the ``(text, raw)`` pair for a revision's original text."""
    raw = ""
    if options.process_text:
        raw = text
        text = remove_escape_artifacts(flatten(markup_parser.parse(raw)))
    if options.remove_newlines:
        text = remove_line_breaks(text)
    return text.strip(), raw


def process_revision(revision: PageRevision, options: ParserOptions, markup_parser: MarkupParser) -> None:
    """Replace a revision's text with its processed form, in place.

    With ``options.process_text`` the original markup moves to ``revision.raw``
    and ``revision.text`` becomes the flattened text. Newline removal and
    trimming apply whether or not markup is processed.
    """
    text, raw = render_revision(revision.text, options, markup_parser)
    revision.text = text
    if options.process_text:
        revision.raw = raw


def _init_worker(options: ParserOptions) -> None:
    global _worker_options, _worker_parser
    _worker_options = options
    _worker_parser = MarkupParser(options.profile)
    logger.debug("Markup worker ready")


def _render_in_worker(text: str) -> Tuple[str, str]:
    return render_revision(text, _worker_options, _worker_parser)


def iter_revisions(site: Site) -> Iterator[PageRevision]:
    for page in site.pages:
        yield from page.revisions


def process_site(site: Site, options: ParserOptions) -> Site:
    """Process every revision of a site.

    Revisions are independent, so they are flattened into a single worklist
    and handled in any order: in the calling process when ``options.workers``
    is 1 or less, otherwise across a process pool.

    Args:
        site: A fully scanned site holding raw revision text.
        options: Shared, read-only parser options.

    Returns:
        The same site, with its revisions updated.
    """
    worklist: List[PageRevision] = list(iter_revisions(site))
    progress = tqdm(total=len(worklist), unit="rev", desc="revisions", disable=not options.show_progress)

    with progress:
        if options.workers <= 1:
            markup_parser = MarkupParser(options.profile)
            for revision in worklist:
                process_revision(revision, options, markup_parser)
                progress.update(1)
        else:
            chunksize = max(1, len(worklist) // (options.workers * 4))
            with ProcessPoolExecutor(
                max_workers=options.workers,
                initializer=_init_worker,
                initargs=(options,),
            ) as pool:
                results = pool.map(_render_in_worker, [revision.text for revision in worklist], chunksize=chunksize)
                for revision, (text, raw) in zip(worklist, results):
                    revision.text = text
                    if options.process_text:
                        revision.raw = raw
                    progress.update(1)

    logger.info("Processed %d revisions across %d pages", len(worklist), len(site.pages))
    return site
