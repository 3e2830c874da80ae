"""Detection and opening of bzip2-compressed dumps."""

from __future__ import annotations

import bz2
import os
from contextlib import contextmanager
from typing import BinaryIO, Iterator, Union

from wikidump.errors import DumpReadError, MalformedDumpError

BZIP2_MAGIC = b"BZh"

PathLike = Union[str, "os.PathLike[str]"]


def is_compressed(path: PathLike) -> bool:
    """Return whether a file starts with the bzip2 stream signature.

    The file is opened with its own handle; only the first three bytes are read.
    """
    try:
        with open(path, "rb") as handle:
            head = handle.read(len(BZIP2_MAGIC))
    except OSError as exc:
        raise DumpReadError(f"Could not read dump file: {path}") from exc
    if len(head) < len(BZIP2_MAGIC):
        raise MalformedDumpError(f"Dump file is too short to contain a dump: {path}")
    return head == BZIP2_MAGIC


@contextmanager
def open_dump(path: PathLike) -> Iterator[BinaryIO]:
    """Open a dump for binary reading, decompressing bzip2 input transparently."""
    compressed = is_compressed(path)
    try:
        handle = bz2.open(path, "rb") if compressed else open(path, "rb")
    except OSError as exc:
        raise DumpReadError(f"Could not open dump file: {path}") from exc
    with handle:
        yield handle


def iter_chunks(handle: BinaryIO, chunk_size: int = 1024 * 1024) -> Iterator[bytes]:
    """Read a dump handle in chunks, reporting codec and I/O failures as read errors."""
    while True:
        try:
            chunk = handle.read(chunk_size)
        except (OSError, EOFError) as exc:
            raise DumpReadError(f"Could not read dump stream: {exc}") from exc
        if not chunk:
            return
        yield chunk
