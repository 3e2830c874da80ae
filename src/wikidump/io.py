"""Output helpers for parsed sites."""

from __future__ import annotations

import json
import os
from typing import Dict, Iterable, Iterator, List, TextIO

from datasets import Dataset, Features, Value

from wikidump.models import Site

FEATURES = Features(
    {
        "title": Value("string"),
        "revision": Value("int32"),
        "text": Value("string"),
        "raw": Value("string"),
    }
)


def iter_rows(site: Site) -> Iterator[dict]:
    """Yield one row per revision, in page and revision order."""
    for page in site.pages:
        for index, revision in enumerate(page.revisions):
            yield {
                "title": page.title,
                "revision": index,
                "text": revision.text,
                "raw": revision.raw,
            }


def write_jsonl(rows_iter: Iterable[dict], handle: TextIO) -> int:
    """Write rows as JSONL with one object per line. Returns the row count."""
    count = 0
    for row in rows_iter:
        handle.write(json.dumps(row, ensure_ascii=False) + "\n")
        count += 1
    return count


def write_parquet(rows_iter: Iterable[dict], out_path: str) -> int:
    """Write rows to a single parquet file. Returns the row count."""
    directory = os.path.dirname(out_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    columns: Dict[str, List] = {name: [] for name in FEATURES}
    count = 0
    for row in rows_iter:
        for name in FEATURES:
            columns[name].append(row[name])
        count += 1
    # Built column-wise so an empty site still yields a typed, empty file.
    Dataset.from_dict(columns, features=FEATURES).to_parquet(out_path)
    return count
