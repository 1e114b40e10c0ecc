from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Pattern, Sequence, Tuple

from .errors import GrepIOError
from .progress import ProgressFn
from .selector import compile_pattern


MatchRow = Tuple[bytes, ...]

_LOG = logging.getLogger("singlegrep.extractor")


def count_groups(pattern: str) -> int:
    return compile_pattern(pattern, what="data", as_bytes=True).groups


def progress_percent(index: int, file_count: int) -> int:
    """Percent done after processing file ``index`` (0-based); floors like integer division."""
    if file_count <= 0:
        return 0
    return (index + 1) * 100 // file_count


def read_file_bytes(path: str) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise GrepIOError(f"Cannot read {path!r}: {e}") from e


def extract_from_bytes(contents: bytes, rx: Pattern[bytes]) -> List[MatchRow]:
    """One row per match: groups 1..N, with non-participating groups as b"".

    An empty match that starts exactly where the previous match ended is not
    a row, so `(.*)` yields one row per line rather than an extra blank one.
    """
    rows: List[MatchRow] = []
    prev_end = -1
    for m in rx.finditer(contents):
        if m.start() == m.end() == prev_end:
            continue
        prev_end = m.end()
        rows.append(tuple(g if g is not None else b"" for g in m.groups()))
    return rows


def extract_rows(
    files: Sequence[str],
    pattern: str,
    *,
    progress: Optional[ProgressFn] = None,
) -> List[MatchRow]:
    """Scan every file in order and collect one row per data pattern match.

    Rows keep file order, then match order within a file. Any read failure
    aborts the whole extraction.
    """
    rx = compile_pattern(pattern, what="data", as_bytes=True)
    file_count = len(files)
    rows: List[MatchRow] = []
    if file_count == 0:
        return rows

    for i, path in enumerate(files):
        found = extract_from_bytes(read_file_bytes(path), rx)
        if found:
            _LOG.debug("%s: %d match(es)", path, len(found))
            rows.extend(found)
        if progress:
            progress(progress_percent(i, file_count))
    return rows
