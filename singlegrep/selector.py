from __future__ import annotations

import logging
import os
import re
import stat
from typing import Any, Iterator, List, Pattern, Sequence

from .errors import GrepIOError, PatternError, SelectionError


_LOG = logging.getLogger("singlegrep.selector")


def compile_pattern(pattern: str, *, what: str, as_bytes: bool = False) -> Pattern[Any]:
    """Compile a configured regular expression, turning re.error into PatternError.

    Bytes patterns are used for file contents so captured groups pass through
    without any decoding.
    """
    try:
        if as_bytes:
            return re.compile(pattern.encode("utf-8"))
        return re.compile(pattern)
    except (re.error, UnicodeEncodeError) as e:
        raise PatternError(what, pattern, str(e)) from e


def is_single_file(root: str, pattern: Pattern[str]) -> bool:
    """True when the input is a file rather than a folder.

    A file input must itself match the file path pattern; anything else is a
    configuration mistake, not an empty result.
    """
    try:
        st = os.stat(root)
    except OSError as e:
        raise GrepIOError(f"Cannot stat input {root!r}: {e}") from e
    if stat.S_ISDIR(st.st_mode):
        return False
    if not pattern.search(root):
        raise SelectionError(root, pattern.pattern)
    return True


def _sorted_entries(folder: str) -> List[os.DirEntry]:
    try:
        with os.scandir(folder) as it:
            return sorted(it, key=lambda e: e.name)
    except OSError as e:
        raise GrepIOError(f"Cannot list folder {folder!r}: {e}") from e


def _entry_is_file(entry: os.DirEntry) -> bool:
    try:
        return entry.is_file()
    except OSError as e:
        raise GrepIOError(f"Cannot stat {entry.path!r}: {e}") from e


def _entry_is_dir(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir(follow_symlinks=False)
    except OSError as e:
        raise GrepIOError(f"Cannot stat {entry.path!r}: {e}") from e


def list_files_top_only(root: str, pattern: Pattern[str]) -> List[str]:
    out: List[str] = []
    for entry in _sorted_entries(root):
        if not _entry_is_file(entry):
            continue
        path = os.path.join(root, entry.name)
        if pattern.search(path):
            out.append(path)
    return out


def _walk_lexical(folder: str) -> Iterator[str]:
    # Depth-first, files and sub-folders interleaved by name. Symlinked
    # folders are not followed.
    for entry in _sorted_entries(folder):
        path = os.path.join(folder, entry.name)
        if _entry_is_dir(entry):
            yield from _walk_lexical(path)
        elif _entry_is_file(entry):
            yield path


def list_files_recursively(root: str, pattern: Pattern[str]) -> List[str]:
    return [path for path in _walk_lexical(root) if pattern.search(path)]


def select_files(root: str, pattern: str, recursive: bool) -> List[str]:
    """Return the candidate file paths for one run, in traversal order."""
    rx = compile_pattern(pattern, what="file path")
    if is_single_file(root, rx):
        files = [root]
    elif recursive:
        files = list_files_recursively(root, rx)
    else:
        files = list_files_top_only(root, rx)
    _LOG.info("Selected %d file(s) under %s (recursive=%s)", len(files), root, recursive)
    return files


def file_mod_time(path: str) -> int:
    try:
        return int(os.stat(path).st_mtime)
    except OSError as e:
        raise GrepIOError(f"Cannot stat {path!r}: {e}") from e


def sort_files_by_mod_time(files: Sequence[str]) -> List[str]:
    # Whole seconds; sorted() is stable so equal stamps keep traversal order.
    stamps = {path: file_mod_time(path) for path in files}
    return sorted(files, key=lambda p: stamps[p])
