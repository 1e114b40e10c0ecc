from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from singlegrep.errors import GrepIOError, PatternError
from singlegrep.extractor import count_groups, extract_rows, progress_percent
from singlegrep.report import render_report
from tests.conftest import LOG_PATTERN
from tests.fixtures.fake_tree import make_fake_tree


def test_k_matches_give_k_rows_without_group_zero(tmp_path: Path) -> None:
    tree = make_fake_tree(tmp_path)
    rows = extract_rows([tree.path("sub/d.txt")], LOG_PATTERN)
    assert rows == [
        (b"2024/01/02 08:00:00", b"STOP"),
        (b"2024/01/02 08:30:00", b"RESUME"),
    ]


def test_file_without_matches_contributes_nothing(tmp_path: Path) -> None:
    tree = make_fake_tree(tmp_path)
    assert extract_rows([tree.path("c.txt")], LOG_PATTERN) == []


def test_rows_follow_file_order(tmp_path: Path) -> None:
    tree = make_fake_tree(tmp_path)
    files = [tree.path("sub/deeper/e.txt"), tree.path("c.txt"), tree.path("a.txt")]
    rows = extract_rows(files, LOG_PATTERN)
    assert [r[1] for r in rows] == [b"END", b"START"]


def test_raw_bytes_pass_through(tmp_path: Path) -> None:
    p = tmp_path / "latin1.txt"
    p.write_bytes(b"name=caf\xe9;\nname=ok;\n")
    rows = extract_rows([str(p)], r"name=([^;]*);")
    assert rows == [(b"caf\xe9",), (b"ok",)]


def test_non_participating_group_is_empty(tmp_path: Path) -> None:
    p = tmp_path / "x.txt"
    p.write_text("a=1\nb\n", encoding="utf-8")
    rows = extract_rows([str(p)], r"(\w)(?:=(\d))?\n")
    assert rows == [(b"a", b"1"), (b"b", b"")]


@pytest.mark.parametrize(
    "contents,pattern,expected",
    [
        (b"ab\ncd", r"(.*)", [(b"ab",), (b"cd",)]),
        (b"baaa", r"(a*)", [(b"",), (b"aaa",)]),
        (b"", r"(a*)", [(b"",)]),
    ],
)
def test_empty_match_right_after_previous_match_is_skipped(
    tmp_path: Path, contents: bytes, pattern: str, expected: List[tuple]
) -> None:
    p = tmp_path / "x.txt"
    p.write_bytes(contents)
    assert extract_rows([str(p)], pattern) == expected


def test_line_pattern_report_has_no_blank_rows(tmp_path: Path) -> None:
    p = tmp_path / "x.txt"
    p.write_bytes(b"ab\ncd")
    assert render_report("Line", extract_rows([str(p)], r"(.*)")) == b"Line\nab\ncd\n"


def test_pattern_without_groups_gives_empty_rows(tmp_path: Path) -> None:
    p = tmp_path / "x.txt"
    p.write_text("aaa", encoding="utf-8")
    assert count_groups("a") == 0
    assert extract_rows([str(p)], "a") == [(), (), ()]


def test_unreadable_file_aborts(tmp_path: Path) -> None:
    tree = make_fake_tree(tmp_path)
    with pytest.raises(GrepIOError):
        extract_rows([tree.path("a.txt"), str(tmp_path / "vanished.txt")], LOG_PATTERN)


def test_invalid_data_pattern_fails_even_without_files() -> None:
    with pytest.raises(PatternError) as e:
        extract_rows([], r"(unclosed")
    assert e.value.what == "data"


def test_progress_reported_after_each_file(tmp_path: Path) -> None:
    tree = make_fake_tree(tmp_path)
    seen: List[int] = []
    files = [tree.path("a.txt"), tree.path("c.txt"), tree.path("sub/d.txt")]
    extract_rows(files, LOG_PATTERN, progress=seen.append)
    assert seen == [33, 66, 100]


def test_zero_files_reports_nothing() -> None:
    seen: List[int] = []
    assert extract_rows([], LOG_PATTERN, progress=seen.append) == []
    assert seen == []


@pytest.mark.parametrize(
    "index,count,expected",
    [(0, 1, 100), (0, 3, 33), (1, 3, 66), (2, 3, 100), (0, 0, 0), (6, 7, 100), (0, 200, 0)],
)
def test_progress_percent_floors(index: int, count: int, expected: int) -> None:
    assert progress_percent(index, count) == expected
