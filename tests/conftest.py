from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterator

import pytest

import singlegrep.app_logging as app_logging


LOG_PATTERN = r"(\d{4}/\d{2}/\d{2} \d{2}:\d{2}:\d{2}) ([A-Z]+)"


@pytest.fixture(autouse=True)
def _no_per_run_log_file(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep CLI tests from creating ./logs or teeing stdout away from capsys."""
    monkeypatch.setenv("SINGLEGREP_NO_FILE_LOG", "1")
    monkeypatch.delenv("SINGLEGREP_LOG_TO_CONSOLE", raising=False)
    for attr in ("_initialised", "_log_path"):
        if hasattr(app_logging.init_app_logging, attr):
            delattr(app_logging.init_app_logging, attr)
    yield
    for attr in ("_initialised", "_log_path"):
        if hasattr(app_logging.init_app_logging, attr):
            delattr(app_logging.init_app_logging, attr)


def write_setting(path: Path, **values: Any) -> Path:
    """Write a Setting JSON using the on-disk key names."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(values), encoding="utf-8")
    return path


def write_log_setting(path: Path, *, file_pattern: str = r".*\.txt$", recursive: bool = False, **extra: Any) -> Path:
    return write_setting(
        path,
        AbsoluteFilePathRegExpPattern=file_pattern,
        SearchFilesRecursively=recursive,
        DataRegExpPattern=LOG_PATTERN,
        ColumnHeaderSpaceSeparated="DateTime Event",
        **extra,
    )
