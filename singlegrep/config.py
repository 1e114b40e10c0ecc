from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from .constants import (
    KEY_COLUMN_HEADER,
    KEY_DATA_PATTERN,
    KEY_FILE_PATH_PATTERN,
    KEY_OUTPUT_FILE_NAME,
    KEY_SEARCH_RECURSIVELY,
    KEY_SORT_BY_MOD_TIME,
)
from .errors import ConfigError


_LOG = logging.getLogger("singlegrep.config")


@dataclass(frozen=True)
class GrepConfig:
    file_path_pattern: str = ""
    search_recursively: bool = False
    sort_by_mod_time: bool = False
    data_pattern: str = ""
    column_header: str = ""
    output_file_name: str = ""

    def describe(self) -> str:
        return (
            f"GrepConfig; FilePattern={self.file_path_pattern!r}; Recursively={self.search_recursively}; "
            f"SortByModTime={self.sort_by_mod_time}; RegExp={self.data_pattern!r}; "
            f"ColumnHeader={self.column_header!r}; OutputFileName={self.output_file_name!r};"
        )

    def to_json_dict(self) -> Dict[str, Any]:
        return {
            KEY_FILE_PATH_PATTERN: self.file_path_pattern,
            KEY_SEARCH_RECURSIVELY: self.search_recursively,
            KEY_SORT_BY_MOD_TIME: self.sort_by_mod_time,
            KEY_DATA_PATTERN: self.data_pattern,
            KEY_COLUMN_HEADER: self.column_header,
            KEY_OUTPUT_FILE_NAME: self.output_file_name,
        }


# (json key, dataclass field, expected type)
_FIELDS = (
    (KEY_FILE_PATH_PATTERN, "file_path_pattern", str),
    (KEY_SEARCH_RECURSIVELY, "search_recursively", bool),
    (KEY_SORT_BY_MOD_TIME, "sort_by_mod_time", bool),
    (KEY_DATA_PATTERN, "data_pattern", str),
    (KEY_COLUMN_HEADER, "column_header", str),
    (KEY_OUTPUT_FILE_NAME, "output_file_name", str),
)


def parse_config(data: Any) -> GrepConfig:
    """Map a decoded Setting JSON object onto a GrepConfig.

    Keys match exactly first, then case-insensitively. Unknown keys are
    ignored; missing keys and nulls keep their zero value. A known key
    holding the wrong JSON type is a ConfigError.
    """
    if not isinstance(data, dict):
        raise ConfigError(f"Setting JSON must be an object, got {type(data).__name__}")

    folded = {str(k).lower(): k for k in data}
    values: Dict[str, Any] = {}
    used = set()
    for key, field_name, typ in _FIELDS:
        src_key = key if key in data else folded.get(key.lower())
        if src_key is None:
            continue
        used.add(src_key)
        val = data[src_key]
        if val is None:
            continue
        if not isinstance(val, typ):
            raise ConfigError(f"Setting {key!r} must be a {'boolean' if typ is bool else 'string'}, got {val!r}")
        values[field_name] = val

    unknown = sorted(str(k) for k in data if k not in used)
    if unknown:
        _LOG.debug("Ignoring unknown setting keys: %s", ", ".join(str(k) for k in unknown))
    return GrepConfig(**values)


def load_config(path: str | Path) -> GrepConfig:
    p = Path(path)
    try:
        raw = p.read_bytes()
    except OSError as e:
        raise ConfigError(f"Cannot read setting JSON {str(p)!r}: {e}") from e
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigError(f"Malformed setting JSON {str(p)!r}: {e}") from e

    cfg = parse_config(data)
    _LOG.info("Loaded %s from %s", cfg.describe(), p)
    return cfg
