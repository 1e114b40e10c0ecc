from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional, Sequence

from .config import GrepConfig
from .constants import COLUMN_SEPARATOR, LINE_SEPARATOR, REPORT_SUFFIX
from .errors import ConfigError, GrepIOError


OutputNamer = Callable[[GrepConfig, Path], str]

_LOG = logging.getLogger("singlegrep.report")


def render_header(header: str) -> bytes:
    try:
        encoded = header.replace(" ", "\t").encode("utf-8")
    except UnicodeEncodeError as e:
        raise ConfigError(f"Column header {header!r} is not valid UTF-8 text: {e}") from e
    return encoded + LINE_SEPARATOR


def render_report(header: str, rows: Iterable[Sequence[bytes]]) -> bytes:
    """Header line (spaces -> tabs), then one tab-joined line per row.

    Every line, including the last and any empty row, ends with a single LF.
    """
    parts = [render_header(header)]
    for row in rows:
        parts.append(COLUMN_SEPARATOR.join(row))
        parts.append(LINE_SEPARATOR)
    return b"".join(parts)


# ---------------------------------------------------------------------------
# Output naming strategies
# ---------------------------------------------------------------------------


def name_from_output_file_name(config: GrepConfig, config_path: Path) -> str:
    name = config.output_file_name
    if not name:
        raise ConfigError(f"OutputFileName is required by this naming mode but is empty in {str(config_path)!r}")
    return name


def name_from_config_file(config: GrepConfig, config_path: Path) -> str:
    # Everything before the first dot: "daily.grep.json" -> "daily.txt".
    stem = os.path.basename(str(config_path)).split(".")[0]
    return stem + REPORT_SUFFIX


NAMING_STRATEGIES: Dict[str, OutputNamer] = {
    "output-file-name": name_from_output_file_name,
    "config-name": name_from_config_file,
}

NAMING_MODES = ("auto", *NAMING_STRATEGIES.keys())


def resolve_output_namer(mode: str, config: GrepConfig) -> OutputNamer:
    if mode == "auto":
        return name_from_output_file_name if config.output_file_name else name_from_config_file
    try:
        return NAMING_STRATEGIES[mode]
    except KeyError:
        raise ConfigError(f"Unknown output naming mode {mode!r} (expected one of: {', '.join(NAMING_MODES)})") from None


def output_path_for(
    output_dir: str | Path,
    config: GrepConfig,
    config_path: Path,
    namer: Optional[OutputNamer] = None,
) -> Path:
    namer = namer or resolve_output_namer("auto", config)
    return Path(output_dir) / namer(config, config_path)


def write_report(path: Path, data: bytes) -> None:
    """Truncate-or-create `path` and write the whole report in one call."""
    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise GrepIOError(f"Cannot write report {str(path)!r}: {e}") from e
    _LOG.info("Wrote %d byte(s) to %s", len(data), path)
