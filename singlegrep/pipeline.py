from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config import GrepConfig
from .extractor import count_groups, extract_rows
from .progress import ProgressReporter
from .report import OutputNamer, output_path_for, render_report, write_report
from .selector import select_files, sort_files_by_mod_time


_LOG = logging.getLogger("singlegrep.pipeline")


@dataclass(frozen=True)
class GrepResult:
    input_path: str
    output_path: Path
    file_count: int
    match_count: int
    sorted_by_mod_time: bool


def run_grep(
    config: GrepConfig,
    input_path: str,
    output_dir: str | Path,
    *,
    config_path: str | Path,
    namer: Optional[OutputNamer] = None,
    reporter: Optional[ProgressReporter] = None,
) -> GrepResult:
    """Select files, extract rows and write the report.

    Each stage returns a fresh value that feeds the next. The first GrepError
    propagates unchanged; nothing is written unless every stage succeeded.
    """
    rep = reporter or ProgressReporter()
    # Resolve the destination first so a naming problem fails before any scanning.
    out_path = output_path_for(output_dir, config, Path(config_path), namer)

    rep.phase("Populate files")
    files = select_files(input_path, config.file_path_pattern, config.search_recursively)
    rep.info(f"File Count = {len(files)}")

    if config.sort_by_mod_time:
        files = sort_files_by_mod_time(files)
        rep.phase("Files are sorted by Mod Time.")

    if count_groups(config.data_pattern) == 0:
        _LOG.warning("Data pattern %r has no capture groups; every match renders as an empty line", config.data_pattern)

    rep.phase("Find matches")
    rep.phase("Start extraction")
    rows = extract_rows(files, config.data_pattern, progress=rep.percent)
    rep.finish("Completed extraction")
    rep.phase(f"Match Count = {len(rows)}")

    report = render_report(config.column_header, rows)
    rep.phase(f"Writing file: {str(out_path)!r}")
    write_report(out_path, report)
    rep.phase("Completed")

    return GrepResult(
        input_path=input_path,
        output_path=out_path,
        file_count=len(files),
        match_count=len(rows),
        sorted_by_mod_time=bool(config.sort_by_mod_time),
    )
