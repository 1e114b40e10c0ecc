from __future__ import annotations

# ---------------------------------------------------------------------------
# Shared constants
# ---------------------------------------------------------------------------

# App folders
LOGS_DIRNAME = "logs"

# Environment switches
ENV_LOG_LEVEL = "SINGLEGREP_LOG_LEVEL"
ENV_LOG_TO_CONSOLE = "SINGLEGREP_LOG_TO_CONSOLE"
ENV_NO_FILE_LOG = "SINGLEGREP_NO_FILE_LOG"

# ---------------------------------------------------------------------------
# Setting JSON keys
# ---------------------------------------------------------------------------

KEY_FILE_PATH_PATTERN = "AbsoluteFilePathRegExpPattern"
KEY_SEARCH_RECURSIVELY = "SearchFilesRecursively"
KEY_SORT_BY_MOD_TIME = "SortFilesByModTime"
KEY_DATA_PATTERN = "DataRegExpPattern"
KEY_COLUMN_HEADER = "ColumnHeaderSpaceSeparated"
KEY_OUTPUT_FILE_NAME = "OutputFileName"

# ---------------------------------------------------------------------------
# Report format
# ---------------------------------------------------------------------------

COLUMN_SEPARATOR = b"\t"
LINE_SEPARATOR = b"\n"
REPORT_SUFFIX = ".txt"

TITLE = "======= Single Grep ========"
