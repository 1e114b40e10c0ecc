"""Cross-platform launcher (double-click friendly).

Usage:
  python run_singlegrep.py [--debug] [-- <extra args>]

Equivalent to:
  python -m singlegrep run
"""

from __future__ import annotations

import os
import sys
from typing import List


def main(argv: List[str]) -> int:
    lvl = "INFO"
    passthrough: List[str] = []

    it = iter(argv[1:])
    for a in it:
        if a.lower() == "--debug":
            lvl = "DEBUG"
        elif a == "--":
            passthrough.extend(list(it))
            break
        else:
            passthrough.append(a)

    os.environ.setdefault("SINGLEGREP_LOG_TO_CONSOLE", "1" if lvl == "DEBUG" else "0")
    os.environ.setdefault("SINGLEGREP_LOG_LEVEL", lvl)
    os.environ.setdefault("PYTHONUNBUFFERED", "1")

    from singlegrep.cli import main as cli_main

    return int(cli_main(["run", *passthrough]))


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
