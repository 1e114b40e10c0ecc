#!/usr/bin/env python3
"""Release gate convenience runner.

Runs compile + tests + lint + typecheck, optionally a scripted end-to-end grep
over a throwaway folder, and can package a source zip under ./dist/.

This is intentionally lightweight and has no external dependencies.
"""

from __future__ import annotations

import argparse
import json
import re
import subprocess
import sys
import tempfile
import zipfile
from pathlib import Path


def _repo_root() -> Path:
    # scripts/release_gate.py -> repo root
    return Path(__file__).resolve().parents[1]


def _read_version(repo_root: Path) -> str:
    p = repo_root / "singlegrep" / "__init__.py"
    s = p.read_text(encoding="utf-8")
    m = re.search(r"__version__\s*=\s*['\"]([^'\"]+)['\"]", s)
    if not m:
        raise RuntimeError(f"Could not parse __version__ from {p}")
    return m.group(1)


def _run(cmd: list[str], *, cwd: Path) -> None:
    print("[release_gate] " + " ".join(cmd))
    subprocess.run(cmd, cwd=str(cwd), check=True)


_EXCLUDED_TOP = {
    ".git",
    ".venv",
    "venv",
    "build",
    "dist",
    "htmlcov",
    ".mypy_cache",
    ".ruff_cache",
    ".pytest_cache",
}


def _is_excluded(rel_posix: str) -> bool:
    parts = rel_posix.split("/")
    if parts[0] in _EXCLUDED_TOP:
        return True
    for part in parts:
        if part in {"__pycache__", "logs"} or part.endswith(".egg-info"):
            return True
    base = parts[-1]
    if base in {".DS_Store", "Thumbs.db", "coverage.xml", ".coverage"} or base.startswith(".coverage."):
        return True
    return base.endswith((".pyc", ".pyo", ".log"))


def _make_zip(repo_root: Path, out_zip: Path) -> None:
    out_zip.parent.mkdir(parents=True, exist_ok=True)
    if out_zip.exists():
        out_zip.unlink()

    with zipfile.ZipFile(out_zip, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for abs_path in sorted(repo_root.rglob("*")):
            if abs_path.is_dir():
                continue
            rel_posix = abs_path.relative_to(repo_root).as_posix()
            if _is_excluded(rel_posix):
                continue
            zf.write(abs_path, rel_posix)


def _sample_run(repo_root: Path) -> None:
    """Grep a two-file folder through the real CLI and check the report bytes."""
    with tempfile.TemporaryDirectory(prefix="singlegrep_gate_") as td:
        work = Path(td)
        data = work / "data"
        data.mkdir()
        (data / "a.txt").write_text("2024/01/01 10:00:00 START\n", encoding="utf-8")
        (data / "b.log").write_text("2024/01/01 11:00:00 IGNORED\n", encoding="utf-8")
        setting = work / "gate.json"
        setting.write_text(
            json.dumps(
                {
                    "AbsoluteFilePathRegExpPattern": r".*\.txt$",
                    "SearchFilesRecursively": False,
                    "DataRegExpPattern": r"(\d{4}/\d{2}/\d{2} \d{2}:\d{2}:\d{2}) ([A-Z]+)",
                    "ColumnHeaderSpaceSeparated": "DateTime Event",
                }
            ),
            encoding="utf-8",
        )
        _run(
            [sys.executable, "-m", "singlegrep", "run", "--config", str(setting), "--input", str(data), "--output", str(work)],
            cwd=repo_root,
        )
        got = (work / "gate.txt").read_bytes()
        want = b"DateTime\tEvent\n2024/01/01 10:00:00\tSTART\n"
        if got != want:
            raise RuntimeError(f"Sample run produced {got!r}, expected {want!r}")


def main(argv: list[str] | None = None) -> int:
    repo_root = _repo_root()

    ap = argparse.ArgumentParser(description="Release gate: smoke checks + optional source zip")
    ap.add_argument("--with-sample-run", action="store_true", help="Also run an end-to-end grep through `python -m singlegrep`.")
    ap.add_argument("--no-zip", action="store_true", help="Skip creating the source zip.")
    ap.add_argument("--outdir", default="dist", help="Output directory for artifacts (default: dist)")

    args = ap.parse_args(argv)

    version = _read_version(repo_root)
    outdir = (repo_root / args.outdir).resolve()

    print(f"[release_gate] repo: {repo_root}")
    print(f"[release_gate] python: {sys.executable}")
    print(f"[release_gate] version: {version}")

    print('[release_gate] tip: if ruff/mypy are missing, install: python -m pip install -e ".[dev]"')

    _run([sys.executable, "-B", "-m", "compileall", "singlegrep"], cwd=repo_root)
    print("[release_gate] compileall: ok")

    _run([sys.executable, "-m", "pytest", "-q"], cwd=repo_root)
    print("[release_gate] pytest: ok")

    _run([sys.executable, "-m", "ruff", "check", ".", "--force-exclude"], cwd=repo_root)
    print("[release_gate] ruff: ok")

    # Scope comes from [tool.mypy] in pyproject.toml.
    _run([sys.executable, "-m", "mypy"], cwd=repo_root)
    print("[release_gate] mypy: ok")

    if args.with_sample_run:
        _sample_run(repo_root)
        print("[release_gate] sample run: ok")

    if not args.no_zip:
        out_zip = outdir / f"singlegrep_v{version}_src.zip"
        _make_zip(repo_root, out_zip)
        if not out_zip.exists():
            raise RuntimeError(f"Expected zip at {out_zip}, but it was not created")
        size_mb = out_zip.stat().st_size / (1024 * 1024)
        print(f"[release_gate] source zip: {out_zip} ({size_mb:.2f} MB)")

    print("[release_gate] all good")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
