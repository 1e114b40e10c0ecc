from __future__ import annotations

import json
import os
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, cast


_INPUT_JUNK = ("\r\n", "\r", "\n", '"')


def clean_user_input(text: str) -> str:
    """Strip CR/LF and double quotes (pasted Windows paths come quoted)."""
    for junk in _INPUT_JUNK:
        text = text.replace(junk, "")
    return text


def to_jsonable(obj: Any) -> Any:
    if is_dataclass(obj) and not isinstance(obj, type):
        return {k: to_jsonable(v) for k, v in asdict(cast(Any, obj)).items()}
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, (bytes, bytearray)):
        return bytes(obj).decode("utf-8", errors="replace")
    if isinstance(obj, dict):
        return {str(k): to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(x) for x in obj]
    return obj


def dumps_pretty(obj: Any) -> str:
    return json.dumps(to_jsonable(obj), indent=2, sort_keys=True, ensure_ascii=False)


def env_bool(name: str, default: bool = False) -> bool:
    val = os.environ.get(name)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "y", "on"}


def find_app_root(start: Path | None = None) -> Path:
    """Best-effort app root finder.

    Prefers a folder that contains run_singlegrep.py or README.md (portable zip
    use-case), otherwise falls back to the current working directory.
    """
    try:
        cur = (start or Path(__file__).resolve().parent)
        cur = cur if isinstance(cur, Path) else Path(str(cur))
        for _ in range(8):
            if (cur / "run_singlegrep.py").is_file() or (cur / "README.md").is_file():
                return cur
            if cur.parent == cur:
                break
            cur = cur.parent
    except Exception:
        pass
    try:
        return Path.cwd()
    except Exception:
        return Path(__file__).resolve().parent
