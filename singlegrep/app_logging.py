from __future__ import annotations

import logging
import os
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO, cast

from .constants import ENV_LOG_LEVEL, ENV_LOG_TO_CONSOLE, ENV_NO_FILE_LOG, LOGS_DIRNAME
from .util import env_bool, find_app_root


_LOG = logging.getLogger("singlegrep")

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class _Tee:
    """Write to two streams (used to mirror stdout/stderr to a file)."""

    def __init__(self, primary, secondary) -> None:
        self._primary = primary
        self._secondary = secondary

    def write(self, s: str) -> int:
        n = 0
        try:
            n = self._primary.write(s)
        except Exception:
            pass
        try:
            self._secondary.write(s)
        except Exception:
            pass
        return n

    def flush(self) -> None:
        try:
            self._primary.flush()
        except Exception:
            pass
        try:
            self._secondary.flush()
        except Exception:
            pass


def _log_level() -> int:
    lvl_name = str(os.environ.get(ENV_LOG_LEVEL, "INFO") or "INFO").upper().strip()
    level = getattr(logging, lvl_name, logging.INFO)
    return level if isinstance(level, int) else logging.INFO


def init_app_logging(component: str = "grep") -> Optional[Path]:
    """Initialise per-run log file under ./logs.

    Creates a timestamped log file and:
      * attaches a FileHandler to the `logging` root
      * tees stdout/stderr into the same file
      * installs an excepthook to capture uncaught exceptions

    Setting SINGLEGREP_NO_FILE_LOG skips the file entirely (console handler
    only, when requested). Returns the log file path on success, otherwise None.
    """
    # Avoid double-initialisation
    if getattr(init_app_logging, "_initialised", False):
        return getattr(init_app_logging, "_log_path", None)

    level = _log_level()
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if env_bool(ENV_LOG_TO_CONSOLE):
        sh = logging.StreamHandler(sys.stderr)
        sh.setLevel(level)
        sh.setFormatter(logging.Formatter(_FORMAT))
        root_logger.addHandler(sh)

    # From here on a second call must not add another console handler.
    setattr(init_app_logging, "_initialised", True)
    setattr(init_app_logging, "_log_path", None)

    if env_bool(ENV_NO_FILE_LOG):
        return None

    try:
        pkg_dir = Path(__file__).resolve().parent
        root = find_app_root(pkg_dir)
        logs = root / LOGS_DIRNAME
        logs.mkdir(parents=True, exist_ok=True)

        ts = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        log_path = logs / f"{component}_{ts}.log"

        fh = logging.FileHandler(log_path, encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(logging.Formatter(_FORMAT))
        root_logger.addHandler(fh)

        # Tee stdout/stderr to file
        try:
            f = open(log_path, "a", encoding="utf-8", buffering=1)
            sys.stdout = cast(TextIO, _Tee(sys.stdout, f))
            sys.stderr = cast(TextIO, _Tee(sys.stderr, f))
        except Exception:
            # If tee fails, the file handler still captures logging.
            pass

        def _excepthook(exc_type, exc, tb):
            try:
                _LOG.error("Uncaught exception:\n%s", "".join(traceback.format_exception(exc_type, exc, tb)))
            except Exception:
                pass
            sys.__excepthook__(exc_type, exc, tb)

        sys.excepthook = _excepthook

        from . import __version__
        _LOG.info("=== Single Grep %s (%s) ===", __version__, component)
        _LOG.info("cwd=%s", str(Path.cwd()))
        _LOG.info("python=%s", sys.version.replace("\n", " "))

        setattr(init_app_logging, "_log_path", log_path)
        return log_path
    except OSError as e:
        _LOG.warning("File logging disabled: %s", e)
        return None


def current_log_path() -> Optional[Path]:
    """Return the current per-run log path, if logging was initialised."""
    return getattr(init_app_logging, "_log_path", None)


def logs_dir() -> Optional[Path]:
    """Return the logs directory used by the app (best-effort)."""
    try:
        lp = current_log_path()
        if lp is not None:
            return Path(lp).parent
        root = find_app_root(Path(__file__).resolve().parent)
        logs = root / LOGS_DIRNAME
        logs.mkdir(parents=True, exist_ok=True)
        return logs
    except OSError:
        return None
