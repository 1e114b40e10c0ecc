from __future__ import annotations

import logging
import sys
from datetime import datetime
from typing import Callable, Optional, TextIO


ProgressFn = Callable[[int], None]

_LOG = logging.getLogger("singlegrep.progress")


def _now_hms() -> str:
    return datetime.now().strftime("%H:%M:%S")


class ProgressReporter:
    """Console status lines for a grep run.

    Phase markers are timestamped (HH:MM:SS) and also go to the log. The
    percentage is redrawn in place with a carriage return.
    """

    def __init__(self, stream: Optional[TextIO] = None, clock: Optional[Callable[[], str]] = None) -> None:
        self._stream = stream
        self._clock = clock or _now_hms
        self._last_percent: Optional[int] = None

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so a tee installed by app logging is picked up.
        return self._stream if self._stream is not None else sys.stdout

    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def phase(self, message: str) -> None:
        _LOG.info(message)
        self._write(f"{self._clock()} {message}\n")

    def info(self, message: str) -> None:
        _LOG.info(message)
        self._write(f"{message}\n")

    def percent(self, value: int) -> None:
        if value == self._last_percent:
            return
        self._last_percent = value
        self._write(f"\rProgress {value} percent.")

    def finish(self, message: str) -> None:
        _LOG.info(message)
        self._last_percent = None
        self._write(f"\r{self._clock()} {message}\n")
