from __future__ import annotations

import logging
import logging.handlers
import os
import time
from typing import Callable, Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(
    level: str = "INFO",
    to_file: bool = True,
    log_dir: Optional[str] = None,
    filename: str = "imu_bridge.log",
) -> None:
    """Configure the root logger for the bridge process.

    Args:
        level: Log level name (e.g., "DEBUG", "INFO"). Unknown names fall back to INFO.
        to_file: Also write to ``<log_dir>/<filename>`` with size-based rotation.
        log_dir: Directory for log files; defaults to ./logs.
        filename: Log file name inside ``log_dir``.
    """
    lvl = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(lvl)

    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if to_file:
        log_dir = log_dir or os.path.join(os.getcwd(), "logs")
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                os.path.join(log_dir, filename), maxBytes=2 * 1024 * 1024, backupCount=3
            )
        )

    for h in handlers:
        h.setLevel(lvl)
        h.setFormatter(fmt)
        root.addHandler(h)

    # pymavlink's own loggers are chatty at DEBUG
    if lvl <= logging.DEBUG:
        logging.getLogger("pymavlink").setLevel(logging.INFO)


class Throttle:
    """Lets a caller through at most once per ``period_s`` seconds."""

    def __init__(self, period_s: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.period_s = float(period_s)
        self._clock = clock
        self._last: Optional[float] = None

    def ready(self) -> bool:
        now = self._clock()
        if self._last is not None and now - self._last < self.period_s:
            return False
        self._last = now
        return True
