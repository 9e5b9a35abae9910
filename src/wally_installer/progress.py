"""Progress reporting for install runs.

The sink is passed into ``install`` explicitly and shared by every worker
unit, so implementations must be safe to call from several threads.
"""

import logging
import threading
from typing import Protocol

from .package_id import PackageId

logger = logging.getLogger(__name__)


class ProgressSink(Protocol):
    """Receives install progress events."""

    def start(self, total: int) -> None:
        """Called once before any unit is scheduled."""
        ...

    def package_installed(self, package_id: PackageId) -> None:
        """Called from a worker thread after a package was installed."""
        ...

    def finish(self, count: int) -> None:
        """Called once after every unit succeeded."""
        ...


class LoggingProgress:
    """Thread-safe sink that reports progress through logging."""

    def __init__(self, log: logging.Logger | None = None):
        self._log = log or logger
        self._lock = threading.Lock()
        self.total = 0
        self.completed = 0

    def start(self, total: int) -> None:
        with self._lock:
            self.total = total
            self.completed = 0

    def package_installed(self, package_id: PackageId) -> None:
        with self._lock:
            self.completed += 1
            self._log.info(f"Installed {package_id} ({self.completed}/{self.total})")

    def finish(self, count: int) -> None:
        self._log.info(f"Installed {count} packages!")
