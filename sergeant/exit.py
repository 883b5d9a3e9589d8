"""
Exit status tracking and shutdown callbacks.

The coordinator records the worst exit status reported during a run and runs
registered shutdown callbacks exactly once before the process terminates.
Both are safe to use from threads spawned by command bodies.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import TYPE_CHECKING, NoReturn

from .constants import EXIT_FAILURE, EXIT_SUCCESS

if TYPE_CHECKING:
    from .log import Logger


class ExitCoordinator:
    """
    Tracks the process exit status and runs shutdown callbacks.

    Usage:
        coordinator = ExitCoordinator()
        coordinator.atexit(lambda: conn.close())
        coordinator.set_exit_status(1)

        # Single terminal action of a normal run:
        coordinator.finalize()  # runs callbacks, raises SystemExit(1)
    """

    def __init__(self, lg: Logger | None = None) -> None:
        """
        Initialize the coordinator.

        Args:
            lg: Logger for callback failures (optional)
        """
        self._lg = lg
        self._lock = threading.Lock()
        self._exit_status = EXIT_SUCCESS
        self._callbacks: list[Callable[[], object]] = []
        self._finalized = False

    @property
    def exit_status(self) -> int:
        with self._lock:
            return self._exit_status

    @property
    def finalized(self) -> bool:
        return self._finalized

    def set_exit_status(self, n: int) -> None:
        """Raise the recorded exit status to n; lower values are ignored."""
        with self._lock:
            if n > self._exit_status:
                self._exit_status = n

    def atexit(self, callback: Callable[[], object]) -> None:
        """Register a zero-argument callback to run at finalize()."""
        with self._lock:
            self._callbacks.append(callback)

    def _take_callbacks(self) -> list[Callable[[], object]]:
        with self._lock:
            if self._finalized:
                return []
            self._finalized = True
            return list(self._callbacks)

    def run_callbacks(self) -> None:
        """
        Run each registered callback once, in registration order.

        A failing callback is logged and raises the exit status to 1; the
        remaining callbacks still run. Later calls do nothing.
        """
        for callback in self._take_callbacks():
            try:
                callback()
            except Exception as e:
                self.set_exit_status(EXIT_FAILURE)
                if self._lg is not None:
                    self._lg.error(
                        "shutdown callback failed",
                        extra={"callback": getattr(callback, "__name__", callback)},
                        exc_info=e,
                    )

    def finalize(self) -> NoReturn:
        """Run shutdown callbacks, then terminate with the recorded status."""
        self.run_callbacks()
        status = self.exit_status
        if self._lg is not None:
            self._lg.debug("exit", extra={"status": status})
        raise SystemExit(status)

    def exit(self, status: int) -> NoReturn:
        """Report status, then finalize."""
        self.set_exit_status(status)
        self.finalize()
