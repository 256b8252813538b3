"""Progress reporting for directory loads.

Progress sinks are advisory: an exception raised by a sink is logged and
swallowed so that it can never change what a load returns.
"""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class LoadCallback(Protocol):
    def start(self, total: int) -> None: ...
    def advance(self) -> None: ...
    def finish(self) -> None: ...


def notify_start(callback: LoadCallback | None, total: int) -> None:
    if callback is None:
        return
    try:
        callback.start(total)
    except Exception:  # noqa: BLE001
        logger.warning(
            "event=progress_callback_failed step=start",
            exc_info=True,
        )


def notify_advance(callback: LoadCallback | None) -> None:
    if callback is None:
        return
    try:
        callback.advance()
    except Exception:  # noqa: BLE001
        logger.warning(
            "event=progress_callback_failed step=advance",
            exc_info=True,
        )


def notify_finish(callback: LoadCallback | None) -> None:
    if callback is None:
        return
    try:
        callback.finish()
    except Exception:  # noqa: BLE001
        logger.warning(
            "event=progress_callback_failed step=finish",
            exc_info=True,
        )


class ConsoleProgress:
    """Logs ``completed/total`` as files finish."""

    def __init__(self) -> None:
        self.total = 0
        self.completed = 0

    def start(self, total: int) -> None:
        self.total = total
        self.completed = 0
        logger.info("event=remark_load_start files=%d", total)

    def advance(self) -> None:
        self.completed += 1
        logger.info(
            "event=remark_load_progress completed=%d total=%d",
            self.completed,
            self.total,
        )

    def finish(self) -> None:
        logger.info(
            "event=remark_load_done completed=%d total=%d",
            self.completed,
            self.total,
        )
