"""Stop control for a running import job."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import StrEnum
from http import HTTPStatus
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bulkimport.domain.ports.control import ImportJobControl

log = logging.getLogger(__name__)


class StopOutcome(StrEnum):
    """Result of asking a job to stop."""

    STOP_REQUESTED = "stop requested"
    NO_IMPORTS_IN_PROGRESS = "no imports in progress"

    @property
    def status(self) -> HTTPStatus:
        if self is StopOutcome.STOP_REQUESTED:
            return HTTPStatus.ACCEPTED
        return HTTPStatus.BAD_REQUEST


@dataclass(frozen=True, slots=True)
class StopResult:
    outcome: StopOutcome
    message: str

    @property
    def status_code(self) -> int:
        return int(self.outcome.status)


def request_stop(control: ImportJobControl) -> StopResult:
    """Ask ``control`` to stop if, and only if, an import is running."""

    if control.is_in_progress():
        control.request_stop()
        log.info("Stop requested for running import")
        return StopResult(outcome=StopOutcome.STOP_REQUESTED, message="Stop requested.")
    log.info("Stop requested but no import is in progress")
    return StopResult(
        outcome=StopOutcome.NO_IMPORTS_IN_PROGRESS,
        message="No bulk imports are in progress.",
    )


class ImportJobState:
    """Thread-safe in-progress and stop-requested flags for one import job."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._in_progress = False
        self._stop_requested = threading.Event()

    def start(self) -> None:
        with self._lock:
            if self._in_progress:
                raise RuntimeError("import already in progress")
            self._in_progress = True
            self._stop_requested.clear()

    def finish(self) -> None:
        with self._lock:
            self._in_progress = False

    def is_in_progress(self) -> bool:
        with self._lock:
            return self._in_progress

    def request_stop(self) -> None:
        self._stop_requested.set()

    @property
    def stop_requested(self) -> bool:
        return self._stop_requested.is_set()


__all__ = ["ImportJobState", "StopOutcome", "StopResult", "request_stop"]
