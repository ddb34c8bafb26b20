"""Port for the job-level stop control of a running import."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ImportJobControl(Protocol):
    def is_in_progress(self) -> bool: ...

    def request_stop(self) -> None: ...


__all__ = ["ImportJobControl"]
