"""Target discovery package: the source Protocol shared by discovery clients."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .models import TargetList


@runtime_checkable
class TargetSource(Protocol):
    """Protocol that every discovery source with deferred I/O must satisfy."""

    def discover(self) -> TargetList:
        """Return the targets this source currently knows about."""
        ...
