from __future__ import annotations

import time
from typing import Callable, Optional, Protocol

from ..core.types import Header


class TimeSynchronizer(Protocol):
    """Turns a device clock reading into a host-time header."""

    def header(self, frame_id: str, device_time_s: float) -> Header: ...


class OffsetTimeSynchronizer:
    """Applies a known device-to-host clock offset.

    Until an offset is set the host wall clock is used, i.e. the message is
    stamped with its arrival time.
    """

    def __init__(self, offset_s: Optional[float] = None, clock: Callable[[], float] = time.time) -> None:
        self.offset_s = offset_s
        self._clock = clock

    def set_offset(self, offset_s: Optional[float]) -> None:
        self.offset_s = offset_s

    def header(self, frame_id: str, device_time_s: float) -> Header:
        if self.offset_s is None or device_time_s <= 0.0:
            stamp = self._clock()
        else:
            stamp = device_time_s + self.offset_s
        return Header(stamp=stamp, frame_id=frame_id)
