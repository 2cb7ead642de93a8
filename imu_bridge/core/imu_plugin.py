from __future__ import annotations

import logging
from typing import Callable, List, Optional

from ..sensors.imu import (
    normalize_attitude,
    normalize_attitude_quaternion,
    normalize_highres_imu,
    normalize_raw_imu,
    normalize_scaled_imu,
    normalize_scaled_pressure,
)
from ..utils.timesync import OffsetTimeSynchronizer, TimeSynchronizer
from .arbiter import Arbiter
from .assembler import Output, OutputAssembler
from .messages import (
    Attitude,
    AttitudeQuaternion,
    HighresImu,
    ImuMessage,
    RawImu,
    ScaledImu,
    ScaledPressure,
)
from .sinks import Sink
from .types import ImuConfig, ImuRecord

log = logging.getLogger(__name__)


class ImuPlugin:
    """IMU and attitude arbiter/normalizer.

    Publishes orientation and rates in base_link/ENU (plus the autopilot's own
    aircraft/NED view), raw IMU data, magnetic field, pressure and temperature.

    The host must deliver ``handle`` and ``connection_changed`` calls one at a
    time; nothing here is guarded against concurrent use.
    """

    def __init__(
        self,
        sink: Sink,
        cfg: Optional[ImuConfig] = None,
        *,
        synchronizer: Optional[TimeSynchronizer] = None,
        is_ardupilotmega: Callable[[], bool] = lambda: False,
    ) -> None:
        self.cfg = cfg or ImuConfig()
        self.sink = sink
        self.is_ardupilotmega = is_ardupilotmega
        self.arbiter = Arbiter()
        self.assembler = OutputAssembler(self.cfg, synchronizer or OffsetTimeSynchronizer())

    @property
    def last_attitude_enu(self) -> Optional[ImuRecord]:
        return self.assembler.last_attitude_enu

    @property
    def last_attitude_ned(self) -> Optional[ImuRecord]:
        return self.assembler.last_attitude_ned

    def handle(self, msg: ImuMessage) -> int:
        """Arbitrate, normalize and publish one message. Returns the number of records published."""
        if not self.arbiter.accept(msg.kind):
            return 0
        outputs = self._process(msg)
        for topic, record in outputs:
            self.sink.publish(topic, record)
        return len(outputs)

    def connection_changed(self, connected: bool) -> None:
        """Any connection transition forgets which sources were seen."""
        log.debug("Connection %s, resetting IMU sources", "established" if connected else "lost")
        self.arbiter.reset()

    def _process(self, msg: ImuMessage) -> List[Output]:
        if isinstance(msg, Attitude):
            return self.assembler.attitude(normalize_attitude(msg))
        if isinstance(msg, AttitudeQuaternion):
            return self.assembler.attitude(normalize_attitude_quaternion(msg))
        if isinstance(msg, HighresImu):
            return self.assembler.sensors(normalize_highres_imu(msg))
        if isinstance(msg, ScaledImu):
            return self.assembler.sensors(normalize_scaled_imu(msg))
        if isinstance(msg, RawImu):
            return self.assembler.sensors(normalize_raw_imu(msg, self.is_ardupilotmega()))
        if isinstance(msg, ScaledPressure):
            return self.assembler.sensors(normalize_scaled_pressure(msg))
        raise TypeError(f"Unsupported message {type(msg).__name__}")


__all__ = ["ImuPlugin"]
