from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from pydantic import BaseModel

from ..sensors.imu import AttitudeReading, SensorReading, VectorPair
from ..utils.covariance import UNKNOWN_COVARIANCE, build_diagonal_covariance
from ..utils.logging_setup import Throttle
from ..utils.timesync import TimeSynchronizer
from .types import (
    FluidPressureRecord,
    ImuConfig,
    ImuRecord,
    MagneticFieldRecord,
    Quaternion,
    TemperatureRecord,
    Vector3,
)

log = logging.getLogger(__name__)

AIRCRAFT_FRAME_ID = "aircraft"

Output = Tuple[str, BaseModel]


class OutputAssembler:
    """Turns normalized readings into records and owns the linear-acceleration cache.

    ATTITUDE and ATTITUDE_QUATERNION carry no acceleration, so attitude records
    reuse the last acceleration from an inertial message. The cache survives
    reconnects until the next inertial reading replaces it.

    Callers must serialize access; there is no locking here.
    """

    def __init__(self, cfg: ImuConfig, synchronizer: TimeSynchronizer) -> None:
        self.frame_id = cfg.frame_id
        self.topics = cfg.topics
        self._sync = synchronizer

        self.linear_acceleration_cov = build_diagonal_covariance(cfg.linear_acceleration_stdev)
        self.angular_velocity_cov = build_diagonal_covariance(cfg.angular_velocity_stdev)
        self.orientation_cov = build_diagonal_covariance(cfg.orientation_stdev)
        self.magnetic_cov = build_diagonal_covariance(cfg.magnetic_stdev)
        self.unk_orientation_cov = UNKNOWN_COVARIANCE

        self.linear_acceleration = VectorPair.zero()
        self.last_attitude_enu: Optional[ImuRecord] = None
        self.last_attitude_ned: Optional[ImuRecord] = None

        self._untrusted_warning = Throttle(60.0)

    def attitude(self, reading: AttitudeReading) -> List[Output]:
        enu = ImuRecord(
            header=self._sync.header(self.frame_id, reading.device_time_s),
            orientation=Quaternion.from_array(reading.orientation.enu),
            orientation_covariance=self.orientation_cov,
            angular_velocity=Vector3.from_array(reading.angular_velocity.enu),
            angular_velocity_covariance=self.angular_velocity_cov,
            linear_acceleration=Vector3.from_array(self.linear_acceleration.enu),
            linear_acceleration_covariance=self.linear_acceleration_cov,
        )
        # only the base_link/ENU orientation is treated as an estimate
        ned = ImuRecord(
            header=self._sync.header(AIRCRAFT_FRAME_ID, reading.device_time_s),
            orientation=Quaternion.from_array(reading.orientation.ned),
            orientation_covariance=self.unk_orientation_cov,
            angular_velocity=Vector3.from_array(reading.angular_velocity.ned),
            angular_velocity_covariance=self.angular_velocity_cov,
            linear_acceleration=Vector3.from_array(self.linear_acceleration.ned),
            linear_acceleration_covariance=self.linear_acceleration_cov,
        )
        self.last_attitude_enu = enu
        self.last_attitude_ned = ned
        return [(self.topics.data, enu), (self.topics.data_ned, ned)]

    def sensors(self, reading: SensorReading) -> List[Output]:
        header = self._sync.header(self.frame_id, reading.device_time_s)
        out: List[Output] = []

        if reading.inertial is not None:
            accel = reading.inertial.linear_acceleration
            out.append(
                (
                    self.topics.data_raw,
                    ImuRecord(
                        header=header,
                        orientation_covariance=self.unk_orientation_cov,
                        angular_velocity=Vector3.from_array(reading.inertial.angular_velocity.enu),
                        angular_velocity_covariance=self.angular_velocity_cov,
                        linear_acceleration=Vector3.from_array(accel.enu),
                        linear_acceleration_covariance=self.linear_acceleration_cov,
                    ),
                )
            )
            self.linear_acceleration = VectorPair(enu=accel.enu.copy(), ned=accel.ned.copy())

        if reading.acceleration_untrusted:
            if self._untrusted_warning.ready():
                log.warning("IMU: linear acceleration on RAW_IMU known on APM only.")
                log.warning("IMU: %s stores unscaled raw acceleration report.", self.topics.data_raw)
            self.linear_acceleration = VectorPair.zero()

        if reading.magnetic_field is not None:
            out.append(
                (
                    self.topics.mag,
                    MagneticFieldRecord(
                        header=header,
                        magnetic_field=Vector3.from_array(reading.magnetic_field),
                        magnetic_field_covariance=self.magnetic_cov,
                    ),
                )
            )

        if reading.fluid_pressure is not None:
            out.append((self.topics.atm_pressure, FluidPressureRecord(header=header, fluid_pressure=reading.fluid_pressure)))

        if reading.temperature is not None:
            out.append((self.topics.temperature, TemperatureRecord(header=header, temperature=reading.temperature)))

        return out


__all__ = ["AIRCRAFT_FRAME_ID", "Output", "OutputAssembler"]
