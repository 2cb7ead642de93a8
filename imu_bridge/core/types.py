from __future__ import annotations

import math
from enum import Enum
from typing import Optional, Sequence

from pydantic import BaseModel, Field

from ..utils.covariance import UNKNOWN_COVARIANCE, Covariance3


class QuantityClass(Enum):
    """Output stream a message contributes to."""

    ATTITUDE = 0
    INERTIAL_RAW = 1
    MAGNETIC = 2
    PRESSURE = 3
    TEMPERATURE = 4


class Header(BaseModel):
    stamp: float
    frame_id: str


class Vector3(BaseModel):
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def from_array(cls, v: Sequence[float]) -> "Vector3":
        return cls(x=float(v[0]), y=float(v[1]), z=float(v[2]))


class Quaternion(BaseModel):
    """Orientation in ``x, y, z, w`` field order as in sensor_msgs."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    @classmethod
    def from_array(cls, q: Sequence[float]) -> "Quaternion":
        # arrays are [w, x, y, z]
        return cls(w=float(q[0]), x=float(q[1]), y=float(q[2]), z=float(q[3]))


class ImuRecord(BaseModel):
    header: Header
    orientation: Quaternion = Field(default_factory=Quaternion)
    orientation_covariance: Covariance3 = UNKNOWN_COVARIANCE
    angular_velocity: Vector3 = Field(default_factory=Vector3)
    angular_velocity_covariance: Covariance3 = UNKNOWN_COVARIANCE
    linear_acceleration: Vector3 = Field(default_factory=Vector3)
    linear_acceleration_covariance: Covariance3 = UNKNOWN_COVARIANCE


class MagneticFieldRecord(BaseModel):
    header: Header
    magnetic_field: Vector3
    magnetic_field_covariance: Covariance3 = UNKNOWN_COVARIANCE


class FluidPressureRecord(BaseModel):
    header: Header
    fluid_pressure: float
    variance: float = 0.0


class TemperatureRecord(BaseModel):
    header: Header
    temperature: float
    variance: float = 0.0


class TopicsConfig(BaseModel):
    data: str = "imu/data"
    data_ned: str = "imu/data_ned"
    data_raw: str = "imu/data_raw"
    mag: str = "imu/mag"
    atm_pressure: str = "imu/atm_pressure"
    temperature: str = "imu/temperature"


class ImuConfig(BaseModel):
    """Plugin parameters; stdev defaults follow the MPU6000 datasheet."""

    frame_id: str = "base_link"
    linear_acceleration_stdev: float = 0.0003
    angular_velocity_stdev: float = 0.02 * (math.pi / 180.0)
    orientation_stdev: float = 1.0
    magnetic_stdev: float = 0.0
    topics: TopicsConfig = Field(default_factory=TopicsConfig)


class MavlinkConfig(BaseModel):
    url: str = "udp:0.0.0.0:14550"
    source_system: int = 255
    source_component: int = 191
    conn_timeout_s: float = 10.0
    time_offset_s: Optional[float] = None


class LoggingConfig(BaseModel):
    level: str = "INFO"
    to_file: bool = True
    log_dir: Optional[str] = None


class BridgeConfig(BaseModel):
    imu: ImuConfig = Field(default_factory=ImuConfig)
    mavlink: MavlinkConfig = Field(default_factory=MavlinkConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
