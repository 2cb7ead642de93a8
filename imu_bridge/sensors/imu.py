from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from ..core.messages import (
    Attitude,
    AttitudeQuaternion,
    HighresImu,
    RawImu,
    ScaledImu,
    ScaledPressure,
)
from ..utils import units
from ..utils.frames import (
    compose_orientation_ned_aircraft_to_enu_baselink,
    quaternion_from_rpy,
    rotate_vector_aircraft_to_baselink,
)

# HIGHRES_IMU.fields_updated groups
HIGHRES_ACCEL_GYRO = (7 << 3) | (7 << 0)
HIGHRES_MAG = 7 << 6
HIGHRES_ABS_PRESSURE = 1 << 9
HIGHRES_TEMPERATURE = 1 << 12


@dataclass(slots=True)
class OrientationPair:
    enu: NDArray[np.float64]
    """base_link -> ENU quaternion ``[w, x, y, z]``."""
    ned: NDArray[np.float64]
    """aircraft -> NED quaternion, as reported by the autopilot."""


@dataclass(slots=True)
class VectorPair:
    enu: NDArray[np.float64]
    """Vector in the base_link frame."""
    ned: NDArray[np.float64]
    """Vector in the aircraft frame."""

    @classmethod
    def from_aircraft(cls, v_aircraft: NDArray[np.float64]) -> "VectorPair":
        ned = np.asarray(v_aircraft, dtype=np.float64)
        return cls(enu=rotate_vector_aircraft_to_baselink(ned), ned=ned)

    @classmethod
    def zero(cls) -> "VectorPair":
        return cls(enu=np.zeros(3), ned=np.zeros(3))


@dataclass(slots=True)
class AttitudeReading:
    device_time_s: float
    orientation: OrientationPair
    angular_velocity: VectorPair


@dataclass(slots=True)
class InertialReading:
    angular_velocity: VectorPair
    linear_acceleration: VectorPair


@dataclass(slots=True)
class SensorReading:
    """Everything one IMU/pressure message yielded; absent groups are ``None``."""

    device_time_s: float
    inertial: Optional[InertialReading] = None
    magnetic_field: Optional[NDArray[np.float64]] = None
    fluid_pressure: Optional[float] = None
    temperature: Optional[float] = None
    acceleration_untrusted: bool = False


def _vec(x: float, y: float, z: float) -> NDArray[np.float64]:
    return np.array([x, y, z], dtype=np.float64)


def _attitude_reading(device_time_s: float, q_ned_aircraft: NDArray[np.float64], rates) -> AttitudeReading:
    return AttitudeReading(
        device_time_s=device_time_s,
        orientation=OrientationPair(
            enu=compose_orientation_ned_aircraft_to_enu_baselink(q_ned_aircraft),
            ned=q_ned_aircraft,
        ),
        angular_velocity=VectorPair.from_aircraft(rates),
    )


def normalize_attitude(msg: Attitude) -> AttitudeReading:
    q = quaternion_from_rpy(msg.roll, msg.pitch, msg.yaw)
    rates = _vec(msg.rollspeed, msg.pitchspeed, msg.yawspeed)
    return _attitude_reading(msg.time_boot_ms * units.MS_TO_S, q, rates)


def normalize_attitude_quaternion(msg: AttitudeQuaternion) -> AttitudeReading:
    # MAVLink quaternion order is already w, x, y, z
    q = np.array([msg.q1, msg.q2, msg.q3, msg.q4], dtype=np.float64)
    rates = _vec(msg.rollspeed, msg.pitchspeed, msg.yawspeed)
    return _attitude_reading(msg.time_boot_ms * units.MS_TO_S, q, rates)


def normalize_highres_imu(msg: HighresImu) -> SensorReading:
    """Convert the groups flagged in ``fields_updated``; each group is independent."""
    reading = SensorReading(device_time_s=msg.time_usec * units.US_TO_S)
    fields = int(msg.fields_updated)

    if fields & HIGHRES_ACCEL_GYRO:
        reading.inertial = InertialReading(
            angular_velocity=VectorPair.from_aircraft(_vec(msg.xgyro, msg.ygyro, msg.zgyro)),
            linear_acceleration=VectorPair.from_aircraft(_vec(msg.xacc, msg.yacc, msg.zacc)),
        )
    if fields & HIGHRES_MAG:
        reading.magnetic_field = rotate_vector_aircraft_to_baselink(
            _vec(msg.xmag, msg.ymag, msg.zmag) * units.GAUSS_TO_TESLA
        )
    if fields & HIGHRES_ABS_PRESSURE:
        reading.fluid_pressure = float(msg.abs_pressure) * units.MILLIBAR_TO_PASCAL
    if fields & HIGHRES_TEMPERATURE:
        reading.temperature = float(msg.temperature)
    return reading


def normalize_scaled_imu(msg: ScaledImu) -> SensorReading:
    gyro = _vec(msg.xgyro, msg.ygyro, msg.zgyro) * units.MILLIRS_TO_RADSEC
    accel = _vec(msg.xacc, msg.yacc, msg.zacc) * units.MILLIG_TO_MS2
    mag = _vec(msg.xmag, msg.ymag, msg.zmag) * units.MILLIT_TO_TESLA
    return SensorReading(
        device_time_s=msg.time_boot_ms * units.MS_TO_S,
        inertial=InertialReading(
            angular_velocity=VectorPair.from_aircraft(gyro),
            linear_acceleration=VectorPair.from_aircraft(accel),
        ),
        magnetic_field=rotate_vector_aircraft_to_baselink(mag),
    )


def normalize_raw_imu(msg: RawImu, is_ardupilotmega: bool) -> SensorReading:
    """RAW_IMU conversion.

    APM sends scaled values in RAW_IMU, so acceleration is milli-G there. On any
    other firmware the acceleration is left unscaled and flagged as untrusted.
    """
    gyro = _vec(msg.xgyro, msg.ygyro, msg.zgyro) * units.MILLIRS_TO_RADSEC
    accel = _vec(msg.xacc, msg.yacc, msg.zacc)
    if is_ardupilotmega:
        accel = accel * units.MILLIG_TO_MS2
    mag = _vec(msg.xmag, msg.ymag, msg.zmag) * units.MILLIT_TO_TESLA
    return SensorReading(
        device_time_s=msg.time_usec * units.US_TO_S,
        inertial=InertialReading(
            angular_velocity=VectorPair.from_aircraft(gyro),
            linear_acceleration=VectorPair.from_aircraft(accel),
        ),
        magnetic_field=rotate_vector_aircraft_to_baselink(mag),
        acceleration_untrusted=not is_ardupilotmega,
    )


def normalize_scaled_pressure(msg: ScaledPressure) -> SensorReading:
    return SensorReading(
        device_time_s=msg.time_boot_ms * units.MS_TO_S,
        fluid_pressure=float(msg.press_abs) * units.HECTOPASCAL_TO_PASCAL,
        temperature=msg.temperature / units.CENTI,
    )


__all__ = [
    "AttitudeReading",
    "InertialReading",
    "OrientationPair",
    "SensorReading",
    "VectorPair",
    "normalize_attitude",
    "normalize_attitude_quaternion",
    "normalize_highres_imu",
    "normalize_raw_imu",
    "normalize_scaled_imu",
    "normalize_scaled_pressure",
]
