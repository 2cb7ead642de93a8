from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from .types import QuantityClass


class MessageKind(Enum):
    ATTITUDE = "ATTITUDE"
    ATTITUDE_QUATERNION = "ATTITUDE_QUATERNION"
    HIGHRES_IMU = "HIGHRES_IMU"
    RAW_IMU = "RAW_IMU"
    SCALED_IMU = "SCALED_IMU"
    SCALED_PRESSURE = "SCALED_PRESSURE"


QUANTITY_CLASS: dict[MessageKind, QuantityClass] = {
    MessageKind.ATTITUDE: QuantityClass.ATTITUDE,
    MessageKind.ATTITUDE_QUATERNION: QuantityClass.ATTITUDE,
    MessageKind.HIGHRES_IMU: QuantityClass.INERTIAL_RAW,
    MessageKind.RAW_IMU: QuantityClass.INERTIAL_RAW,
    MessageKind.SCALED_IMU: QuantityClass.INERTIAL_RAW,
    MessageKind.SCALED_PRESSURE: QuantityClass.PRESSURE,
}


@dataclass(slots=True)
class Attitude:
    """ATTITUDE: Euler angles (rad) and body rates (rad/s), aircraft -> NED."""

    kind: ClassVar[MessageKind] = MessageKind.ATTITUDE

    time_boot_ms: int
    roll: float
    pitch: float
    yaw: float
    rollspeed: float
    pitchspeed: float
    yawspeed: float


@dataclass(slots=True)
class AttitudeQuaternion:
    """ATTITUDE_QUATERNION: ``q1..q4`` are ``w, x, y, z``."""

    kind: ClassVar[MessageKind] = MessageKind.ATTITUDE_QUATERNION

    time_boot_ms: int
    q1: float
    q2: float
    q3: float
    q4: float
    rollspeed: float
    pitchspeed: float
    yawspeed: float


@dataclass(slots=True)
class HighresImu:
    """HIGHRES_IMU in SI units, gated per sensor group by ``fields_updated``.

    Attributes
    ----------
    xacc / yacc / zacc:
        Acceleration in m/s**2, aircraft frame.
    xgyro / ygyro / zgyro:
        Angular rate in rad/s, aircraft frame.
    xmag / ymag / zmag:
        Magnetic field in Gauss.
    abs_pressure:
        Absolute pressure in millibar.
    temperature:
        Temperature in degrees Celsius.
    fields_updated:
        Bitmask; bits 0-5 accel+gyro, 6-8 magnetometer, 9 abs pressure,
        10 diff pressure, 11 pressure altitude, 12 temperature.
    """

    kind: ClassVar[MessageKind] = MessageKind.HIGHRES_IMU

    time_usec: int
    xacc: float
    yacc: float
    zacc: float
    xgyro: float
    ygyro: float
    zgyro: float
    xmag: float
    ymag: float
    zmag: float
    abs_pressure: float
    diff_pressure: float
    pressure_alt: float
    temperature: float
    fields_updated: int


@dataclass(slots=True)
class RawImu:
    """RAW_IMU: unscaled sensor values. APM firmware sends milli-G / mrad/s here."""

    kind: ClassVar[MessageKind] = MessageKind.RAW_IMU

    time_usec: int
    xacc: int
    yacc: int
    zacc: int
    xgyro: int
    ygyro: int
    zgyro: int
    xmag: int
    ymag: int
    zmag: int


@dataclass(slots=True)
class ScaledImu:
    """SCALED_IMU: accel milli-G, gyro mrad/s, mag milli-units."""

    kind: ClassVar[MessageKind] = MessageKind.SCALED_IMU

    time_boot_ms: int
    xacc: int
    yacc: int
    zacc: int
    xgyro: int
    ygyro: int
    zgyro: int
    xmag: int
    ymag: int
    zmag: int


@dataclass(slots=True)
class ScaledPressure:
    """SCALED_PRESSURE: ``press_abs`` hPa, ``temperature`` centi-degC."""

    kind: ClassVar[MessageKind] = MessageKind.SCALED_PRESSURE

    time_boot_ms: int
    press_abs: float
    press_diff: float
    temperature: int


ImuMessage = Union[Attitude, AttitudeQuaternion, HighresImu, RawImu, ScaledImu, ScaledPressure]

__all__ = [
    "Attitude",
    "AttitudeQuaternion",
    "HighresImu",
    "ImuMessage",
    "MessageKind",
    "QUANTITY_CLASS",
    "RawImu",
    "ScaledImu",
    "ScaledPressure",
]
