from __future__ import annotations

import pytest

from imu_bridge.core.imu_plugin import ImuPlugin
from imu_bridge.core.messages import (
    Attitude,
    AttitudeQuaternion,
    HighresImu,
    RawImu,
    ScaledImu,
    ScaledPressure,
)
from imu_bridge.core.sinks import RecordingSink
from imu_bridge.utils.timesync import OffsetTimeSynchronizer

HIGHRES_ALL_FIELDS = 0x1FF | (1 << 9) | (1 << 12)


def make_attitude(**kw) -> Attitude:
    values = dict(time_boot_ms=1000, roll=0.0, pitch=0.0, yaw=0.0, rollspeed=0.0, pitchspeed=0.0, yawspeed=0.0)
    values.update(kw)
    return Attitude(**values)


def make_attitude_quaternion(**kw) -> AttitudeQuaternion:
    values = dict(time_boot_ms=1000, q1=1.0, q2=0.0, q3=0.0, q4=0.0, rollspeed=0.0, pitchspeed=0.0, yawspeed=0.0)
    values.update(kw)
    return AttitudeQuaternion(**values)


def make_highres(**kw) -> HighresImu:
    values = dict(
        time_usec=2_000_000,
        xacc=0.0,
        yacc=0.0,
        zacc=-9.80665,
        xgyro=0.0,
        ygyro=0.0,
        zgyro=0.0,
        xmag=0.2,
        ymag=0.0,
        zmag=0.4,
        abs_pressure=1013.25,
        diff_pressure=0.0,
        pressure_alt=0.0,
        temperature=25.0,
        fields_updated=HIGHRES_ALL_FIELDS,
    )
    values.update(kw)
    return HighresImu(**values)


def make_raw(**kw) -> RawImu:
    values = dict(time_usec=3_000_000, xacc=0, yacc=0, zacc=-1000, xgyro=0, ygyro=0, zgyro=0, xmag=0, ymag=0, zmag=0)
    values.update(kw)
    return RawImu(**values)


def make_scaled(**kw) -> ScaledImu:
    values = dict(time_boot_ms=4000, xacc=0, yacc=0, zacc=-1000, xgyro=0, ygyro=0, zgyro=0, xmag=0, ymag=0, zmag=0)
    values.update(kw)
    return ScaledImu(**values)


def make_scaled_pressure(**kw) -> ScaledPressure:
    values = dict(time_boot_ms=5000, press_abs=1013.25, press_diff=0.0, temperature=2150)
    values.update(kw)
    return ScaledPressure(**values)


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def plugin(sink) -> ImuPlugin:
    return ImuPlugin(sink, synchronizer=OffsetTimeSynchronizer(offset_s=100.0))
