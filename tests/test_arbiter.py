from __future__ import annotations

import logging

import pytest

from imu_bridge.core.arbiter import (
    Arbiter,
    ArbiterState,
    AttitudeSource,
    InertialSource,
    on_attitude,
    on_inertial,
    pressure_accepted,
)
from imu_bridge.core.messages import MessageKind


def test_euler_accepted_until_quaternion_seen():
    assert on_attitude(AttitudeSource.NONE, MessageKind.ATTITUDE) == (AttitudeSource.EULER, True)
    assert on_attitude(AttitudeSource.EULER, MessageKind.ATTITUDE) == (AttitudeSource.EULER, True)
    assert on_attitude(AttitudeSource.EULER, MessageKind.ATTITUDE_QUATERNION) == (AttitudeSource.QUATERNION, True)
    assert on_attitude(AttitudeSource.QUATERNION, MessageKind.ATTITUDE) == (AttitudeSource.QUATERNION, False)


@pytest.mark.parametrize(
    "state, kind, expected",
    [
        (InertialSource.NONE, MessageKind.RAW_IMU, (InertialSource.RAW, True)),
        (InertialSource.RAW, MessageKind.SCALED_IMU, (InertialSource.SCALED, True)),
        (InertialSource.SCALED, MessageKind.RAW_IMU, (InertialSource.SCALED, False)),
        (InertialSource.SCALED, MessageKind.HIGHRES_IMU, (InertialSource.HIGHRES, True)),
        (InertialSource.HIGHRES, MessageKind.SCALED_IMU, (InertialSource.HIGHRES, False)),
        (InertialSource.HIGHRES, MessageKind.RAW_IMU, (InertialSource.HIGHRES, False)),
        (InertialSource.HIGHRES, MessageKind.HIGHRES_IMU, (InertialSource.HIGHRES, True)),
    ],
)
def test_inertial_priority(state, kind, expected):
    assert on_inertial(state, kind) == expected


def test_non_matching_kind_rejected():
    with pytest.raises(ValueError):
        on_attitude(AttitudeSource.NONE, MessageKind.RAW_IMU)
    with pytest.raises(ValueError):
        on_inertial(InertialSource.NONE, MessageKind.ATTITUDE)


def test_pressure_gated_by_highres_only():
    assert pressure_accepted(InertialSource.NONE)
    assert pressure_accepted(InertialSource.SCALED)
    assert not pressure_accepted(InertialSource.HIGHRES)


def test_highres_suppresses_lower_kinds_until_reset():
    arb = Arbiter()
    assert arb.accept(MessageKind.HIGHRES_IMU)
    for _ in range(3):
        assert not arb.accept(MessageKind.SCALED_IMU)
        assert not arb.accept(MessageKind.RAW_IMU)
        assert not arb.accept(MessageKind.SCALED_PRESSURE)
    arb.reset()
    assert arb.state == ArbiterState()
    assert arb.accept(MessageKind.RAW_IMU)
    assert arb.accept(MessageKind.SCALED_PRESSURE)


def test_attitude_and_inertial_classes_are_independent():
    arb = Arbiter()
    assert arb.accept(MessageKind.ATTITUDE_QUATERNION)
    assert arb.accept(MessageKind.RAW_IMU)
    assert not arb.accept(MessageKind.ATTITUDE)
    assert arb.state == ArbiterState(attitude=AttitudeSource.QUATERNION, inertial=InertialSource.RAW)


def test_detection_logged_once(caplog):
    arb = Arbiter()
    with caplog.at_level(logging.INFO, logger="imu_bridge.core.arbiter"):
        arb.accept(MessageKind.HIGHRES_IMU)
        arb.accept(MessageKind.HIGHRES_IMU)
    assert [r.getMessage() for r in caplog.records].count("IMU: High resolution IMU detected!") == 1
