from __future__ import annotations

import math

import numpy as np
import pytest

from conftest import (
    make_attitude,
    make_attitude_quaternion,
    make_highres,
    make_raw,
    make_scaled,
    make_scaled_pressure,
)
from imu_bridge.sensors.imu import (
    HIGHRES_ABS_PRESSURE,
    HIGHRES_ACCEL_GYRO,
    HIGHRES_MAG,
    HIGHRES_TEMPERATURE,
    normalize_attitude,
    normalize_attitude_quaternion,
    normalize_highres_imu,
    normalize_raw_imu,
    normalize_scaled_imu,
    normalize_scaled_pressure,
)
from imu_bridge.utils.frames import quaternion_from_rpy


def test_one_gauss_is_1e4_tesla():
    reading = normalize_highres_imu(make_highres(xmag=1.0, ymag=0.0, zmag=0.0, fields_updated=HIGHRES_MAG))
    assert reading.magnetic_field is not None
    assert reading.magnetic_field[0] == 1.0e-4
    assert reading.magnetic_field[1:] == pytest.approx([0.0, 0.0])


def test_highres_groups_are_independent():
    reading = normalize_highres_imu(make_highres(fields_updated=HIGHRES_TEMPERATURE))
    assert reading.inertial is None
    assert reading.magnetic_field is None
    assert reading.fluid_pressure is None
    assert reading.temperature == 25.0

    reading = normalize_highres_imu(make_highres(fields_updated=HIGHRES_ABS_PRESSURE | HIGHRES_MAG))
    assert reading.inertial is None
    assert reading.magnetic_field is not None
    assert reading.fluid_pressure == pytest.approx(101325.0)
    assert reading.temperature is None


def test_highres_partial_accel_bits_still_count():
    reading = normalize_highres_imu(make_highres(fields_updated=1 << 4))
    assert reading.inertial is not None
    assert HIGHRES_ACCEL_GYRO == 0b111111


def test_highres_accel_rotated_into_base_link():
    reading = normalize_highres_imu(make_highres(xacc=1.0, yacc=-2.0, zacc=-3.0, xgyro=0.1, ygyro=0.2, zgyro=0.3))
    accel = reading.inertial.linear_acceleration
    assert accel.enu == pytest.approx([1.0, 2.0, 3.0])
    assert accel.ned == pytest.approx([1.0, -2.0, -3.0])
    assert reading.inertial.angular_velocity.enu == pytest.approx([0.1, -0.2, -0.3])
    assert reading.device_time_s == pytest.approx(2.0)


def test_scaled_imu_units():
    reading = normalize_scaled_imu(make_scaled(xacc=1000, yacc=0, zacc=0, xgyro=1000, xmag=1))
    assert reading.inertial.linear_acceleration.ned == pytest.approx([9.80665, 0.0, 0.0])
    assert reading.inertial.angular_velocity.ned == pytest.approx([1.0, 0.0, 0.0])
    assert reading.magnetic_field == pytest.approx([1000.0, 0.0, 0.0])
    assert reading.device_time_s == pytest.approx(4.0)
    assert not reading.acceleration_untrusted


def test_raw_imu_apm_scales_acceleration():
    reading = normalize_raw_imu(make_raw(xacc=1000, zacc=0), is_ardupilotmega=True)
    assert reading.inertial.linear_acceleration.ned == pytest.approx([9.80665, 0.0, 0.0])
    assert not reading.acceleration_untrusted


def test_raw_imu_other_firmware_leaves_acceleration_unscaled():
    reading = normalize_raw_imu(make_raw(xacc=100, yacc=200, zacc=300), is_ardupilotmega=False)
    assert reading.inertial.linear_acceleration.enu == pytest.approx([100.0, -200.0, -300.0])
    assert reading.acceleration_untrusted


def test_scaled_pressure_units():
    reading = normalize_scaled_pressure(make_scaled_pressure(press_abs=1013.25, temperature=2150))
    assert reading.fluid_pressure == pytest.approx(101325.0)
    assert reading.temperature == pytest.approx(21.5)
    assert reading.inertial is None


def test_attitude_euler_and_quaternion_agree():
    q = quaternion_from_rpy(0.1, 0.2, 0.3)
    euler = normalize_attitude(make_attitude(roll=0.1, pitch=0.2, yaw=0.3, rollspeed=0.5))
    quat = normalize_attitude_quaternion(make_attitude_quaternion(q1=q[0], q2=q[1], q3=q[2], q4=q[3], rollspeed=0.5))
    assert np.allclose(euler.orientation.enu, quat.orientation.enu)
    assert np.allclose(euler.orientation.ned, q)
    assert euler.angular_velocity.enu == pytest.approx([0.5, 0.0, 0.0])
    assert euler.device_time_s == pytest.approx(1.0)


def test_nan_is_not_sanitized():
    reading = normalize_highres_imu(make_highres(xacc=math.nan))
    assert math.isnan(reading.inertial.linear_acceleration.enu[0])
