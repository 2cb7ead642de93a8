from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray


def quaternion_from_rpy(roll: float, pitch: float, yaw: float) -> NDArray[np.float64]:
    """Quaternion ``[w, x, y, z]`` for intrinsic Z-Y-X angles.

    Equivalent to ``Rz(yaw) * Ry(pitch) * Rx(roll)``.
    """
    cr = math.cos(roll / 2.0)
    sr = math.sin(roll / 2.0)
    cp = math.cos(pitch / 2.0)
    sp = math.sin(pitch / 2.0)
    cy = math.cos(yaw / 2.0)
    sy = math.sin(yaw / 2.0)
    return np.array(
        [
            cr * cp * cy + sr * sp * sy,
            sr * cp * cy - cr * sp * sy,
            cr * sp * cy + sr * cp * sy,
            cr * cp * sy - sr * sp * cy,
        ],
        dtype=np.float64,
    )


def quaternion_multiply(a: NDArray[np.float64], b: NDArray[np.float64]) -> NDArray[np.float64]:
    """Hamilton product ``a * b``."""
    aw, ax, ay, az = a
    bw, bx, by, bz = b
    return np.array(
        [
            aw * bw - ax * bx - ay * by - az * bz,
            aw * bx + ax * bw + ay * bz - az * by,
            aw * by - ax * bz + ay * bw + az * bx,
            aw * bz + ax * by - ay * bx + az * bw,
        ],
        dtype=np.float64,
    )


def quaternion_to_matrix(q: NDArray[np.float64]) -> NDArray[np.float64]:
    """Rotation matrix of a unit quaternion, such that ``v' = R @ v``."""
    w, x, y, z = q
    return np.array(
        [
            [1.0 - 2.0 * (y * y + z * z), 2.0 * (x * y - w * z), 2.0 * (x * z + w * y)],
            [2.0 * (x * y + w * z), 1.0 - 2.0 * (x * x + z * z), 2.0 * (y * z - w * x)],
            [2.0 * (x * z - w * y), 2.0 * (y * z + w * x), 1.0 - 2.0 * (x * x + y * y)],
        ],
        dtype=np.float64,
    )


# NED <-> ENU world remap: swap x/y, invert z.
NED_ENU_Q = quaternion_from_rpy(math.pi, 0.0, math.pi / 2.0)
# aircraft (x fwd, y right, z down) <-> base_link (x fwd, y left, z up).
AIRCRAFT_BASELINK_Q = quaternion_from_rpy(math.pi, 0.0, 0.0)
AIRCRAFT_BASELINK_R = quaternion_to_matrix(AIRCRAFT_BASELINK_Q)

NED_ENU_Q.setflags(write=False)
AIRCRAFT_BASELINK_Q.setflags(write=False)
AIRCRAFT_BASELINK_R.setflags(write=False)


def transform_orientation_ned_enu(q: NDArray[np.float64]) -> NDArray[np.float64]:
    """Re-express an orientation relative to NED as one relative to ENU."""
    return quaternion_multiply(NED_ENU_Q, q)


def transform_orientation_aircraft_baselink(q: NDArray[np.float64]) -> NDArray[np.float64]:
    """Swap the body frame of an orientation from aircraft to base_link."""
    return quaternion_multiply(q, AIRCRAFT_BASELINK_Q)


def compose_orientation_ned_aircraft_to_enu_baselink(q_ned_aircraft: NDArray[np.float64]) -> NDArray[np.float64]:
    """Convert an autopilot attitude (aircraft -> NED) into base_link -> ENU.

    The world remap is applied first and the body remap second; the two do not
    commute.
    """
    q = np.asarray(q_ned_aircraft, dtype=np.float64)
    return transform_orientation_aircraft_baselink(transform_orientation_ned_enu(q))


def rotate_vector_aircraft_to_baselink(v_aircraft: NDArray[np.float64]) -> NDArray[np.float64]:
    """Rotate a body-frame vector (rate, force, field) from aircraft to base_link."""
    return AIRCRAFT_BASELINK_R @ np.asarray(v_aircraft, dtype=np.float64)


__all__ = [
    "AIRCRAFT_BASELINK_Q",
    "AIRCRAFT_BASELINK_R",
    "NED_ENU_Q",
    "compose_orientation_ned_aircraft_to_enu_baselink",
    "quaternion_from_rpy",
    "quaternion_multiply",
    "quaternion_to_matrix",
    "rotate_vector_aircraft_to_baselink",
    "transform_orientation_aircraft_baselink",
    "transform_orientation_ned_enu",
]
