from __future__ import annotations

import logging
from dataclasses import fields
from typing import Optional

from ..core.messages import (
    Attitude,
    AttitudeQuaternion,
    HighresImu,
    ImuMessage,
    RawImu,
    ScaledImu,
    ScaledPressure,
)

log = logging.getLogger(__name__)

MESSAGE_TYPES = {
    "ATTITUDE": Attitude,
    "ATTITUDE_QUATERNION": AttitudeQuaternion,
    "HIGHRES_IMU": HighresImu,
    "RAW_IMU": RawImu,
    "SCALED_IMU": ScaledImu,
    "SCALED_PRESSURE": ScaledPressure,
}


def decode(msg) -> Optional[ImuMessage]:
    """Map a pymavlink message onto its typed counterpart.

    Returns ``None`` for message types the IMU plugin does not consume and for
    messages lacking one of the expected fields.
    """
    cls = MESSAGE_TYPES.get(msg.get_type())
    if cls is None:
        return None
    try:
        values = {f.name: getattr(msg, f.name) for f in fields(cls)}
    except AttributeError as exc:
        log.warning("Malformed %s message: %s", msg.get_type(), exc)
        return None
    return cls(**values)


__all__ = ["MESSAGE_TYPES", "decode"]
