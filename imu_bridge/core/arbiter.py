from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from .messages import QUANTITY_CLASS, MessageKind
from .types import QuantityClass

log = logging.getLogger(__name__)


class AttitudeSource(Enum):
    NONE = 0
    EULER = 1
    QUATERNION = 2


class InertialSource(Enum):
    """Ordered by fidelity; a higher value suppresses every lower one."""

    NONE = 0
    RAW = 1
    SCALED = 2
    HIGHRES = 3


def on_attitude(state: AttitudeSource, kind: MessageKind) -> tuple[AttitudeSource, bool]:
    """Attitude class transition. Returns ``(new_state, accepted)``."""
    if kind == MessageKind.ATTITUDE_QUATERNION:
        return AttitudeSource.QUATERNION, True
    if kind == MessageKind.ATTITUDE:
        if state == AttitudeSource.QUATERNION:
            return state, False
        return AttitudeSource.EULER, True
    raise ValueError(f"{kind} is not an attitude message")


_INERTIAL_KINDS = {
    MessageKind.HIGHRES_IMU: InertialSource.HIGHRES,
    MessageKind.SCALED_IMU: InertialSource.SCALED,
    MessageKind.RAW_IMU: InertialSource.RAW,
}


def on_inertial(state: InertialSource, kind: MessageKind) -> tuple[InertialSource, bool]:
    """Inertial class transition. Returns ``(new_state, accepted)``."""
    try:
        offered = _INERTIAL_KINDS[kind]
    except KeyError:
        raise ValueError(f"{kind} is not an inertial message") from None
    if offered.value < state.value:
        return state, False
    return offered, True


def pressure_accepted(inertial: InertialSource) -> bool:
    """SCALED_PRESSURE is redundant once HIGHRES_IMU (which carries its own) was seen."""
    return inertial != InertialSource.HIGHRES


@dataclass(slots=True)
class ArbiterState:
    attitude: AttitudeSource = AttitudeSource.NONE
    inertial: InertialSource = InertialSource.NONE


_DETECTED = {
    AttitudeSource.QUATERNION: "IMU: Attitude quaternion IMU detected!",
    InertialSource.HIGHRES: "IMU: High resolution IMU detected!",
    InertialSource.SCALED: "IMU: Scaled IMU message used.",
}


class Arbiter:
    """Picks one authoritative message kind per quantity class.

    Not thread-safe: the host must serialize ``accept`` and ``reset`` calls.
    """

    def __init__(self) -> None:
        self.state = ArbiterState()

    def accept(self, kind: MessageKind) -> bool:
        quantity = QUANTITY_CLASS[kind]
        if quantity == QuantityClass.ATTITUDE:
            new_state, accepted = on_attitude(self.state.attitude, kind)
            self._log_detection(self.state.attitude, new_state)
            self.state.attitude = new_state
        elif quantity == QuantityClass.INERTIAL_RAW:
            new_state, accepted = on_inertial(self.state.inertial, kind)
            self._log_detection(self.state.inertial, new_state)
            self.state.inertial = new_state
        elif quantity == QuantityClass.PRESSURE:
            accepted = pressure_accepted(self.state.inertial)
        else:  # pragma: no cover - closed enum
            raise ValueError(f"Unsupported message kind {kind}")
        if not accepted:
            log.debug("Dropped %s (state=%s)", kind.value, self.state)
        return accepted

    def reset(self) -> None:
        self.state = ArbiterState()

    @staticmethod
    def _log_detection(old, new) -> None:
        if new != old and new in _DETECTED:
            log.info(_DETECTED[new])


__all__ = [
    "Arbiter",
    "ArbiterState",
    "AttitudeSource",
    "InertialSource",
    "on_attitude",
    "on_inertial",
    "pressure_accepted",
]
