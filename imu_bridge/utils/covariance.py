from __future__ import annotations

from typing import Tuple

Covariance3 = Tuple[float, float, float, float, float, float, float, float, float]

UNKNOWN_COVARIANCE: Covariance3 = (-1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0)


def build_diagonal_covariance(stdev: float) -> Covariance3:
    """Row-major 3x3 covariance with ``stdev**2`` on the diagonal.

    A zero standard deviation yields the ``[-1, 0, ...]`` "unknown" sentinel
    used by sensor_msgs consumers.
    """
    if stdev == 0.0:
        return UNKNOWN_COVARIANCE
    var = float(stdev) ** 2
    return (var, 0.0, 0.0, 0.0, var, 0.0, 0.0, 0.0, var)
