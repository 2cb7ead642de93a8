"""Scalar coefficients for converting MAVLink encoded units to SI."""

GAUSS_TO_TESLA = 1.0e-4
# Kept as the autopilot plugin has always applied it to RAW/SCALED_IMU mag fields.
MILLIT_TO_TESLA = 1000.0
MILLIRS_TO_RADSEC = 1.0e-3
MILLIG_TO_MS2 = 9.80665 / 1000.0
MILLIBAR_TO_PASCAL = 1.0e2
HECTOPASCAL_TO_PASCAL = 100.0
CENTI = 100.0

MS_TO_S = 1.0e-3
US_TO_S = 1.0e-6
