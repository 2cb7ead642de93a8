"""MAVLink IMU source arbiter and NED/ENU frame normalizer."""

__version__ = "0.1.0"
