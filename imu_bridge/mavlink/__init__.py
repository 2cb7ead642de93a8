from .decode import decode
from .source import MavlinkSource

__all__ = ["MavlinkSource", "decode"]
