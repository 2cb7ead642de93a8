from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, List, Optional

from pymavlink import mavutil  # type: ignore[import]

from ..core.messages import ImuMessage
from .decode import decode

log = logging.getLogger(__name__)

MessageHandler = Callable[[ImuMessage], Any]
ConnectionListener = Callable[[bool], None]


class MavlinkSource:
    """MAVLink reader feeding IMU-related messages to subscribers.

    A single read thread decodes messages and invokes handlers, so handlers see
    messages and connection changes strictly one at a time. The vehicle counts
    as connected from its first HEARTBEAT until no HEARTBEAT arrived for
    ``conn_timeout_s``.
    """

    def __init__(
        self,
        url: str = "udp:0.0.0.0:14550",
        *,
        source_system: int = 255,
        source_component: int = mavutil.mavlink.MAV_COMP_ID_ONBOARD_COMPUTER,
        conn_timeout_s: float = 10.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.url = url
        self.source_system = int(source_system)
        self.source_component = int(source_component)
        self.conn_timeout_s = float(conn_timeout_s)
        self._clock = clock

        self._conn: Optional[mavutil.mavfile] = None
        self._read_thread: Optional[threading.Thread] = None
        self._running = False

        self._handlers: List[MessageHandler] = []
        self._listeners: List[ConnectionListener] = []

        self.connected = False
        self.autopilot: Optional[int] = None
        self.vehicle_type: Optional[int] = None
        self.target_system: Optional[int] = None
        self._last_heartbeat: Optional[float] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> None:
        if self._running:
            return
        log.info("Opening MAVLink connection %s", self.url)
        self._conn = mavutil.mavlink_connection(
            self.url,
            source_system=self.source_system,
            source_component=self.source_component,
            autoreconnect=True,
        )
        self._running = True
        self._read_thread = threading.Thread(target=self._read_loop, name="mavlink-read", daemon=True)
        self._read_thread.start()

    def stop(self) -> None:
        if not self._running:
            return
        log.info("Closing MAVLink connection")
        self._running = False
        if self._read_thread and self._read_thread.is_alive():
            self._read_thread.join(timeout=2.0)
        if self._conn is not None:
            try:
                self._conn.close()
            except Exception as exc:  # pragma: no cover - transport error
                log.debug("MAVLink close error: %s", exc)
        self._conn = None

    # ------------------------------------------------------------------
    # External interfaces
    # ------------------------------------------------------------------
    def subscribe(self, handler: MessageHandler) -> None:
        self._handlers.append(handler)

    def add_connection_listener(self, listener: ConnectionListener) -> None:
        self._listeners.append(listener)

    def is_ardupilotmega(self) -> bool:
        return self.autopilot == mavutil.mavlink.MAV_AUTOPILOT_ARDUPILOTMEGA

    def process_message(self, msg) -> None:
        """Handle one received pymavlink message on the calling thread."""
        msg_type = msg.get_type()
        if msg_type == "BAD_DATA":
            return
        if msg_type == "HEARTBEAT":
            self._handle_heartbeat(msg)
            return
        if self.target_system is not None and msg.get_srcSystem() != self.target_system:
            return
        typed = decode(msg)
        if typed is None:
            return
        for handler in self._handlers:
            try:
                handler(typed)
            except Exception as exc:
                log.warning("IMU handler failed on %s: %s", msg_type, exc)

    def check_timeout(self) -> None:
        if not self.connected or self._last_heartbeat is None:
            return
        if self._clock() - self._last_heartbeat > self.conn_timeout_s:
            log.warning("Connection to system %s timed out", self.target_system)
            self._set_connected(False)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _read_loop(self) -> None:
        assert self._conn is not None
        while self._running:
            try:
                msg = self._conn.recv_match(blocking=True, timeout=0.5)
            except Exception as exc:  # pragma: no cover - transport error
                log.debug("MAVLink recv error: %s", exc)
                continue
            if not self._running:
                break
            if msg is not None:
                self.process_message(msg)
            self.check_timeout()

    def _handle_heartbeat(self, msg) -> None:
        # GCS and companion heartbeats carry MAV_AUTOPILOT_INVALID
        if int(msg.autopilot) == mavutil.mavlink.MAV_AUTOPILOT_INVALID:
            return
        src = msg.get_srcSystem()
        if self.target_system is not None and src != self.target_system:
            return
        self.target_system = src
        self.autopilot = int(msg.autopilot)
        self.vehicle_type = int(msg.type)
        self._last_heartbeat = self._clock()
        if not self.connected:
            log.info("Got HEARTBEAT, connected to system %s (autopilot=%s)", src, self.autopilot)
            self._set_connected(True)

    def _set_connected(self, connected: bool) -> None:
        self.connected = connected
        for listener in self._listeners:
            listener(connected)


__all__ = ["MavlinkSource"]
