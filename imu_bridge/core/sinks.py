from __future__ import annotations

import json
import logging
from typing import IO, List, Protocol, Tuple

from pydantic import BaseModel

log = logging.getLogger(__name__)


class Sink(Protocol):
    """Receives finished records. Must not block."""

    def publish(self, topic: str, record: BaseModel) -> None: ...


class LoggingSink:
    def publish(self, topic: str, record: BaseModel) -> None:
        log.debug("%s: %s", topic, record.model_dump())


class RecordingSink:
    """Keeps every published record in memory, in publish order."""

    def __init__(self) -> None:
        self.published: List[Tuple[str, BaseModel]] = []

    def publish(self, topic: str, record: BaseModel) -> None:
        self.published.append((topic, record))

    def topics(self) -> List[str]:
        return [topic for topic, _ in self.published]

    def last(self, topic: str) -> BaseModel | None:
        for t, record in reversed(self.published):
            if t == topic:
                return record
        return None

    def clear(self) -> None:
        self.published.clear()


class JsonLinesSink:
    """Writes one JSON object per record: ``{"topic": ..., "record": {...}}``."""

    def __init__(self, stream: IO[str]) -> None:
        self._stream = stream

    def publish(self, topic: str, record: BaseModel) -> None:
        line = json.dumps({"topic": topic, "record": record.model_dump(mode="json")}, separators=(",", ":"))
        self._stream.write(line + "\n")
        self._stream.flush()


__all__ = ["JsonLinesSink", "LoggingSink", "RecordingSink", "Sink"]
