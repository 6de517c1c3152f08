# io/recorder.py
import json
import logging
import sys
from dataclasses import asdict
from typing import Protocol, TextIO

from dijkstra_map.io.session_events import SessionEvent

logger = logging.getLogger(__name__)


class Sink(Protocol):
    def write(self, ev: SessionEvent) -> None: ...


class JsonlSink:
    """One JSON object per event line. The caller owns (and closes) fp."""

    def __init__(self, fp: TextIO = sys.stdout):
        self.fp = fp
        self.written = 0

    def write(self, ev: SessionEvent) -> None:
        self.fp.write(json.dumps({"type": type(ev).__name__, **asdict(ev)}) + "\n")
        self.written += 1


class MemorySink:
    def __init__(self):
        self.events: list[SessionEvent] = []

    def write(self, ev: SessionEvent) -> None:
        self.events.append(ev)

    def named(self, name: str) -> list[SessionEvent]:
        return [e for e in self.events if e.name == name]


class Recorder:
    """Fans session events out to every sink; a failing sink is logged and skipped."""

    def __init__(self, *sinks: Sink):
        self.sinks = sinks or (JsonlSink(),)

    def emit(self, ev: SessionEvent) -> None:
        for s in self.sinks:
            try:
                s.write(ev)
            except Exception:
                logger.exception("sink %s failed on %s", type(s).__name__, type(ev).__name__)
