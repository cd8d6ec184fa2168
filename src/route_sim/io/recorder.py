# route_sim/io/recorder.py
import json
import logging
import sys
from dataclasses import asdict
from typing import Protocol, TextIO

from route_sim.io.business_events import BizEvent

log = logging.getLogger("route_sim.recorder")


class Sink(Protocol):
    def write(self, ev: BizEvent) -> None: ...


class JsonlSink:
    """One JSON object per line; enums and other odd values go through ``str``."""

    def __init__(self, fp: TextIO = sys.stdout, flush: bool = False):
        self.fp, self.flush = fp, flush

    def write(self, ev: BizEvent) -> None:
        print(json.dumps(asdict(ev), default=str), file=self.fp, flush=self.flush)


class MemorySink:
    def __init__(self):
        self.events: list[BizEvent] = []

    def write(self, ev: BizEvent) -> None:
        self.events.append(ev)

    def named(self, name: str) -> list[BizEvent]:
        return [ev for ev in self.events if ev.name == name]


class Recorder:
    """Fans analytics events out to sinks. A failing sink is logged and counted, never raised."""

    def __init__(self, *sinks: Sink):
        self.sinks = sinks or (JsonlSink(),)
        self.dropped = 0

    def emit(self, ev: BizEvent) -> None:
        for sink in self.sinks:
            try:
                sink.write(ev)
            except Exception:
                self.dropped += 1
                log.exception("sink %s dropped %s", type(sink).__name__, ev.name)
