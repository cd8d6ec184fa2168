# sim/hooks.py
from typing import Protocol


class SolveHooks(Protocol):
    def run_start(self, *, algorithm, nodes, edges): ...
    def run_end(self, *, algorithm, path, distance, time, total_score, wall_ms): ...
    def rejected(self, *, algorithm, reason: str, **kw): ...
    def error(self, *, algorithm, exc: BaseException): ...


class NoopHooks:
    def run_start(self, **_):
        pass

    def run_end(self, **_):
        pass

    def rejected(self, **_):
        pass

    def error(self, **_):
        pass
