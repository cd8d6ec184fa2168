# route_sim/io/business_events.py

from dataclasses import dataclass


# Base type for analytics events (one per orchestrator request)
@dataclass
class BizEvent:
    run_id: str
    seq: int  # request sequence within the run
    name: str  # stable event name


@dataclass
class SimulationCompletedBiz(BizEvent):
    algorithm: str
    path: list[str]
    distance: float
    time: float
    total_score: float
    wall_ms: float | None = None

    @property
    def feasible(self) -> bool:
        return bool(self.path)


@dataclass
class SimulationRejectedBiz(BizEvent):
    algorithm: str | None
    reason: str
