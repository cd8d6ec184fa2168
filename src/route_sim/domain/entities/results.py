# route_sim/domain/entities/results.py
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, dataclass

from route_sim.domain.entities.conditions import Algorithm
from route_sim.domain.entities.graph import Graph, NodeId, PathIds


@dataclass(frozen=True)
class SolveOutcome:
    """Raw solver output. An empty path means infeasible (distance and time are 0)."""

    path: PathIds = ()
    distance: float = 0.0
    time: float = 0.0

    @property
    def feasible(self) -> bool:
        return bool(self.path)

    @classmethod
    def empty(cls) -> SolveOutcome:
        return cls()

    @classmethod
    def along(cls, graph: Graph, path: Sequence[NodeId]) -> SolveOutcome:
        # Totals are always re-summed in path order so they match the edges exactly.
        if not path:
            return cls.empty()
        totals = graph.path_totals(path)
        if totals is None:
            return cls.empty()
        return cls(tuple(path), *totals)


@dataclass(frozen=True)
class Metrics:
    time: float = 0.0  # seconds
    distance: float = 0.0  # meters
    cost: float = 0.0
    fuel: float = 0.0  # liters, kWh for ev
    traffic_impact: float = 0.0  # 0-10
    weather_impact: float = 0.0  # 0-10
    total_score: float = 0.0  # lower is better

    @classmethod
    def zero(cls) -> Metrics:
        return cls()


@dataclass(frozen=True)
class SimulationResult:
    algorithm: Algorithm
    path: PathIds
    metrics: Metrics

    @property
    def feasible(self) -> bool:
        return bool(self.path)

    def to_dict(self) -> dict:
        m = asdict(self.metrics)
        return {
            "algorithm": self.algorithm.value,
            "path": list(self.path),
            "metrics": {
                "time": m["time"],
                "distance": m["distance"],
                "cost": m["cost"],
                "fuel": m["fuel"],
                "trafficImpact": m["traffic_impact"],
                "weatherImpact": m["weather_impact"],
                "totalScore": m["total_score"],
            },
        }
