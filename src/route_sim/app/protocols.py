from typing import Protocol, runtime_checkable

from route_sim.domain.entities.graph import Graph, NodeId
from route_sim.domain.entities.results import SolveOutcome


# ------------- Solvers --------------------
@runtime_checkable
class PathSolver(Protocol):
    """
    Responsibilities:
      • Compute a least-cost path from start to end on a directed graph.
      • Return the empty outcome when either node is missing or end is unreachable.
    Units: meters for distance; seconds for time.
    """

    def solve(self, graph: Graph, start: NodeId, end: NodeId) -> SolveOutcome: ...


@runtime_checkable
class TourSolver(Protocol):
    """
    Responsibilities:
      • Compute a closed tour from start visiting every other node exactly once.
      • Return the empty outcome (never a partial tour) when no tour exists.
    """

    max_nodes: int | None

    def solve(self, graph: Graph, start: NodeId) -> SolveOutcome: ...


# --------------- Policies -------------------------


@runtime_checkable
class ImpactJitter(Protocol):
    """
    Post-processing noise on the 0-10 impact scores.
    Must return values already clamped to [0, 10].
    """

    def perturb(self, traffic: float, weather: float, *, key: str) -> tuple[float, float]: ...
