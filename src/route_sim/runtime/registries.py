# runtime/registries.py
from collections.abc import Callable

from route_sim.app.protocols import PathSolver, TourSolver
from route_sim.config.models import LimitsModel
from route_sim.domain.entities.conditions import Algorithm
from route_sim.domain.solvers.shortest_path import (
    AStarSolver,
    BellmanFordSolver,
    DijkstraSolver,
    FloydWarshallSolver,
)
from route_sim.domain.solvers.tours import (
    BranchAndBoundTourSolver,
    BruteForceTourSolver,
    HeldKarpTourSolver,
    NearestNeighborTourSolver,
)

Solver = PathSolver | TourSolver
SolverFactory = Callable[[LimitsModel], Solver]

_solver_registry: dict[Algorithm, SolverFactory] = {}


def register_solver(algorithm: Algorithm):
    def deco(fn: SolverFactory):
        _solver_registry[algorithm] = fn
        return fn

    return deco


def make_solver(algorithm: Algorithm, *, limits: LimitsModel | None = None) -> Solver:
    try:
        factory = _solver_registry[algorithm]
    except KeyError:
        raise ValueError(f"Unknown algorithm {algorithm!r}")
    return factory(limits or LimitsModel())


def registered() -> frozenset[Algorithm]:
    return frozenset(_solver_registry)


# ------------------- Point-to-point ---------------------------


@register_solver(Algorithm.DIJKSTRA)
def _make_dijkstra(limits: LimitsModel):
    return DijkstraSolver()


@register_solver(Algorithm.ASTAR)
def _make_astar(limits: LimitsModel):
    return AStarSolver()


@register_solver(Algorithm.BELLMAN_FORD)
def _make_bellman_ford(limits: LimitsModel):
    return BellmanFordSolver()


@register_solver(Algorithm.FLOYD_WARSHALL)
def _make_floyd_warshall(limits: LimitsModel):
    return FloydWarshallSolver()


# ------------------- Tours ---------------------------


@register_solver(Algorithm.BRUTE_FORCE)
def _make_brute_force(limits: LimitsModel):
    return BruteForceTourSolver(max_nodes=limits.brute_force)


@register_solver(Algorithm.DYNAMIC_PROGRAMMING)
def _make_held_karp(limits: LimitsModel):
    return HeldKarpTourSolver(max_nodes=limits.dynamic_programming)


@register_solver(Algorithm.NEAREST_NEIGHBOR)
def _make_nearest_neighbor(limits: LimitsModel):
    return NearestNeighborTourSolver()


@register_solver(Algorithm.BRANCH_AND_BOUND)
def _make_branch_and_bound(limits: LimitsModel):
    return BranchAndBoundTourSolver(max_nodes=limits.branch_and_bound)


_missing = set(Algorithm) - set(_solver_registry)
if _missing:
    raise RuntimeError(f"no solver registered for {sorted(a.value for a in _missing)}")
