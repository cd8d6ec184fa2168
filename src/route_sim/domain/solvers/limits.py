# route_sim/domain/solvers/limits.py
import math

from route_sim.app.errors import ScaleLimitError
from route_sim.domain.entities.conditions import Algorithm

# Practical ceilings for the exponential tour solvers. Anything above these is
# rejected up front instead of being searched partially.
DEFAULT_MAX_NODES: dict[Algorithm, int] = {
    Algorithm.BRUTE_FORCE: 10,
    Algorithm.DYNAMIC_PROGRAMMING: 16,
    Algorithm.BRANCH_AND_BOUND: 12,
}


def estimate_work(algorithm: Algorithm, nodes: int, edges: int | None = None) -> int:
    """Cheap upper bound on elementary steps, for deciding before a solve."""
    n = max(0, nodes)
    e = n * n if edges is None else edges
    if algorithm is Algorithm.BRUTE_FORCE:
        return math.factorial(max(0, n - 1)) * max(1, n)
    if algorithm is Algorithm.DYNAMIC_PROGRAMMING:
        return n * n * 2**n
    if algorithm is Algorithm.BRANCH_AND_BOUND:
        # every subset/endpoint state may be expanded, each bound costs n^2
        return 2**n * n**3
    if algorithm is Algorithm.NEAREST_NEIGHBOR:
        return n * n
    if algorithm is Algorithm.FLOYD_WARSHALL:
        return n**3
    if algorithm is Algorithm.BELLMAN_FORD:
        return max(0, n - 1) * e
    if algorithm in (Algorithm.DIJKSTRA, Algorithm.ASTAR):
        return (e + n) * max(1, math.ceil(math.log2(n + 1)))
    raise ValueError(f"Unknown algorithm {algorithm!r}")


def check_scale(algorithm: Algorithm, nodes: int, limit: int | None) -> None:
    if limit is not None and nodes > limit:
        raise ScaleLimitError(algorithm.value, nodes, limit)
