# route_sim/app/catalog.py
from dataclasses import dataclass

from route_sim.domain.entities.conditions import Algorithm, Mode


@dataclass(frozen=True)
class AlgorithmInfo:
    name: str
    description: str
    time_complexity: str
    space_complexity: str
    exact: bool
    pros: tuple[str, ...] = ()
    cons: tuple[str, ...] = ()


_CATALOG: dict[Algorithm, AlgorithmInfo] = {
    Algorithm.DIJKSTRA: AlgorithmInfo(
        name="Dijkstra",
        description=(
            "Settles nodes in order of tentative distance from the start and relaxes their "
            "outgoing edges until the target is settled."
        ),
        time_complexity="O((V+E) log V) with a binary heap",
        space_complexity="O(V)",
        exact=True,
        pros=("Optimal for non-negative weights", "Stops as soon as the target is settled"),
        cons=("Wrong answers with negative weights", "Explores in every direction"),
    ),
    Algorithm.ASTAR: AlgorithmInfo(
        name="A*",
        description=(
            "Dijkstra guided by a straight-line estimate of the remaining distance to the target."
        ),
        time_complexity="O((V+E) log V) worst case",
        space_complexity="O(V)",
        exact=True,
        pros=("Usually expands far fewer nodes than Dijkstra",),
        cons=(
            "Optimal only while the heuristic never overestimates",
            "The flat meters-per-degree estimate is not admissible everywhere",
        ),
    ),
    Algorithm.BELLMAN_FORD: AlgorithmInfo(
        name="Bellman-Ford",
        description="Relaxes every edge |V|-1 times; tolerates negative edge weights.",
        time_complexity="O(V·E)",
        space_complexity="O(V)",
        exact=True,
        pros=("Handles negative weights without negative cycles", "Simple edge-list passes"),
        cons=("Slower than Dijkstra", "Negative cycles are not detected here"),
    ),
    Algorithm.FLOYD_WARSHALL: AlgorithmInfo(
        name="Floyd-Warshall",
        description="Computes all-pairs shortest paths and reports the requested pair.",
        time_complexity="O(V³)",
        space_complexity="O(V²)",
        exact=True,
        pros=("All pairs in one pass", "Compact matrix formulation"),
        cons=("Cubic time even for a single query", "Quadratic memory"),
    ),
    Algorithm.BRUTE_FORCE: AlgorithmInfo(
        name="Brute Force",
        description=(
            "Examines every ordering of the stops and keeps the cheapest closed tour. "
            "Guarantees the best tour at the cost of computational efficiency."
        ),
        time_complexity="O(n!) where n is the number of nodes",
        space_complexity="O(n)",
        exact=True,
        pros=(
            "Guarantees the optimal solution",
            "Simple to understand and implement",
            "Works for any graph structure",
        ),
        cons=(
            "Extremely slow for large graphs",
            "Factorial time complexity",
            "Not practical beyond about ten stops",
        ),
    ),
    Algorithm.DYNAMIC_PROGRAMMING: AlgorithmInfo(
        name="Dynamic Programming (Held-Karp)",
        description=(
            "Builds optimal tours over growing subsets of stops, storing each (subset, last stop) "
            "result so no sub-tour is solved twice."
        ),
        time_complexity="O(n²·2ⁿ)",
        space_complexity="O(n·2ⁿ)",
        exact=True,
        pros=(
            "Optimal solution guaranteed",
            "Avoids redundant calculations through memoization",
            "Much faster than brute force",
        ),
        cons=("Still exponential", "High memory usage", "Complex implementation"),
    ),
    Algorithm.NEAREST_NEIGHBOR: AlgorithmInfo(
        name="Nearest Neighbor (Greedy)",
        description=(
            "Always moves to the closest unvisited stop, then returns to the start. Fast and "
            "simple but without an optimality guarantee."
        ),
        time_complexity="O(n²)",
        space_complexity="O(n)",
        exact=False,
        pros=("Very fast execution", "Simple to implement", "Good for real-time applications"),
        cons=(
            "Does not guarantee optimal solution",
            "Can get stuck in local optima",
            "Quality depends on starting point",
        ),
    ),
    Algorithm.BRANCH_AND_BOUND: AlgorithmInfo(
        name="Branch and Bound",
        description=(
            "Explores partial tours best-first and prunes any branch whose optimistic bound "
            "cannot beat the best complete tour found so far."
        ),
        time_complexity="O(n!) worst case, much better in practice",
        space_complexity="O(2ⁿ) frontier worst case",
        exact=True,
        pros=(
            "Guarantees optimal solution",
            "More efficient than brute force through pruning",
            "Can provide bounds on solution quality",
        ),
        cons=(
            "Still exponential in worst case",
            "Performance depends on bounding function quality",
        ),
    ),
}


def describe(algorithm: Algorithm | str) -> AlgorithmInfo:
    return _CATALOG[Algorithm(algorithm)]


def algorithms_for(mode: Mode) -> list[Algorithm]:
    return [a for a in Algorithm if a.mode is mode]
