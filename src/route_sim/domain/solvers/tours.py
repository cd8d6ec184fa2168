# route_sim/domain/solvers/tours.py
import heapq
import itertools
import math

import numpy as np

from route_sim.app.protocols import TourSolver
from route_sim.domain.entities.conditions import Algorithm
from route_sim.domain.entities.graph import Graph, NodeId
from route_sim.domain.entities.results import SolveOutcome
from route_sim.domain.solvers.limits import DEFAULT_MAX_NODES, check_scale

# All tour solvers optimise on edge distance; time is summed along the chosen tour.


def _to_outcome(graph: Graph, order: list[int]) -> SolveOutcome:
    ids = graph.node_ids
    return SolveOutcome.along(graph, [ids[i] for i in order])


class BruteForceTourSolver(TourSolver):
    """
    Exhaustive search over every ordering of the non-start nodes, O(n!).
    Orderings come from itertools.permutations, so there is no recursion depth to hit.
    """

    algorithm = Algorithm.BRUTE_FORCE

    def __init__(self, max_nodes: int | None = DEFAULT_MAX_NODES[Algorithm.BRUTE_FORCE]):
        self.max_nodes = max_nodes

    def solve(self, graph: Graph, start: NodeId) -> SolveOutcome:
        if start not in graph:
            return SolveOutcome.empty()
        check_scale(self.algorithm, len(graph), self.max_nodes)
        if len(graph) == 1:
            return SolveOutcome.along(graph, (start,))

        w = graph.weight_matrix().tolist()
        s = graph.index_of(start)
        others = [i for i in range(len(graph)) if i != s]
        best, best_order = math.inf, None
        for perm in itertools.permutations(others):
            cost, prev = 0.0, s
            for v in (*perm, s):
                step = w[prev][v]
                if math.isinf(step):
                    break
                cost += step
                prev = v
            else:
                if cost < best:
                    best, best_order = cost, perm
        if best_order is None:
            return SolveOutcome.empty()
        return _to_outcome(graph, [s, *best_order, s])


class HeldKarpTourSolver(TourSolver):
    """
    Bitmask dynamic programme over (visited set, current node).

    ``dp[mask, v]`` is the cheapest way to start at ``start``, visit exactly ``mask``
    and stand on ``v``; ``parent`` keeps the node we came from. O(n^2 * 2^n) time,
    O(n * 2^n) memory.
    """

    algorithm = Algorithm.DYNAMIC_PROGRAMMING

    def __init__(self, max_nodes: int | None = DEFAULT_MAX_NODES[Algorithm.DYNAMIC_PROGRAMMING]):
        self.max_nodes = max_nodes

    def solve(self, graph: Graph, start: NodeId) -> SolveOutcome:
        if start not in graph:
            return SolveOutcome.empty()
        check_scale(self.algorithm, len(graph), self.max_nodes)
        n = len(graph)
        if n == 1:
            return SolveOutcome.along(graph, (start,))

        w = graph.weight_matrix()
        s = graph.index_of(start)
        start_bit = 1 << s
        full = (1 << n) - 1
        bits = np.left_shift(1, np.arange(n, dtype=np.int64))

        dp = np.full((1 << n, n), np.inf)
        parent = np.full((1 << n, n), -1, dtype=np.int16)
        dp[start_bit, s] = 0.0

        # masks only grow, so increasing order finishes every subset before its supersets
        for mask in range(1 << n):
            if not mask & start_bit:
                continue
            free = np.flatnonzero((mask & bits) == 0)
            if free.size == 0:
                continue
            targets = mask | bits[free]
            row = dp[mask]
            for v in np.flatnonzero(np.isfinite(row)):
                cand = row[v] + w[v, free]
                better = cand < dp[targets, free]
                if better.any():
                    dp[targets[better], free[better]] = cand[better]
                    parent[targets[better], free[better]] = v

        closing = dp[full] + w[:, s]
        closing[s] = np.inf
        last = int(np.argmin(closing))
        if math.isinf(closing[last]):
            return SolveOutcome.empty()

        backwards = []
        mask, cur = full, last
        while cur != s:
            backwards.append(cur)
            prev = int(parent[mask, cur])
            mask &= ~(1 << cur)
            cur = prev
        return _to_outcome(graph, [s, *reversed(backwards), s])


class NearestNeighborTourSolver(TourSolver):
    """
    Greedy: always take the cheapest direct edge to an unvisited node, then the
    direct edge home. A dead end or a missing closing edge means no tour at all.
    """

    algorithm = Algorithm.NEAREST_NEIGHBOR
    max_nodes = None

    def solve(self, graph: Graph, start: NodeId) -> SolveOutcome:
        if start not in graph:
            return SolveOutcome.empty()
        path = [start]
        visited = {start}
        current = start
        while len(visited) < len(graph):
            nearest = None
            for e in graph.outgoing(current):
                if e.target in visited:
                    continue
                if nearest is None or e.distance < nearest.distance:
                    nearest = e
            if nearest is None:
                return SolveOutcome.empty()
            current = nearest.target
            visited.add(current)
            path.append(current)
        if len(graph) > 1:
            if graph.edge(current, start) is None:
                return SolveOutcome.empty()
            path.append(start)
        return SolveOutcome.along(graph, path)


class BranchAndBoundTourSolver(TourSolver):
    """
    Best-first search over partial tours keyed by cost + lower bound.

    The bound for a partial tour is the return edge once everything is visited.
    Otherwise it is the cheapest edge from the current node into the unvisited
    set, plus, for each unvisited node, its cheapest edge to another unvisited
    node or back to start. Each of those edges has to be taken exactly once, so
    the bound never overestimates. States whose cost + bound reaches the best
    complete tour are pruned. Heap ties go to the deeper state first (then
    insertion order), so a complete tour turns up on the first dive and equal-key
    siblings are cut off instead of expanded level by level.
    """

    algorithm = Algorithm.BRANCH_AND_BOUND

    def __init__(self, max_nodes: int | None = DEFAULT_MAX_NODES[Algorithm.BRANCH_AND_BOUND]):
        self.max_nodes = max_nodes

    def solve(self, graph: Graph, start: NodeId) -> SolveOutcome:
        if start not in graph:
            return SolveOutcome.empty()
        check_scale(self.algorithm, len(graph), self.max_nodes)
        n = len(graph)
        if n == 1:
            return SolveOutcome.along(graph, (start,))

        w = graph.weight_matrix().tolist()
        s = graph.index_of(start)
        full = (1 << n) - 1

        def bound(mask: int, cur: int) -> float:
            if mask == full:
                return w[cur][s]
            open_nodes = [u for u in range(n) if not mask & (1 << u)]
            total = min(w[cur][x] for x in open_nodes)
            if math.isinf(total):
                return math.inf
            for u in open_nodes:
                cheapest = w[u][s]
                for x in open_nodes:
                    if x != u and w[u][x] < cheapest:
                        cheapest = w[u][x]
                if math.isinf(cheapest):
                    return math.inf
                total += cheapest
            return total

        seq = itertools.count()
        start_mask = 1 << s
        frontier = [(bound(start_mask, s), -1, next(seq), 0.0, s, start_mask, (s,))]
        best, best_order = math.inf, None
        while frontier:
            key, _, _, cost, cur, mask, order = heapq.heappop(frontier)
            if key >= best:
                break  # min-heap: nothing left can improve
            if mask == full:
                best, best_order = key, (*order, s)
                continue
            depth = -len(order) - 1
            for u in range(n):
                if mask & (1 << u):
                    continue
                step = w[cur][u]
                if math.isinf(step):
                    continue
                new_cost = cost + step
                new_mask = mask | (1 << u)
                new_key = new_cost + bound(new_mask, u)
                if new_key < best:
                    heapq.heappush(
                        frontier,
                        (new_key, depth, next(seq), new_cost, u, new_mask, (*order, u)),
                    )
        if best_order is None:
            return SolveOutcome.empty()
        return _to_outcome(graph, list(best_order))
