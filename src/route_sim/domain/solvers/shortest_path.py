# route_sim/domain/solvers/shortest_path.py
import heapq
import itertools
import math

import numpy as np

from route_sim.app.protocols import PathSolver
from route_sim.domain.entities.graph import Graph, NodeId
from route_sim.domain.entities.results import SolveOutcome

METERS_PER_DEGREE = 111_000.0


def _walk_back(graph: Graph, prev: dict[NodeId, NodeId], start: NodeId, end: NodeId) -> SolveOutcome:
    if start == end:
        return SolveOutcome.along(graph, (start,))
    if end not in prev:
        return SolveOutcome.empty()
    path = [end]
    # A predecessor chain longer than |V| can only come from a negative cycle.
    for _ in range(len(graph)):
        cur = prev.get(path[-1])
        if cur is None:
            return SolveOutcome.empty()
        path.append(cur)
        if cur == start:
            path.reverse()
            return SolveOutcome.along(graph, path)
    return SolveOutcome.empty()


class DijkstraSolver(PathSolver):
    """
    Label-setting search with a binary heap (ties go to the lower node index).
    Requires non-negative distances; negative edges give an undefined result and
    are not detected.
    """

    def solve(self, graph: Graph, start: NodeId, end: NodeId) -> SolveOutcome:
        if start not in graph or end not in graph:
            return SolveOutcome.empty()
        dist = dict.fromkeys(graph.node_ids, math.inf)
        dist[start] = 0.0
        prev: dict[NodeId, NodeId] = {}
        settled: set[NodeId] = set()
        heap = [(0.0, graph.index_of(start), start)]
        while heap:
            d, _, u = heapq.heappop(heap)
            if u in settled:
                continue
            settled.add(u)
            if u == end:
                break
            for e in graph.outgoing(u):
                v = e.target
                if v in settled:
                    continue
                nd = d + e.distance
                if nd < dist[v]:
                    dist[v] = nd
                    prev[v] = u
                    heapq.heappush(heap, (nd, graph.index_of(v), v))
        return _walk_back(graph, prev, start, end)


class AStarSolver(PathSolver):
    """
    Best-first on g + h where h is the straight-line lat/lng distance to the goal
    scaled by a flat meters-per-degree factor.

    The flat factor ignores longitude shrinking with latitude, so h is not
    admissible everywhere; when it overestimates the path may be suboptimal.
    Nodes are reopened when a cheaper g turns up.
    """

    def __init__(self, meters_per_degree: float = METERS_PER_DEGREE):
        self.meters_per_degree = meters_per_degree

    def solve(self, graph: Graph, start: NodeId, end: NodeId) -> SolveOutcome:
        if start not in graph or end not in graph:
            return SolveOutcome.empty()

        def h(n: NodeId) -> float:
            return graph.straight_line_m(n, end, self.meters_per_degree)

        g = {start: 0.0}
        prev: dict[NodeId, NodeId] = {}
        seq = itertools.count()
        open_heap = [(h(start), next(seq), 0.0, start)]
        while open_heap:
            _, _, g_at_push, u = heapq.heappop(open_heap)
            if g_at_push > g[u]:
                continue  # stale
            if u == end:
                return _walk_back(graph, prev, start, end)
            for e in graph.outgoing(u):
                v = e.target
                tentative = g[u] + e.distance
                if tentative < g.get(v, math.inf):
                    g[v] = tentative
                    prev[v] = u
                    heapq.heappush(open_heap, (tentative + h(v), next(seq), tentative, v))
        return SolveOutcome.empty()


class BellmanFordSolver(PathSolver):
    """
    |V|-1 relaxation passes over every edge, stopping early once a pass changes nothing.

    There is no final negative-cycle pass: with a reachable negative cycle the
    result is undefined (at best empty) and callers must not rely on detection.
    """

    def solve(self, graph: Graph, start: NodeId, end: NodeId) -> SolveOutcome:
        if start not in graph or end not in graph:
            return SolveOutcome.empty()
        dist = dict.fromkeys(graph.node_ids, math.inf)
        dist[start] = 0.0
        prev: dict[NodeId, NodeId] = {}
        for _ in range(len(graph) - 1):
            changed = False
            for e in graph.edges:
                du = dist[e.source]
                if math.isinf(du):
                    continue
                nd = du + e.distance
                if nd < dist[e.target]:
                    dist[e.target] = nd
                    prev[e.target] = e.source
                    changed = True
            if not changed:
                break
        return _walk_back(graph, prev, start, end)


class FloydWarshallSolver(PathSolver):
    """
    All-pairs distances with a ``next`` matrix for reconstruction; only the
    (start, end) pair is surfaced. For each k the i/j sweep is one numpy step.
    """

    def solve(self, graph: Graph, start: NodeId, end: NodeId) -> SolveOutcome:
        if start not in graph or end not in graph:
            return SolveOutcome.empty()
        dist, nxt = self.tables(graph)
        s, t = graph.index_of(start), graph.index_of(end)
        if math.isinf(dist[s, t]):
            return SolveOutcome.empty()
        ids = graph.node_ids
        path = [start]
        cur = s
        while cur != t:
            cur = int(nxt[cur, t])
            path.append(ids[cur])
            if len(path) > len(graph):
                return SolveOutcome.empty()
        return SolveOutcome.along(graph, path)

    @staticmethod
    def tables(graph: Graph) -> tuple[np.ndarray, np.ndarray]:
        n = len(graph)
        dist = np.array(graph.weight_matrix(), dtype=float)
        np.fill_diagonal(dist, 0.0)
        nxt = np.tile(np.arange(n), (n, 1))
        for k in range(n):
            # inf + x stays inf and never compares smaller, so no sentinel guard is needed
            through = dist[:, k, None] + dist[None, k, :]
            better = through < dist
            dist = np.where(better, through, dist)
            nxt = np.where(better, nxt[:, k, None], nxt)
        return dist, nxt
