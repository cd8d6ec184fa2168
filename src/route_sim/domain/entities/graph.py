# route_sim/domain/entities/graph.py
from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass

import numpy as np

NodeId = str
PathIds = tuple[NodeId, ...]


@dataclass(frozen=True)
class Node:
    id: NodeId
    lat: float
    lng: float


@dataclass(frozen=True)
class Edge:
    source: NodeId
    target: NodeId
    distance: float  # meters
    time: float  # seconds
    traffic_factor: float = 1.0


class Graph:
    """
    Immutable directed graph shared by every solver.

    Nodes keep insertion order and get a dense index (the arena) so matrix and
    bitmask solvers can work on ints. Parallel edges are allowed; ``edge(u, v)``
    and the weight matrix resolve them to the cheapest distance (first wins on ties).
    Negative weights are not rejected here: the solvers document which of them
    tolerate it.
    """

    __slots__ = ("_nodes", "_edges", "_ids", "_index", "_out", "_best", "_weights")

    def __init__(self, nodes: Iterable[Node], edges: Iterable[Edge]):
        self._nodes: dict[NodeId, Node] = {}
        for n in nodes:
            if n.id in self._nodes:
                raise ValueError(f"duplicate node id {n.id!r}")
            self._nodes[n.id] = n
        self._edges: tuple[Edge, ...] = tuple(edges)
        self._ids: tuple[NodeId, ...] = tuple(self._nodes)
        self._index: dict[NodeId, int] = {nid: i for i, nid in enumerate(self._ids)}

        out: dict[NodeId, list[Edge]] = {nid: [] for nid in self._ids}
        best: dict[tuple[NodeId, NodeId], Edge] = {}
        for e in self._edges:
            for end in (e.source, e.target):
                if end not in self._nodes:
                    raise ValueError(f"edge {e.source!r}->{e.target!r} references unknown node {end!r}")
            out[e.source].append(e)
            cur = best.get((e.source, e.target))
            if cur is None or e.distance < cur.distance:
                best[(e.source, e.target)] = e
        self._out = {nid: tuple(es) for nid, es in out.items()}
        self._best = best

        n = len(self._ids)
        w = np.full((n, n), np.inf)
        for (u, v), e in best.items():
            w[self._index[u], self._index[v]] = e.distance
        w.setflags(write=False)
        self._weights = w

    @classmethod
    def from_payload(cls, payload: Mapping) -> Graph:
        """Build from the ``{"nodes": {...}, "edges": [...]}`` shape used by graph producers."""
        from route_sim.config.models import GraphPayloadModel

        model = (
            payload
            if isinstance(payload, GraphPayloadModel)
            else GraphPayloadModel.model_validate(payload)
        )
        nodes = [Node(id=key, lat=n.lat, lng=n.lng) for key, n in model.nodes.items()]
        edges = [
            Edge(e.source, e.target, e.distance, e.time, e.traffic_factor) for e in model.edges
        ]
        return cls(nodes, edges)

    # ---------------- accessors -----------------------

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    @property
    def node_ids(self) -> tuple[NodeId, ...]:
        return self._ids

    @property
    def edges(self) -> tuple[Edge, ...]:
        return self._edges

    def nodes(self) -> Iterator[Node]:
        return iter(self._nodes.values())

    def has_node(self, node_id: NodeId) -> bool:
        return node_id in self._nodes

    def node(self, node_id: NodeId) -> Node:
        return self._nodes[node_id]

    def index_of(self, node_id: NodeId) -> int:
        return self._index[node_id]

    def outgoing(self, node_id: NodeId) -> tuple[Edge, ...]:
        return self._out.get(node_id, ())

    def edge(self, source: NodeId, target: NodeId) -> Edge | None:
        return self._best.get((source, target))

    def weight_matrix(self) -> np.ndarray:
        """Read-only ``n x n`` cheapest direct distances, ``inf`` where no edge exists."""
        return self._weights

    # ---------------- path helpers -----------------------

    def path_edges(self, path: Sequence[NodeId]) -> list[Edge] | None:
        edges = []
        for u, v in zip(path, path[1:]):
            e = self.edge(u, v)
            if e is None:
                return None
            edges.append(e)
        return edges

    def path_totals(self, path: Sequence[NodeId]) -> tuple[float, float] | None:
        """(distance, time) summed along the path in order; None if a hop has no edge."""
        edges = self.path_edges(path)
        if edges is None:
            return None
        distance = time = 0.0
        for e in edges:
            distance += e.distance
            time += e.time
        return distance, time

    def straight_line_m(self, a: NodeId, b: NodeId, meters_per_degree: float = 111_000.0) -> float:
        pa, pb = self._nodes[a], self._nodes[b]
        return math.hypot(pa.lng - pb.lng, pa.lat - pb.lat) * meters_per_degree
