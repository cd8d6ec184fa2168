import math
import random

import pytest

from route_sim.domain.entities.graph import Edge, Graph, Node

M_PER_DEG = 111_000.0


def both_ways(u: str, v: str, distance: float, time: float | None = None, traffic: float = 1.0):
    time = distance * 2 if time is None else time
    return [Edge(u, v, distance, time, traffic), Edge(v, u, distance, time, traffic)]


@pytest.fixture
def square_graph() -> Graph:
    # A-B-C-D ring of 10 with two 15 diagonals; 5.55 m squares keep the A* estimate admissible.
    side = 0.00005
    nodes = [
        Node("A", 0.0, 0.0),
        Node("B", 0.0, side),
        Node("C", side, side),
        Node("D", side, 0.0),
    ]
    edges = [
        *both_ways("A", "B", 10),
        *both_ways("B", "C", 10),
        *both_ways("C", "D", 10),
        *both_ways("D", "A", 10),
        *both_ways("A", "C", 15),
        *both_ways("B", "D", 15),
    ]
    return Graph(nodes, edges)


@pytest.fixture
def disconnected_graph() -> Graph:
    nodes = [Node(n, 0.0, 0.0) for n in "ABCD"]
    return Graph(nodes, [*both_ways("A", "B", 5), *both_ways("C", "D", 5)])


def random_geo_graph(seed: int, n: int, p: float = 0.45) -> Graph:
    """Sparse directed graph whose distances never undercut the straight line (A* stays admissible)."""
    rng = random.Random(seed)
    nodes = [Node(f"n{i}", rng.uniform(0, 0.02), rng.uniform(0, 0.02)) for i in range(n)]
    edges = []
    for a in nodes:
        for b in nodes:
            if a is b or rng.random() > p:
                continue
            straight = math.hypot(a.lat - b.lat, a.lng - b.lng) * M_PER_DEG
            d = round(straight * rng.uniform(1.0, 1.6) + 1.0, 3)
            edges.append(Edge(a.id, b.id, d, d / rng.uniform(8.0, 15.0), rng.uniform(1.0, 3.0)))
    return Graph(nodes, edges)


def random_tour_graph(seed: int, n: int, p: float = 0.85) -> Graph:
    rng = random.Random(seed)
    nodes = [Node(f"t{i}", 0.0, 0.0) for i in range(n)]
    edges = [
        Edge(a.id, b.id, float(rng.randint(1, 30)), float(rng.randint(10, 90)), 1.0)
        for a in nodes
        for b in nodes
        if a is not b and rng.random() <= p
    ]
    return Graph(nodes, edges)


@pytest.fixture
def geo_graph():
    return random_geo_graph


@pytest.fixture
def tour_graph():
    return random_tour_graph
