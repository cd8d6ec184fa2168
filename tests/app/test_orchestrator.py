import pytest

from route_sim.app.errors import InvalidRequestError, ScaleLimitError
from route_sim.app.orchestrator import SimulationOrchestrator
from route_sim.config.models import LimitsModel, SimulationParams
from route_sim.domain.entities.conditions import Algorithm, MapContext
from route_sim.domain.entities.graph import Graph, Node
from route_sim.domain.entities.results import Metrics
from route_sim.sim.hooks import NoopHooks


class RecordingHooks(NoopHooks):
    def __init__(self):
        self.calls = []

    def run_start(self, **kw):
        self.calls.append(("run_start", kw))

    def run_end(self, **kw):
        self.calls.append(("run_end", kw))

    def rejected(self, **kw):
        self.calls.append(("rejected", kw))


@pytest.fixture
def hooks() -> RecordingHooks:
    return RecordingHooks()


@pytest.fixture
def orch(hooks) -> SimulationOrchestrator:
    return SimulationOrchestrator(hooks=hooks)


def _params(algorithm: str, start="A", end=None, **kw) -> dict:
    p = {"algorithm": algorithm, "startLocation": start, **kw}
    if end is not None:
        p["endLocation"] = end
    return p


# ---------- worked example


def test_dijkstra_example(orch: SimulationOrchestrator, square_graph: Graph):
    result = orch.run(_params("dijkstra", "A", "C"), square_graph)
    assert result.algorithm is Algorithm.DIJKSTRA
    assert result.path == ("A", "C")
    assert result.metrics.distance == 15
    assert result.metrics.time == 30


@pytest.mark.parametrize("alg", ["brute-force", "dynamic-programming", "branch-and-bound"])
def test_exact_tours_example(orch: SimulationOrchestrator, square_graph: Graph, alg):
    result = orch.run(_params(alg, "A"), square_graph)
    assert result.metrics.distance == 40
    assert result.path[0] == result.path[-1] == "A"


def test_nearest_neighbor_example(orch: SimulationOrchestrator, square_graph: Graph):
    result = orch.run(_params("nearest-neighbor", "A"), square_graph)
    assert result.metrics.distance >= 40


def test_tour_ignores_end_location(orch: SimulationOrchestrator, square_graph: Graph):
    result = orch.run(_params("dynamic-programming", "A", "A"), square_graph)
    assert len(result.path) == 5


def test_metrics_come_from_the_calculator(orch: SimulationOrchestrator, square_graph: Graph):
    params = _params("floyd-warshall", "A", "C", vehicle="truck", weather="foggy",
                     timeOfDay="night", mapType="mysuru")
    result = orch.run(params, square_graph)
    m = result.metrics
    assert m.fuel == pytest.approx(0.25 * 1.05 * 0.9 * 15 / 1000)
    assert m.weather_impact == pytest.approx(6.0)
    assert m.traffic_impact == pytest.approx(1.0 * 0.6 * 2)
    assert result.to_dict()["metrics"]["trafficImpact"] == m.traffic_impact


# ---------- invalid requests are rejected before solving


def test_start_equals_end_rejected(orch: SimulationOrchestrator, hooks, square_graph: Graph):
    with pytest.raises(InvalidRequestError):
        orch.run(_params("dijkstra", "A", "A"), square_graph)
    assert [c[0] for c in hooks.calls] == ["rejected"]
    assert hooks.calls[0][1]["reason"] == "start_equals_end"


def test_single_node_point_to_point_rejected(orch: SimulationOrchestrator):
    g = Graph([Node("A", 0, 0)], [])
    with pytest.raises(InvalidRequestError):
        orch.run(_params("astar", "A", "A"), g)


@pytest.mark.parametrize(
    "params",
    [
        _params("dijkstra", "A", "Z"),
        _params("dijkstra", "Z", "A"),
        _params("dijkstra", "A"),
        _params("brute-force", "Z"),
        _params("simulated-annealing", "A", "C"),
        _params("dijkstra", "A", "C", weather="hail"),
    ],
    ids=["unknown-end", "unknown-start", "missing-end", "unknown-tour-start", "unknown-alg",
         "unknown-weather"],
)
def test_invalid_requests(orch: SimulationOrchestrator, hooks, square_graph: Graph, params):
    with pytest.raises(InvalidRequestError):
        orch.run(params, square_graph)
    assert "run_start" not in [c[0] for c in hooks.calls]


def test_invalid_request_is_a_value_error(orch: SimulationOrchestrator, square_graph: Graph):
    with pytest.raises(ValueError):
        orch.run(_params("bellman-ford", "B", "B"), square_graph)


def test_scale_ceiling_checked_before_solving(hooks, tour_graph):
    orch = SimulationOrchestrator(limits=LimitsModel(brute_force=5), hooks=hooks)
    g = tour_graph(1, n=6)
    with pytest.raises(ScaleLimitError):
        orch.run(_params("brute-force", "t0"), g)
    assert hooks.calls[-1][0] == "rejected"
    assert hooks.calls[-1][1]["reason"] == "scale_limit"
    # the same graph is fine for the other exact solvers
    assert orch.run(_params("dynamic-programming", "t0"), g).algorithm is Algorithm.DYNAMIC_PROGRAMMING


# ---------- infeasible graphs are not errors


@pytest.mark.parametrize("alg", [a.value for a in Algorithm])
def test_disconnected_graph_gives_empty_result(orch, disconnected_graph: Graph, alg):
    result = orch.run(_params(alg, "A", "D"), disconnected_graph)
    assert result.path == ()
    assert result.metrics == Metrics.zero()
    assert not result.feasible


# ---------- idempotence, comparison, graph sources


@pytest.mark.parametrize("alg", [a.value for a in Algorithm])
def test_rerun_is_identical(orch, geo_graph, alg):
    g = geo_graph(3, n=7, p=0.8)
    p = SimulationParams.model_validate(_params(alg, "n0", "n4"))
    a, b = orch.run(p, g), orch.run(p, g)
    assert (a.path, a.metrics.distance, a.metrics.time) == (b.path, b.metrics.distance, b.metrics.time)


def test_compare_runs_both_algorithms(orch: SimulationOrchestrator, hooks, square_graph: Graph):
    primary, other = orch.compare(_params("brute-force", "A"), "nearest-neighbor", square_graph)
    assert primary.algorithm is Algorithm.BRUTE_FORCE
    assert other.algorithm is Algorithm.NEAREST_NEIGHBOR
    assert other.metrics.distance >= primary.metrics.distance
    assert [c[0] for c in hooks.calls].count("run_end") == 2


def test_compare_rejects_unknown_algorithm(orch: SimulationOrchestrator, square_graph: Graph):
    with pytest.raises(InvalidRequestError):
        orch.compare(_params("brute-force", "A"), "genetic", square_graph)


def test_graph_provider_keyed_by_map_context(square_graph: Graph):
    seen = []

    def provider(ctx: MapContext) -> Graph:
        seen.append(ctx)
        return square_graph

    orch = SimulationOrchestrator(graph_provider=provider)
    result = orch.run(_params("dijkstra", "A", "C", mapContext="rural"))
    assert seen == [MapContext.RURAL]
    assert result.path == ("A", "C")


def test_no_graph_and_no_provider_rejected(orch: SimulationOrchestrator):
    with pytest.raises(InvalidRequestError):
        orch.run(_params("dijkstra", "A", "C"))


def test_payload_graph_accepted(orch: SimulationOrchestrator):
    payload = {
        "nodes": {"x": {"lat": 0, "lng": 0}, "y": {"lat": 0, "lng": 0}},
        "edges": [{"from": "x", "to": "y", "distance": 1200, "time": 90, "trafficFactor": 1.5}],
    }
    result = orch.run(_params("bellman-ford", "x", "y"), payload)
    assert result.path == ("x", "y")
    assert result.metrics.distance == 1200


def test_payload_with_unknown_edge_endpoint_rejected(orch: SimulationOrchestrator, hooks):
    payload = {
        "nodes": {"x": {"lat": 0, "lng": 0}},
        "edges": [{"from": "x", "to": "ghost", "distance": 10, "time": 5}],
    }
    with pytest.raises(InvalidRequestError):
        orch.run(_params("dijkstra", "x", "ghost"), payload)
    assert [c[0] for c in hooks.calls] == ["rejected"]
    assert hooks.calls[0][1]["reason"] == "invalid_graph"


def test_malformed_payload_rejected(orch: SimulationOrchestrator, hooks):
    with pytest.raises(InvalidRequestError):
        orch.run(_params("dijkstra", "x", "y"), {"nodes": {"x": {"lat": "north"}}})
    assert hooks.calls[-1][1]["reason"] == "invalid_graph"
