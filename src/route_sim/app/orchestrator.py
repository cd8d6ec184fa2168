# route_sim/app/orchestrator.py
import time
from collections.abc import Callable, Mapping

from pydantic import ValidationError

from route_sim.app.errors import InvalidRequestError, ScaleLimitError
from route_sim.app.protocols import ImpactJitter
from route_sim.config.models import LimitsModel, SimulationParams
from route_sim.domain.entities.conditions import Algorithm, MapContext
from route_sim.domain.entities.graph import Graph
from route_sim.domain.entities.results import SimulationResult, SolveOutcome
from route_sim.domain.metrics.calculator import MetricsCalculator
from route_sim.domain.solvers.limits import check_scale
from route_sim.policy.jitter import NoJitter
from route_sim.runtime.registries import make_solver
from route_sim.sim.hooks import NoopHooks, SolveHooks

GraphProvider = Callable[[MapContext], Graph]


class SimulationOrchestrator:
    """
    Validates a request, runs the named solver, then the metrics calculator.

    Requests are rejected with ``InvalidRequestError`` (or ``ScaleLimitError`` for
    node counts over an exponential solver's ceiling) before any solver runs. A
    graph with no feasible path/tour is not an error: the result has an empty path
    and all-zero metrics. Negative weights (Dijkstra, A*) and negative cycles
    (Bellman-Ford) are the caller's problem; they are not detected.
    """

    def __init__(
        self,
        *,
        limits: LimitsModel | None = None,
        calculator: MetricsCalculator | None = None,
        jitter: ImpactJitter | None = None,
        hooks: SolveHooks | None = None,
        graph_provider: GraphProvider | None = None,
    ):
        self.limits = limits or LimitsModel()
        self.calculator = calculator or MetricsCalculator()
        self.jitter = jitter or NoJitter()
        self.hooks = hooks or NoopHooks()
        self.graph_provider = graph_provider
        self._solvers = {alg: make_solver(alg, limits=self.limits) for alg in Algorithm}

    # --------------- validation -----------------------------

    def _reject(self, algorithm, reason: str, exc_type=InvalidRequestError, **kw):
        self.hooks.rejected(algorithm=algorithm, reason=reason, **kw)
        if exc_type is not None:
            raise exc_type(f"{reason}: {kw}" if kw else reason)

    def _params(self, params: SimulationParams | Mapping) -> SimulationParams:
        if isinstance(params, SimulationParams):
            return params
        try:
            return SimulationParams.model_validate(params)
        except ValidationError as exc:
            algorithm = params.get("algorithm") if isinstance(params, Mapping) else None
            self.hooks.rejected(algorithm=algorithm, reason="invalid_params")
            raise InvalidRequestError(str(exc)) from exc

    def _graph(self, graph: Graph | Mapping | None, p: SimulationParams) -> Graph:
        if isinstance(graph, Graph):
            return graph
        if graph is not None:
            try:
                return Graph.from_payload(graph)
            except ValueError as exc:  # pydantic ValidationError included
                self.hooks.rejected(algorithm=p.algorithm, reason="invalid_graph")
                raise InvalidRequestError(str(exc)) from exc
        if self.graph_provider is None:
            self._reject(p.algorithm, "no_graph")
        return self.graph_provider(p.map_context)

    def validate(self, params: SimulationParams | Mapping, graph: Graph) -> SimulationParams:
        p = self._params(params)
        alg = p.algorithm
        if not graph.has_node(p.start_location):
            self._reject(alg, "unknown_start", node=p.start_location)
        if not alg.is_tour:
            if p.end_location is None:
                self._reject(alg, "missing_end")
            if p.end_location == p.start_location:
                self._reject(alg, "start_equals_end", node=p.start_location)
            if not graph.has_node(p.end_location):
                self._reject(alg, "unknown_end", node=p.end_location)
        solver = self._solvers[alg]
        try:
            check_scale(alg, len(graph), getattr(solver, "max_nodes", None))
        except ScaleLimitError as exc:
            self._reject(alg, "scale_limit", exc_type=None, nodes=exc.nodes, limit=exc.limit)
            raise
        return p

    # --------------- running -----------------------------

    def solve(self, p: SimulationParams, graph: Graph) -> SolveOutcome:
        solver = self._solvers[p.algorithm]
        if p.algorithm.is_tour:
            return solver.solve(graph, p.start_location)
        return solver.solve(graph, p.start_location, p.end_location)

    def run(
        self, params: SimulationParams | Mapping, graph: Graph | Mapping | None = None
    ) -> SimulationResult:
        p = self._params(params)
        g = self._graph(graph, p)
        p = self.validate(p, g)

        self.hooks.run_start(algorithm=p.algorithm, nodes=len(g), edges=len(g.edges))
        t0 = time.perf_counter()
        try:
            outcome = self.solve(p, g)
        except Exception as exc:
            self.hooks.error(algorithm=p.algorithm, exc=exc)
            raise

        metrics = self.calculator.compute(
            outcome,
            g.path_edges(outcome.path) or [],
            vehicle=p.vehicle,
            weather=p.weather,
            time_of_day=p.time_of_day,
            map_context=p.map_context,
        )
        if outcome.feasible:
            traffic, weather = self.jitter.perturb(
                metrics.traffic_impact, metrics.weather_impact, key=p.algorithm.value
            )
            if (traffic, weather) != (metrics.traffic_impact, metrics.weather_impact):
                metrics = self.calculator.rescore(metrics, traffic, weather)

        result = SimulationResult(algorithm=p.algorithm, path=outcome.path, metrics=metrics)
        self.hooks.run_end(
            algorithm=p.algorithm,
            path=result.path,
            distance=metrics.distance,
            time=metrics.time,
            total_score=metrics.total_score,
            wall_ms=(time.perf_counter() - t0) * 1000,
        )
        return result

    def compare(
        self,
        params: SimulationParams | Mapping,
        other: Algorithm | str,
        graph: Graph | Mapping | None = None,
    ) -> tuple[SimulationResult, SimulationResult]:
        """Primary and comparison runs on the same graph; they share no state."""
        p = self._params(params)
        try:
            other_alg = Algorithm(other)
        except ValueError as exc:
            self.hooks.rejected(algorithm=other, reason="unknown_algorithm")
            raise InvalidRequestError(f"unknown algorithm {other!r}") from exc
        g = self._graph(graph, p)
        return self.run(p, g), self.run(p.model_copy(update={"algorithm": other_alg}), g)
