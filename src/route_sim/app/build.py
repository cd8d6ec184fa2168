# route_sim/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass

from route_sim.app.orchestrator import GraphProvider, SimulationOrchestrator
from route_sim.app.protocols import ImpactJitter
from route_sim.config.models import ScenarioModel
from route_sim.domain.metrics.calculator import MetricsCalculator
from route_sim.io.recorder import JsonlSink, Recorder
from route_sim.io.run_logging import RunLogging  # JSON logs
from route_sim.runtime.jitter_factory import make_jitter
from route_sim.sim.hooks import NoopHooks, SolveHooks
from route_sim.sim.rng import RNGRegistry


@dataclass
class App:
    config: ScenarioModel
    rng: RNGRegistry
    calculator: MetricsCalculator
    jitter: ImpactJitter
    hooks: SolveHooks
    orchestrator: SimulationOrchestrator


def build(
    cfg: ScenarioModel | Mapping,
    *,
    worker: int = 0,
    use_logging: bool = True,
    recorder: Recorder | None = None,
    graph_provider: GraphProvider | None = None,
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, ScenarioModel) else ScenarioModel.model_validate(cfg)

    # 1) RNG
    rng_registry = RNGRegistry(model.seed, scenario=model.name, worker=worker)

    # 2) Hooks
    hooks = (
        RunLogging(
            run_id=model.run_id,
            recorder=recorder or Recorder(JsonlSink()),
            level=model.log.level,
            debug=model.log.debug,
        )
        if use_logging
        else NoopHooks()
    )

    # 3) Metrics & post-processing
    calculator = MetricsCalculator(model.tables)
    jitter = make_jitter(model.jitter, rng_registry=rng_registry)

    # 4) Orchestrator (inject deps explicitly)
    orchestrator = SimulationOrchestrator(
        limits=model.limits,
        calculator=calculator,
        jitter=jitter,
        hooks=hooks,
        graph_provider=graph_provider,
    )

    return App(model, rng_registry, calculator, jitter, hooks, orchestrator)
