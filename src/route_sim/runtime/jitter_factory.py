# route_sim/runtime/jitter_factory.py
from route_sim.app.protocols import ImpactJitter
from route_sim.config.models import JitterNoneModel, JitterUniformModel, JitterUnion
from route_sim.policy.jitter import NoJitter, UniformImpactJitter
from route_sim.sim.rng import RNGRegistry


def make_jitter(cfg: JitterUnion, *, rng_registry: RNGRegistry) -> ImpactJitter:
    if isinstance(cfg, JitterNoneModel):
        return NoJitter()
    elif isinstance(cfg, JitterUniformModel):
        return UniformImpactJitter(
            rng_registry=rng_registry,
            traffic_amplitude=cfg.traffic_amplitude,
            weather_amplitude=cfg.weather_amplitude,
        )
    else:
        raise TypeError(cfg)
