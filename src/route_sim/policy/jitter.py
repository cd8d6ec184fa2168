# route_sim/policy/jitter.py
import numpy as np

from route_sim.app.protocols import ImpactJitter
from route_sim.domain.metrics.calculator import IMPACT_MAX, IMPACT_MIN
from route_sim.sim.rng import RNGKey, RNGRegistry


class NoJitter(ImpactJitter):
    def perturb(self, traffic: float, weather: float, *, key: str) -> tuple[float, float]:
        return traffic, weather


class UniformImpactJitter(ImpactJitter):
    """
    Symmetric uniform noise on both impact scores, one stream per key (algorithm).
    The stream restarts on every call, so the noise depends only on seed and key.
    """

    def __init__(
        self,
        rng_registry: RNGRegistry,
        traffic_amplitude: float = 1.5,
        weather_amplitude: float = 1.0,
    ):
        self.rng_registry = rng_registry
        self.traffic_amplitude = traffic_amplitude
        self.weather_amplitude = weather_amplitude

    def perturb(self, traffic: float, weather: float, *, key: str) -> tuple[float, float]:
        g = self.rng_registry.fresh(RNGKey.from_parts("impact_jitter", key))
        dt = g.uniform(-self.traffic_amplitude, self.traffic_amplitude)
        dw = g.uniform(-self.weather_amplitude, self.weather_amplitude)
        return (
            float(np.clip(traffic + dt, IMPACT_MIN, IMPACT_MAX)),
            float(np.clip(weather + dw, IMPACT_MIN, IMPACT_MAX)),
        )
