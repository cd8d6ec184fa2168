# route_sim/domain/metrics/calculator.py
from collections.abc import Sequence
from dataclasses import replace

from route_sim.config.models import MetricsTablesModel
from route_sim.domain.entities.conditions import MapContext, TimeOfDay, Vehicle, Weather
from route_sim.domain.entities.graph import Edge
from route_sim.domain.entities.results import Metrics, SolveOutcome

IMPACT_MIN, IMPACT_MAX = 0.0, 10.0


def clamp(x: float, lo: float = IMPACT_MIN, hi: float = IMPACT_MAX) -> float:
    return min(hi, max(lo, x))


class MetricsCalculator:
    """
    Deterministic cost/impact summary for a solved path or tour.
    All coefficients come from the tables; nothing here branches on a particular vehicle or weather.
    """

    def __init__(self, tables: MetricsTablesModel | None = None):
        self.tables = tables or MetricsTablesModel()

    def fuel(self, vehicle: Vehicle, distance: float, weather: Weather, tod: TimeOfDay) -> float:
        t = self.tables
        per_km = t.base_rate[vehicle] * t.weather_multiplier[weather] * t.fuel_time_multiplier[tod]
        return per_km * (distance / 1000)

    def cost(self, vehicle: Vehicle, distance: float, time: float, weather: Weather) -> float:
        t = self.tables
        distance_cost = (distance / 1000) * t.base_cost_per_km[vehicle]
        time_cost = (time / 60) * t.time_cost_per_minute
        return distance_cost + time_cost + t.weather_surcharge[weather]

    def traffic_impact(self, edges: Sequence[Edge], tod: TimeOfDay) -> float:
        if not edges:
            return 0.0
        mean_factor = sum(e.traffic_factor for e in edges) / len(edges)
        return clamp(mean_factor * self.tables.traffic_time_multiplier[tod] * 2)

    def weather_impact(self, weather: Weather, map_context: MapContext) -> float:
        t = self.tables
        return clamp(t.weather_severity[weather] * t.infrastructure_modifier[map_context])

    def total_score(
        self,
        time: float,
        distance: float,
        cost: float,
        fuel: float,
        traffic_impact: float,
        weather_impact: float,
    ) -> float:
        # each term on a 0-100 scale before weighting; lower is better
        w = self.tables.weights
        return (
            min(100.0, (time / 3600) * 100) * w.time
            + min(100.0, (distance / 10_000) * 100) * w.distance
            + min(100.0, cost * 10) * w.cost
            + min(100.0, fuel * 20) * w.fuel
            + min(100.0, traffic_impact * 10) * w.traffic
            + min(100.0, weather_impact * 10) * w.weather
        )

    def compute(
        self,
        outcome: SolveOutcome,
        edges: Sequence[Edge],
        *,
        vehicle: Vehicle,
        weather: Weather,
        time_of_day: TimeOfDay,
        map_context: MapContext,
    ) -> Metrics:
        if not outcome.feasible:
            return Metrics.zero()
        distance, time = outcome.distance, outcome.time
        fuel = self.fuel(vehicle, distance, weather, time_of_day)
        cost = self.cost(vehicle, distance, time, weather)
        traffic = self.traffic_impact(edges, time_of_day)
        weather_impact = self.weather_impact(weather, map_context)
        return Metrics(
            time=time,
            distance=distance,
            cost=cost,
            fuel=fuel,
            traffic_impact=traffic,
            weather_impact=weather_impact,
            total_score=self.total_score(time, distance, cost, fuel, traffic, weather_impact),
        )

    def rescore(self, metrics: Metrics, traffic_impact: float, weather_impact: float) -> Metrics:
        """Swap in new impact values and recompute the score to match."""
        traffic, weather = clamp(traffic_impact), clamp(weather_impact)
        score = self.total_score(
            metrics.time, metrics.distance, metrics.cost, metrics.fuel, traffic, weather
        )
        return replace(metrics, traffic_impact=traffic, weather_impact=weather, total_score=score)
