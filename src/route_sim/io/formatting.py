# route_sim/io/formatting.py
import math

from route_sim.domain.entities.conditions import Vehicle
from route_sim.domain.entities.results import SimulationResult


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def format_time(seconds: float) -> str:
    if seconds == 0:
        return "-"
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    rest = _round_half_up(seconds % 60)
    if hours > 0:
        return f"{hours}h {minutes}m {rest}s"
    if minutes > 0:
        return f"{minutes}m {rest}s"
    return f"{rest}s"


def format_distance(meters: float) -> str:
    if meters == 0:
        return "-"
    if meters >= 1000:
        return f"{meters / 1000:.2f} km"
    return f"{_round_half_up(meters)} m"


def format_fuel(amount: float, vehicle: Vehicle | str) -> str:
    if amount == 0:
        return "-"
    vehicle = Vehicle(vehicle)
    if vehicle is Vehicle.EV:
        return f"{amount:.2f} kWh"
    if vehicle is Vehicle.BIKE:
        return "Human powered"
    return f"{amount:.2f} L"


def format_cost(cost: float) -> str:
    if cost == 0:
        return "-"
    return f"${cost:.2f}"


def impact_label(score: float) -> str:
    if score <= 2:
        return "Low impact"
    if score <= 5:
        return "Medium impact"
    if score <= 8:
        return "High impact"
    return "Severe impact"


def summarize(result: SimulationResult, vehicle: Vehicle | str) -> dict[str, str]:
    m = result.metrics
    return {
        "algorithm": result.algorithm.value,
        "route": " -> ".join(result.path) if result.path else "-",
        "time": format_time(m.time),
        "distance": format_distance(m.distance),
        "cost": format_cost(m.cost),
        "fuel": format_fuel(m.fuel, vehicle),
        "traffic": f"{m.traffic_impact:.1f}/10 ({impact_label(m.traffic_impact)})",
        "weather": f"{m.weather_impact:.1f}/10 ({impact_label(m.weather_impact)})",
        "score": f"{m.total_score:.1f}",
    }
