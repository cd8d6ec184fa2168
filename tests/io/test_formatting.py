import pytest

from route_sim.domain.entities.conditions import Algorithm, Vehicle
from route_sim.domain.entities.results import Metrics, SimulationResult
from route_sim.io.formatting import (
    format_cost,
    format_distance,
    format_fuel,
    format_time,
    impact_label,
    summarize,
)


@pytest.mark.parametrize(
    "seconds, text",
    [(0, "-"), (42, "42s"), (90, "1m 30s"), (3725, "1h 2m 5s"), (7200, "2h 0m 0s")],
)
def test_format_time(seconds, text):
    assert format_time(seconds) == text


@pytest.mark.parametrize(
    "meters, text", [(0, "-"), (950.4, "950 m"), (12.5, "13 m"), (1000, "1.00 km"), (8400.5, "8.40 km")]
)
def test_format_distance(meters, text):
    assert format_distance(meters) == text


def test_format_fuel_by_vehicle():
    assert format_fuel(0, Vehicle.CAR) == "-"
    assert format_fuel(1.234, Vehicle.TRUCK) == "1.23 L"
    assert format_fuel(2, "ev") == "2.00 kWh"
    assert format_fuel(0.5, Vehicle.BIKE) == "Human powered"


def test_format_cost():
    assert format_cost(0) == "-"
    assert format_cost(7.25) == "$7.25"


@pytest.mark.parametrize(
    "score, label", [(0, "Low impact"), (2, "Low impact"), (4.5, "Medium impact"),
                     (8, "High impact"), (9.6, "Severe impact")]
)
def test_impact_label(score, label):
    assert impact_label(score) == label


def test_summarize():
    result = SimulationResult(
        Algorithm.DIJKSTRA,
        ("A", "C"),
        Metrics(time=30, distance=15, cost=1.25, fuel=0.0012, traffic_impact=3.0,
                weather_impact=6.0, total_score=12.345),
    )
    s = summarize(result, Vehicle.CAR)
    assert s["route"] == "A -> C"
    assert s["time"] == "30s" and s["distance"] == "15 m"
    assert s["traffic"] == "3.0/10 (Medium impact)"
    assert s["weather"] == "6.0/10 (High impact)"
    assert s["score"] == "12.3"


def test_summarize_infeasible():
    s = summarize(SimulationResult(Algorithm.BRUTE_FORCE, (), Metrics.zero()), "car")
    assert s["route"] == s["time"] == s["distance"] == "-"
