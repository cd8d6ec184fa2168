import pytest

from route_sim.app.catalog import algorithms_for, describe
from route_sim.domain.entities.conditions import Algorithm, Mode


@pytest.mark.parametrize("alg", list(Algorithm), ids=lambda a: a.value)
def test_every_algorithm_is_described(alg):
    info = describe(alg)
    assert info.name and info.description
    assert info.time_complexity.startswith("O(")
    assert info.pros and info.cons


def test_describe_accepts_wire_names():
    assert describe("bellman-ford") is describe(Algorithm.BELLMAN_FORD)
    with pytest.raises(ValueError):
        describe("genetic")


def test_only_nearest_neighbor_is_inexact():
    assert [a for a in Algorithm if not describe(a).exact] == [Algorithm.NEAREST_NEIGHBOR]


def test_algorithms_by_mode():
    assert algorithms_for(Mode.POINT_TO_POINT) == [
        Algorithm.DIJKSTRA,
        Algorithm.ASTAR,
        Algorithm.BELLMAN_FORD,
        Algorithm.FLOYD_WARSHALL,
    ]
    tours = algorithms_for(Mode.TOUR)
    assert len(tours) == 4 and all(a.is_tour for a in tours)
