# route_sim/domain/entities/conditions.py
from enum import Enum


class Mode(Enum):
    POINT_TO_POINT = "point_to_point"
    TOUR = "tour"


class Algorithm(str, Enum):
    DIJKSTRA = "dijkstra"
    ASTAR = "astar"
    BELLMAN_FORD = "bellman-ford"
    FLOYD_WARSHALL = "floyd-warshall"
    BRUTE_FORCE = "brute-force"
    DYNAMIC_PROGRAMMING = "dynamic-programming"
    NEAREST_NEIGHBOR = "nearest-neighbor"
    BRANCH_AND_BOUND = "branch-and-bound"

    @property
    def mode(self) -> Mode:
        return _MODES[self]

    @property
    def is_tour(self) -> bool:
        return self.mode is Mode.TOUR


_MODES = {
    Algorithm.DIJKSTRA: Mode.POINT_TO_POINT,
    Algorithm.ASTAR: Mode.POINT_TO_POINT,
    Algorithm.BELLMAN_FORD: Mode.POINT_TO_POINT,
    Algorithm.FLOYD_WARSHALL: Mode.POINT_TO_POINT,
    Algorithm.BRUTE_FORCE: Mode.TOUR,
    Algorithm.DYNAMIC_PROGRAMMING: Mode.TOUR,
    Algorithm.NEAREST_NEIGHBOR: Mode.TOUR,
    Algorithm.BRANCH_AND_BOUND: Mode.TOUR,
}


# Opaque to the solvers; only the metrics tables key on these.
class Vehicle(str, Enum):
    CAR = "car"
    BIKE = "bike"
    TRUCK = "truck"
    AMBULANCE = "ambulance"
    BUS = "bus"
    EV = "ev"


class Weather(str, Enum):
    SUNNY = "sunny"
    RAINY = "rainy"
    FOGGY = "foggy"
    SNOWY = "snowy"
    WINDY = "windy"


class TimeOfDay(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"


class MapContext(str, Enum):
    KARNATAKA = "karnataka"
    BENGALURU = "bengaluru"
    MYSURU = "mysuru"
    CITY = "city"
    RURAL = "rural"
    MOUNTAIN = "mountain"
