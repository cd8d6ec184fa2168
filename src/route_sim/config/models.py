from math import isfinite
from typing import Annotated, Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

from route_sim.domain.entities.conditions import (
    Algorithm,
    MapContext,
    TimeOfDay,
    Vehicle,
    Weather,
)


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


class LimitsModel(BaseModel):
    """Node ceilings for the exponential tour solvers (None disables the check)."""

    model_config = ConfigDict(extra="forbid")
    brute_force: int | None = 10
    dynamic_programming: int | None = 16
    branch_and_bound: int | None = 12

    @field_validator("brute_force", "dynamic_programming", "branch_and_bound")
    @classmethod
    def _positive(cls, v: int | None, info: ValidationInfo) -> int | None:
        if v is not None and v < 1:
            raise ValueError(f"{info.field_name} must be >= 1")
        return v

    def for_algorithm(self, algorithm: Algorithm) -> int | None:
        return {
            Algorithm.BRUTE_FORCE: self.brute_force,
            Algorithm.DYNAMIC_PROGRAMMING: self.dynamic_programming,
            Algorithm.BRANCH_AND_BOUND: self.branch_and_bound,
        }.get(algorithm)


# ----------------- IMPACT JITTER ---------------------


class JitterNoneModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["none"] = "none"


class JitterUniformModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["uniform"] = "uniform"
    traffic_amplitude: float = 1.5
    weather_amplitude: float = 1.0

    @field_validator("traffic_amplitude", "weather_amplitude")
    def _nonneg(cls, v: float, info: ValidationInfo) -> float:
        if v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v


JitterUnion = Annotated[JitterNoneModel | JitterUniformModel, Field(discriminator="kind")]


# ----------------- METRICS TABLES ---------------------


class ScoreWeightsModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    time: float = 0.3
    distance: float = 0.25
    cost: float = 0.15
    fuel: float = 0.1
    traffic: float = 0.1
    weather: float = 0.1

    @model_validator(mode="after")
    def _sum_to_one(self):
        total = self.time + self.distance + self.cost + self.fuel + self.traffic + self.weather
        if abs(total - 1.0) > 1e-9:
            raise ValueError(f"score weights must sum to 1, got {total}")
        return self


class MetricsTablesModel(BaseModel):
    """Static lookup data for the metrics formulas; every enum member must be present."""

    model_config = ConfigDict(extra="forbid")

    # fuel per km: liters, kWh for ev, bikes are human powered
    base_rate: dict[Vehicle, float] = Field(
        default_factory=lambda: {
            Vehicle.CAR: 0.08,
            Vehicle.BIKE: 0.0,
            Vehicle.TRUCK: 0.25,
            Vehicle.AMBULANCE: 0.15,
            Vehicle.BUS: 0.28,
            Vehicle.EV: 0.2,
        }
    )
    weather_multiplier: dict[Weather, float] = Field(
        default_factory=lambda: {
            Weather.SUNNY: 1.0,
            Weather.RAINY: 1.12,
            Weather.FOGGY: 1.05,
            Weather.SNOWY: 1.25,
            Weather.WINDY: 1.08,
        }
    )
    fuel_time_multiplier: dict[TimeOfDay, float] = Field(
        default_factory=lambda: {
            TimeOfDay.MORNING: 1.1,
            TimeOfDay.AFTERNOON: 1.0,
            TimeOfDay.EVENING: 1.15,
            TimeOfDay.NIGHT: 0.9,
        }
    )
    base_cost_per_km: dict[Vehicle, float] = Field(
        default_factory=lambda: {
            Vehicle.CAR: 0.15,
            Vehicle.BIKE: 0.02,
            Vehicle.TRUCK: 0.4,
            Vehicle.AMBULANCE: 0.5,
            Vehicle.BUS: 0.3,
            Vehicle.EV: 0.1,
        }
    )
    time_cost_per_minute: float = 0.5
    weather_surcharge: dict[Weather, float] = Field(
        default_factory=lambda: {
            Weather.SUNNY: 0.0,
            Weather.RAINY: 1.5,
            Weather.FOGGY: 1.0,
            Weather.SNOWY: 3.0,
            Weather.WINDY: 0.8,
        }
    )
    traffic_time_multiplier: dict[TimeOfDay, float] = Field(
        default_factory=lambda: {
            TimeOfDay.MORNING: 1.5,
            TimeOfDay.AFTERNOON: 1.0,
            TimeOfDay.EVENING: 1.4,
            TimeOfDay.NIGHT: 0.6,
        }
    )
    weather_severity: dict[Weather, float] = Field(
        default_factory=lambda: {
            Weather.SUNNY: 1.0,
            Weather.RAINY: 5.0,
            Weather.FOGGY: 6.0,
            Weather.SNOWY: 8.0,
            Weather.WINDY: 4.0,
        }
    )
    infrastructure_modifier: dict[MapContext, float] = Field(
        default_factory=lambda: {
            MapContext.BENGALURU: 0.9,
            MapContext.KARNATAKA: 1.2,
            MapContext.MYSURU: 1.0,
            MapContext.CITY: 0.9,
            MapContext.RURAL: 1.2,
            MapContext.MOUNTAIN: 1.3,
        }
    )
    weights: ScoreWeightsModel = Field(default_factory=ScoreWeightsModel)

    @model_validator(mode="after")
    def _complete(self):
        for name, enum in (
            ("base_rate", Vehicle),
            ("base_cost_per_km", Vehicle),
            ("weather_multiplier", Weather),
            ("weather_surcharge", Weather),
            ("weather_severity", Weather),
            ("fuel_time_multiplier", TimeOfDay),
            ("traffic_time_multiplier", TimeOfDay),
            ("infrastructure_modifier", MapContext),
        ):
            missing = [m.value for m in enum if m not in getattr(self, name)]
            if missing:
                raise ValueError(f"{name} is missing entries for {missing}")
        return self


# ----------------- REQUEST / GRAPH PAYLOAD ---------------------


class SimulationParams(BaseModel):
    """One solve request. camelCase keys from UI producers are accepted too."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    algorithm: Algorithm
    start_location: str = Field(validation_alias=AliasChoices("start_location", "startLocation"))
    end_location: str | None = Field(
        default=None, validation_alias=AliasChoices("end_location", "endLocation")
    )
    vehicle: Vehicle = Vehicle.CAR
    weather: Weather = Weather.SUNNY
    time_of_day: TimeOfDay = Field(
        default=TimeOfDay.AFTERNOON, validation_alias=AliasChoices("time_of_day", "timeOfDay")
    )
    map_context: MapContext = Field(
        default=MapContext.CITY,
        validation_alias=AliasChoices("map_context", "mapContext", "mapType"),
    )


class NodePayloadModel(BaseModel):
    model_config = ConfigDict(extra="ignore")
    lat: float
    lng: float


class EdgePayloadModel(BaseModel):
    model_config = ConfigDict(extra="ignore")
    source: str = Field(validation_alias=AliasChoices("source", "from"))
    target: str = Field(validation_alias=AliasChoices("target", "to"))
    distance: float
    time: float
    traffic_factor: float = Field(
        default=1.0, validation_alias=AliasChoices("traffic_factor", "trafficFactor")
    )

    @field_validator("distance", "time", "traffic_factor")
    def _finite(cls, v: float, info: ValidationInfo) -> float:
        if not isfinite(v):
            raise ValueError(f"{info.field_name} must be finite")
        return v


class GraphPayloadModel(BaseModel):
    model_config = ConfigDict(extra="ignore")
    nodes: dict[str, NodePayloadModel]
    edges: list[EdgePayloadModel] = Field(default_factory=list)


# ------------------------------------------------------------------


class ScenarioModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str
    run_id: str
    seed: int = 0
    log: LogModel = LogModel()
    limits: LimitsModel = LimitsModel()
    jitter: JitterUnion = Field(default_factory=JitterNoneModel)
    tables: MetricsTablesModel = Field(default_factory=MetricsTablesModel)
