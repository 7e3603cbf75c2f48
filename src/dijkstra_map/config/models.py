import math
from typing import Annotated, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

from dijkstra_map.domain.entities.point import DEFAULT_TERRAIN, Rect


def _terrain_id(v):
    # -1 and None are the default terrain; the store normalizes them
    if v is None or v is DEFAULT_TERRAIN:
        return -1
    return v


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


# ----------------- RECALCULATION ---------------------


class RecalculateOptions(BaseModel):
    """Everything `recalculate` accepts besides the origins."""

    model_config = ConfigDict(extra="forbid")

    input_is_destination: bool = True
    maximum_cost: float = math.inf
    initial_costs: list[float] = Field(default_factory=list)
    terrain_weights: dict[int, float] = Field(default_factory=dict)
    termination_points: frozenset[int] = frozenset()

    @field_validator("maximum_cost")
    @classmethod
    def _max_cost(cls, v: float) -> float:
        if math.isnan(v) or v < 0:
            raise ValueError("maximum_cost must be >= 0")
        return v

    @field_validator("initial_costs")
    @classmethod
    def _initial_costs(cls, v: list[float]) -> list[float]:
        bad = [i for i, c in enumerate(v) if not math.isfinite(c) or c < 0]
        if bad:
            raise ValueError(f"initial_costs must be finite and >= 0; bad indices: {bad}")
        return v

    @field_validator("terrain_weights", mode="before")
    @classmethod
    def _drop_default(cls, v):
        # default terrain always weighs 1.0, so entries for it are ignored
        if isinstance(v, dict):
            return {k: w for k, w in v.items() if _terrain_id(k) != -1}
        return v

    @field_validator("terrain_weights")
    @classmethod
    def _nonneg_weights(cls, v: dict[int, float]) -> dict[int, float]:
        bad = sorted(t for t, w in v.items() if w < 0)
        if bad:
            raise ValueError(f"terrain weights must be >= 0; bad terrains: {bad}")
        return v

    @field_validator("termination_points", mode="before")
    @classmethod
    def _single_point(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            return frozenset([v])
        return v

    def initial_cost(self, index: int) -> float:
        return self.initial_costs[index] if index < len(self.initial_costs) else 0.0


# ----------------- GRIDS ---------------------


class _GridBase(BaseModel):
    model_config = ConfigDict(extra="forbid")
    bounds: tuple[int, int, int, int]  # x, y, width, height
    terrain: int = -1

    @field_validator("bounds")
    @classmethod
    def _size(cls, v: tuple[int, int, int, int]) -> tuple[int, int, int, int]:
        if v[2] < 0 or v[3] < 0:
            raise ValueError("grid width and height must be >= 0")
        return v

    @field_validator("terrain", mode="before")
    @classmethod
    def _terrain(cls, v):
        return _terrain_id(v)

    @property
    def rect(self) -> Rect:
        return Rect.of(self.bounds)


class SquareGridModel(_GridBase):
    kind: Literal["square"] = "square"
    orthogonal_cost: float = 1.0
    diagonal_cost: float = math.inf

    @field_validator("orthogonal_cost", "diagonal_cost")
    @classmethod
    def _nonneg(cls, v: float, info: ValidationInfo) -> float:
        if v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v


class HexagonalGridModel(_GridBase):
    kind: Literal["hexagonal"] = "hexagonal"
    weight: float = 1.0

    @field_validator("weight")
    @classmethod
    def _nonneg(cls, v: float) -> float:
        if v < 0:
            raise ValueError("weight must be >= 0")
        return v


GridUnion = Annotated[SquareGridModel | HexagonalGridModel, Field(discriminator="kind")]


# ----------------- EXPLICIT GRAPH ---------------------


class PointModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    id: int
    terrain: int = -1

    @field_validator("terrain", mode="before")
    @classmethod
    def _terrain(cls, v):
        return _terrain_id(v)


class ConnectionModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    source: int
    target: int
    weight: float = 1.0
    bidirectional: bool = True

    @field_validator("weight")
    @classmethod
    def _finite(cls, v: float) -> float:
        if not math.isfinite(v) or v < 0:
            raise ValueError("weight must be finite and >= 0")
        return v


# ------------------------------------------------------------------


class MapModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "map"
    log: LogModel = LogModel()
    grids: list[GridUnion] = Field(default_factory=list)
    points: list[PointModel] = Field(default_factory=list)
    connections: list[ConnectionModel] = Field(default_factory=list)
    disabled: list[int] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_points(self):
        ids = [p.id for p in self.points]
        dupes = sorted({i for i in ids if ids.count(i) > 1})
        if dupes:
            raise ValueError(f"duplicate point ids: {dupes}")
        return self
