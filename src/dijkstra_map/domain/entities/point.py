from dataclasses import dataclass
from enum import Enum

import numpy as np


class DefaultTerrain(Enum):
    DEFAULT = "default"

    def __repr__(self) -> str:
        return "DEFAULT_TERRAIN"


# Always weighs 1.0, whatever the terrain table says
DEFAULT_TERRAIN = DefaultTerrain.DEFAULT

TerrainType = int | DefaultTerrain

# Direction sentinel for points without a path
NO_PATH = None


def is_point_id(x) -> bool:
    return isinstance(x, (int, np.integer)) and not isinstance(x, (bool, np.bool_))


def as_terrain(value: "TerrainType | None") -> TerrainType:
    """Normalize a caller-supplied terrain. ``None`` and ``-1`` mean default."""
    if value is None or value is DEFAULT_TERRAIN:
        return DEFAULT_TERRAIN
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"terrain must be an int or DEFAULT_TERRAIN, got {value!r}")
    return DEFAULT_TERRAIN if value == -1 else int(value)


@dataclass
class Point:
    id: int
    terrain: TerrainType = DEFAULT_TERRAIN
    enabled: bool = True


@dataclass(frozen=True)
class PointInfo:
    cost: float
    direction: int  # equals the point's own id at an origin


@dataclass(frozen=True)
class Rect:
    """Integer cell bounds for the grid generators."""

    x: int
    y: int
    width: int
    height: int

    @classmethod
    def of(cls, bounds: "Rect | tuple[int, int, int, int]") -> "Rect":
        if isinstance(bounds, Rect):
            return bounds
        x, y, w, h = bounds
        return cls(int(x), int(y), int(w), int(h))

    def cells(self):
        # row-major, so ids come out in reading order
        for y in range(self.y, self.y + self.height):
            for x in range(self.x, self.x + self.width):
                yield x, y
