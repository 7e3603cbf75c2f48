# dijkstra_map/domain/errors.py


class DijkstraMapError(Exception):
    """Base class for every failure raised by a mutating operation."""


class UnknownPoint(DijkstraMapError, KeyError):
    def __init__(self, point_id: int):
        super().__init__(point_id)
        self.point_id = point_id

    def __str__(self) -> str:
        return f"unknown point {self.point_id}"


class IdCollision(DijkstraMapError, ValueError):
    def __init__(self, point_id: int):
        super().__init__(point_id)
        self.point_id = point_id

    def __str__(self) -> str:
        return f"point {self.point_id} already exists"


class InvalidParameter(DijkstraMapError, ValueError):
    """A recalculation option, weight or grid bound was malformed."""
