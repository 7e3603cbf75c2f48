# search/frontier.py

import heapq


class Frontier:
    """
    Min-heap of (cost, seq, point). No decrease-key: improving a point pushes
    a second entry and the stale one is skipped by the caller on pop.
    `seq` keeps equal costs in push order, so runs are deterministic.
    """

    def __init__(self):
        self._q: list[tuple[float, int, int]] = []
        self._seq = 0

    def __len__(self) -> int:
        return len(self._q)

    def __bool__(self) -> bool:
        return bool(self._q)

    def push(self, cost: float, point_id: int) -> None:
        self._seq += 1
        heapq.heappush(self._q, (cost, self._seq, point_id))

    def pop(self) -> tuple[float, int]:
        cost, _, point_id = heapq.heappop(self._q)
        return cost, point_id

    @property
    def pushed(self) -> int:
        return self._seq
