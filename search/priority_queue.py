from __future__ import annotations
import heapq
from typing import Any, List, Tuple

class PriorityQueue:
    """Min-heap; equal priorities pop in insertion order."""
    def __init__(self) -> None:
        self._h: List[Tuple[float, int, Any]] = []
        self._tiebreak = 0

    def push(self, priority: float, item: Any) -> None:
        self._tiebreak += 1
        heapq.heappush(self._h, (priority, self._tiebreak, item))

    def pop(self) -> Any:
        return heapq.heappop(self._h)[2]

    def trim(self, keep: int) -> None:
        """Drops everything but the `keep` best entries."""
        if len(self._h) <= keep:
            return
        self._h = heapq.nsmallest(keep, self._h)
        heapq.heapify(self._h)

    def __len__(self) -> int:
        return len(self._h)
