"""Accumulation of solutions found by the search workers."""

from collections.abc import Iterable
from threading import Lock

from sortedcontainers import SortedList

from fivewords.solver.worker import Solution


class ResultCollector:
    """Collects solutions from any number of workers.

    Workers keep their own lists and hand them over in batches with `extend`, so the lock
    is taken once per batch rather than once per solution.  Nothing is ever removed or
    deduplicated: the search guarantees each solution is reported once.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._solutions: SortedList = SortedList()
        self._drained = False

    def add(self, solution: Solution) -> None:
        """Record one solution."""
        with self._lock:
            self._check_open()
            self._solutions.add(solution)

    def extend(self, solutions: Iterable[Solution]) -> None:
        """Record a batch of solutions, such as one worker's local results."""
        with self._lock:
            self._check_open()
            self._solutions.update(solutions)

    def drain(self) -> list[Solution]:
        """Freeze the collector and return every solution, in sorted order.

        Call only after all workers have finished.
        """
        with self._lock:
            self._drained = True
            return list(self._solutions)

    def __len__(self) -> int:
        return len(self._solutions)

    def _check_open(self) -> None:
        if self._drained:
            raise RuntimeError("Cannot add solutions after the collector has been drained.")
