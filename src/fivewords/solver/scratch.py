"""Reusable per-worker storage for slot-3 candidates."""

from array import array
from collections.abc import Sequence

from fivewords.errors import ScratchCapacityError


class ScratchBuffer:
    """Candidate (index, mask) pairs for the last three word slots.

    Each worker owns one buffer and refills it for every pair of first and second words,
    so the inner search loops never allocate.  Only the first `count` entries are valid.
    """

    def __init__(self, capacity: int, *, grow: bool = True) -> None:
        if capacity < 1:
            raise ValueError(f"Scratch capacity must be positive, got {capacity}")
        self.indices = array("I", [0]) * capacity
        self.masks = array("I", [0]) * capacity
        self.count = 0
        self.grow = grow
        self.high_water = 0
        """Largest count seen since creation."""

    @property
    def capacity(self) -> int:
        return len(self.indices)

    def _reserve(self, required: int) -> None:
        if not self.grow:
            raise ScratchCapacityError(required, self.capacity)
        new_capacity = self.capacity
        while new_capacity < required:
            new_capacity *= 2
        extra = array("I", [0]) * (new_capacity - self.capacity)
        self.indices.extend(extra)
        self.masks.extend(extra)

    def fill(self, indices: Sequence[int], masks: Sequence[int], limit: int, used: int) -> int:
        """Load the entries among the first `limit` whose mask is disjoint from `used`.

        Args:
            indices: Candidate word indices.
            masks: Letter masks aligned with `indices`.
            limit: Number of leading entries to scan.
            used: Mask of letters already taken.

        Returns:
            The number of entries loaded, also stored in `count`.

        Raises:
            ScratchCapacityError: If more entries qualify than fit and growing is disabled.
        """
        buf_idx = self.indices
        buf_mask = self.masks
        capacity = len(buf_idx)
        n = 0
        for pos in range(limit):
            mask = masks[pos]
            if not mask & used:
                if n == capacity:
                    # Count the rest so a single resize suffices
                    required = n + sum(1 for m in masks[pos:limit] if not m & used)
                    self._reserve(required)
                    capacity = len(buf_idx)
                buf_idx[n] = indices[pos]
                buf_mask[n] = mask
                n += 1
        self.count = n
        if n > self.high_water:
            self.high_water = n
        return n
