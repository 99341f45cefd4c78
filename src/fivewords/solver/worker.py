"""Main module for the search itself and for worker tasks in the parallel solver."""

import os
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TypeAlias

import numpy as np

from fivewords.candidate_set import CandidateSet
from fivewords.solver.scratch import ScratchBuffer

Solution: TypeAlias = tuple[int, int, int, int, int]
"""Indices of five words with pairwise disjoint letters, strictly decreasing."""


def solve_with_first_word(
    i: int,
    masks: Sequence[int],
    masks_np: np.ndarray,
    scratch: ScratchBuffer,
    out: list[Solution],
) -> int:
    """Find every solution whose highest word index is `i`.

    Slot 2 is chosen among indices below `i` (filtered with numpy), slot 3 onwards among
    indices below slot 2.  Every emitted tuple is strictly decreasing, so with unique masks
    each combination of five words is found exactly once.

    Args:
        i: Index of the first word.
        masks: Letter masks as Python ints.
        masks_np: The same masks as a numpy array.
        scratch: The calling worker's scratch buffer.
        out: List to append solutions to.

    Returns:
        The number of solutions appended.
    """
    mask1 = masks[i]
    # Slot-2 candidates: everything below i that is disjoint from word i, ascending
    second = np.flatnonzero((masks_np[:i] & mask1) == 0).tolist()
    if len(second) < 4:
        return 0
    second_masks = [masks[j] for j in second]

    n_found = 0
    # Need at least three candidates below the second word
    for pos in range(len(second) - 1, 2, -1):
        used = mask1 | second_masks[pos]
        # Slot-3 candidates are also below i and disjoint from word i, so the
        # slot-2 list already contains all of them
        count = scratch.fill(second, second_masks, pos, used)
        if count >= 3:
            n_found += find_solutions(i, second[pos], scratch, count, out)
    return n_found


def find_solutions(
    first: int,
    second: int,
    scratch: ScratchBuffer,
    count: int,
    out: list[Solution],
) -> int:
    """Choose the last three words from the scratch buffer.

    Every buffered word is already disjoint from the first two, so only the three
    buffered masks need checking against each other.
    """
    idx = scratch.indices
    msk = scratch.masks
    n_found = 0
    for c in range(count - 1, 1, -1):
        mask3 = msk[c]
        for d in range(c - 1, 0, -1):
            mask4 = msk[d]
            if mask3 & mask4:
                continue
            used = mask3 | mask4
            for e in range(d - 1, -1, -1):
                if not used & msk[e]:
                    out.append((first, second, idx[c], idx[d], idx[e]))
                    n_found += 1
    return n_found


def search_first_words(
    first_indices: Iterable[int],
    masks: Sequence[int],
    masks_np: np.ndarray,
    scratch: ScratchBuffer,
) -> list[Solution]:
    """Run the search for a batch of first-word indices, collecting results locally."""
    found: list[Solution] = []
    for i in first_indices:
        solve_with_first_word(i, masks, masks_np, scratch, found)
    return found


@dataclass(kw_only=True)
class WorkerState:
    """Global state maintained by each worker process."""

    worker_pid: int
    """Process ID of the worker."""

    masks: list[int]
    """Read-only letter masks of the candidate set, as Python ints."""

    masks_np: np.ndarray
    """The same masks as a numpy array."""

    scratch: ScratchBuffer
    """Scratch buffer owned by this worker alone, reused across tasks."""

    n_tasks: int = 0
    """Number of tasks run by this worker."""


worker_state: WorkerState | None = None
"""Global state for each worker process."""


def init_worker_globals(candidates: dict, scratch_capacity: int, grow_scratch: bool) -> None:
    """Initialize global variables for worker processes.

    Args:
        candidates (dict): Dict representation of the CandidateSet.
        scratch_capacity (int): Initial capacity of the worker's scratch buffer.
        grow_scratch (bool): Whether the scratch buffer may grow when full.
    """
    global worker_state  # noqa: PLW0603
    candidate_set = CandidateSet.from_dict(candidates)
    worker_state = WorkerState(
        worker_pid=os.getpid(),
        masks=candidate_set.masks.tolist(),
        masks_np=candidate_set.masks,
        scratch=ScratchBuffer(scratch_capacity, grow=grow_scratch),
    )


def worker_task(first_indices: list[int]) -> list[Solution]:
    """Worker task: search all solutions whose first word is one of `first_indices`.

    Returns:
        The solutions found, in discovery order.
    """
    # Ensure worker_state is initialized
    if not worker_state:
        raise RuntimeError("Worker state not initialized. Call init_worker_globals first.")

    worker_state.n_tasks += 1
    return search_first_words(
        first_indices, worker_state.masks, worker_state.masks_np, worker_state.scratch
    )
