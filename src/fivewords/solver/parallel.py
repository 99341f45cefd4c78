"""Implementation of the parallel solver: task distribution and result merging."""

from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import TextIO

from fivewords.solver.collector import ResultCollector
from fivewords.solver.worker import worker_task
from fivewords.util import int_comma


def split_first_indices(n_words: int, n_tasks: int) -> list[list[int]]:
    """Split the first-word indices into interleaved batches.

    A first word with a high index has many more words below it to combine with, so
    striding (rather than cutting contiguous ranges) gives batches of similar cost.  High
    indices come first in each batch.

    Args:
        n_words: Number of candidate words.
        n_tasks: Desired number of batches.

    Returns:
        Up to `n_tasks` non-empty batches covering 0..n_words-1 exactly once.
    """
    n_tasks = max(1, min(n_tasks, n_words))
    ordered = range(n_words - 1, -1, -1)
    return [list(ordered[k::n_tasks]) for k in range(n_tasks) if ordered[k::n_tasks]]


def search_parallel(
    executor: ProcessPoolExecutor,
    n_words: int,
    collector: ResultCollector,
    *,
    n_tasks: int,
    logf: TextIO | None = None,
) -> None:
    """Search all first words on the executor's workers, merging results into `collector`.

    The executor's workers must have been initialized with the candidate set (see
    `init_worker_globals`).  Returns only once every task has completed.  If a task fails,
    outstanding tasks are cancelled and the error is re-raised.

    Args:
        executor (ProcessPoolExecutor): Executor for managing worker processes.
        n_words (int): Number of candidate words.
        collector (ResultCollector): Receives each task's solutions.
        n_tasks (int): Number of batches to split the first-word indices into.
        logf: Optional stream for progress messages.
    """
    batches = split_first_indices(n_words, n_tasks)
    if logf is not None:
        print(f"Submitting {len(batches)} tasks...", file=logf, flush=True)

    futures = [executor.submit(worker_task, batch) for batch in batches]
    n_done = 0
    try:
        for future in as_completed(futures):
            result = future.result()
            collector.extend(result)
            n_done += 1
            if logf is not None:
                print(
                    f"Task {n_done}/{len(batches)} done: {int_comma(len(result))} solutions "
                    f"({int_comma(len(collector))} total)",
                    file=logf,
                    flush=True,
                )
    except BaseException:
        for future in futures:
            future.cancel()
        raise
