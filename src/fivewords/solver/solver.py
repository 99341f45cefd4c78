"""Main solver module: candidate preparation, search dispatch and run reporting."""

import os
import sys
from collections.abc import Iterable
from concurrent.futures import ProcessPoolExecutor
from contextlib import ExitStack
from datetime import datetime
from pathlib import Path
from time import time
from typing import TextIO

from fivewords.candidate_set import CandidateSet
from fivewords.letters import mask_letters
from fivewords.solver.collector import ResultCollector
from fivewords.solver.config import N_SLOTS, SolverConfig
from fivewords.solver.config import config as default_config
from fivewords.solver.parallel import search_parallel
from fivewords.solver.scratch import ScratchBuffer
from fivewords.solver.worker import Solution, init_worker_globals, search_first_words
from fivewords.util import elapsed_str, int_comma
from fivewords.wordlist import load_word_list, order_by_entropy, prepare

TIMESTAMP_FMT = "%Y-%m-%d %H:%M:%S.%f %Z%z"


def resolve_n_workers(n_workers: int | None) -> int:
    """Return the number of worker processes to start.

    Args:
        n_workers (int | None): Requested number of workers.  If None, defaults to the
            number of CPU cores minus one.
    """
    cpus = os.cpu_count() or 1  # Fallback to 1 if os.cpu_count() is None
    if n_workers is None:
        return max(1, cpus - 1)  # Leave one core free
    if n_workers < 1:
        raise ValueError(f"Number of workers must be positive, got {n_workers}")
    if n_workers > cpus:
        raise ValueError(
            f"Requested number of workers ({n_workers}) exceeds CPU count ({cpus})",
        )
    return n_workers


def get_executor(
    *,
    n_workers: int,
    candidates: CandidateSet,
    solver_config: SolverConfig,
) -> ProcessPoolExecutor:
    """Get a ProcessPoolExecutor whose workers hold the candidate set.

    Args:
        n_workers (int): Number of worker processes to create.
        candidates (CandidateSet): The read-only candidate set shared by all workers.
        solver_config (SolverConfig): Supplies the scratch buffer settings.

    Returns:
        A ProcessPoolExecutor instance for worker processes.
    """
    return ProcessPoolExecutor(
        max_workers=n_workers,
        initializer=init_worker_globals,
        initargs=(
            candidates.to_dict(),
            solver_config.scratch_capacity,
            solver_config.grow_scratch,
        ),
    )


def prepare_candidates(
    raw_words: Iterable[str], solver_config: SolverConfig = default_config
) -> CandidateSet:
    """Prepare and, if configured, reorder the candidate words."""
    candidates = prepare(
        raw_words,
        solver_config.blocklist,
        word_length=solver_config.word_length,
        alphabet_size=solver_config.alphabet_size,
    )
    if solver_config.order_by_frequency:
        candidates = order_by_entropy(candidates)
    return candidates


def search(
    candidates: CandidateSet,
    solver_config: SolverConfig = default_config,
    *,
    logf: TextIO | None = None,
) -> list[Solution]:
    """Find every set of five candidates with pairwise disjoint letters.

    The set of solutions does not depend on the number of workers; only the order in which
    they are found does, and the returned list is sorted.

    Args:
        candidates (CandidateSet): The prepared candidates.
        solver_config (SolverConfig): Parallelism and scratch buffer settings.
        logf: Optional stream for progress messages.

    Returns:
        Solutions as strictly decreasing tuples of word indices, sorted.
    """
    collector = ResultCollector()
    n_words = len(candidates)
    if n_words < N_SLOTS:
        return collector.drain()

    if not solver_config.parallel:
        scratch = ScratchBuffer(solver_config.scratch_capacity, grow=solver_config.grow_scratch)
        collector.extend(
            search_first_words(
                range(n_words - 1, -1, -1),
                candidates.masks.tolist(),
                candidates.masks,
                scratch,
            )
        )
        if logf is not None:
            print(f"Scratch buffer high water: {scratch.high_water}", file=logf, flush=True)
        return collector.drain()

    n_workers = resolve_n_workers(solver_config.max_workers)
    if logf is not None:
        print(f"Using {n_workers} worker processes", file=logf, flush=True)
    with get_executor(
        n_workers=n_workers,
        candidates=candidates,
        solver_config=solver_config,
    ) as executor:
        try:
            search_parallel(
                executor,
                n_words,
                collector,
                n_tasks=n_workers * solver_config.tasks_per_worker,
                logf=logf,
            )
        except BaseException:
            executor.shutdown(wait=False, cancel_futures=True)
            raise
    return collector.drain()


def find_quintuples(
    raw_words: Iterable[str], solver_config: SolverConfig = default_config
) -> list[tuple[str, ...]]:
    """Find all sets of five words whose letters are pairwise distinct.

    Args:
        raw_words: Words in any case; unsuitable ones are filtered out.
        solver_config (SolverConfig): The solver configuration.

    Returns:
        Each solution as a tuple of five words.
    """
    candidates = prepare_candidates(raw_words, solver_config)
    return [candidates.words_for(s) for s in search(candidates, solver_config)]


def run(solver_config: SolverConfig = default_config, *, out: TextIO = sys.stdout) -> int:
    """Solve for the configured word list, printing every solution.

    Args:
        solver_config (SolverConfig): The solver configuration.
        out: Stream to print the report to.

    Returns:
        The number of solutions found.
    """
    with ExitStack() as stack:
        logf: TextIO = out
        if solver_config.log_dir is not None:
            logfile = (
                Path(solver_config.log_dir)
                / f"{Path(solver_config.word_list_path).stem}-{datetime.now():%Y%m%d-%H%M%S}.log"
            )
            logfile.parent.mkdir(parents=True, exist_ok=True)
            print(f"Log file: {logfile}", file=out, flush=True)
            logf = stack.enter_context(open(logfile, "w", encoding="utf-8"))

        try:
            return solve_one(solver_config, out=out, logf=logf)
        except KeyboardInterrupt:
            print("Solver interrupted by user.", file=logf, flush=True)
            raise


def solve_one(solver_config: SolverConfig, *, out: TextIO, logf: TextIO) -> int:
    """Load, prepare and search one word list, reporting to `out` and `logf`."""
    start_time = time()
    print(
        f"Start time: {datetime.fromtimestamp(start_time).astimezone().strftime(TIMESTAMP_FMT)}",
        file=logf,
        flush=True,
    )
    print(f"Word list: {solver_config.word_list_path}", file=logf, flush=True)

    raw_words = load_word_list(solver_config.word_list_path)
    candidates = prepare_candidates(raw_words, solver_config)
    print(f"Words: {len(candidates)}", file=out, flush=True)
    if logf is not out:
        print(
            f"Candidates: {int_comma(len(candidates))} of {int_comma(len(raw_words))} words",
            file=logf,
            flush=True,
        )

    t0 = time()
    solutions = search(candidates, solver_config, logf=logf)
    secs = time() - t0

    for n, solution in enumerate(solutions, start=1):
        print(f"-------- Solution {n} -------", file=out)
        print("\n".join(candidates.words_for(solution)), file=out)
        if logf is not out:
            used = 0
            for i in solution:
                used |= int(candidates.masks[i])
            unused = mask_letters(~used, alphabet_size=solver_config.alphabet_size)
            print(
                f"Solution {n}: {' '.join(candidates.words_for(solution))} (unused: {unused})",
                file=logf,
            )
    print(f"Found solutions ({len(solutions)}) in {secs:.1f} secs", file=out, flush=True)
    if logf is not out:
        print(f"Found {int_comma(len(solutions))} solutions", file=logf, flush=True)
    print(f"Total time: {elapsed_str(time() - start_time)}", file=logf, flush=True)
    return len(solutions)
