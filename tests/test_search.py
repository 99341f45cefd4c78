import random
import string
from itertools import combinations

import pytest

from conftest import DECOYS, QUINTUPLE, as_word_sets
from fivewords.errors import ScratchCapacityError
from fivewords.solver.config import SolverConfig
from fivewords.solver.scratch import ScratchBuffer
from fivewords.solver.solver import find_quintuples, prepare_candidates, search
from fivewords.solver.worker import search_first_words, solve_with_first_word
from fivewords.wordlist import prepare


def random_partition_words(seed: int, n_shuffles: int = 6) -> list[str]:
    """Words made by cutting shuffled alphabets into 5-letter pieces.

    Each shuffle contributes one guaranteed solution; mixing shuffles creates more.
    """
    rng = random.Random(seed)
    words = []
    for _ in range(n_shuffles):
        letters = list(string.ascii_uppercase)
        rng.shuffle(letters)
        words.extend("".join(letters[k : k + 5]) for k in range(0, 25, 5))
    return words


def brute_force(candidates):
    masks = candidates.masks.tolist()
    found = set()
    for combo in combinations(range(len(masks)), 5):
        union = 0
        for i in combo:
            union |= masks[i]
        if union.bit_count() == 25:
            found.add(frozenset(candidates.words_for(combo)))
    return found


def test_finds_exactly_the_embedded_quintuple(fixture_words, serial_config):
    solutions = find_quintuples(fixture_words, serial_config)
    assert as_word_sets(solutions) == {frozenset(QUINTUPLE)}


def test_decoys_alone_find_nothing(serial_config):
    assert find_quintuples(list(DECOYS) + list(QUINTUPLE[:4]), serial_config) == []


def test_solution_indices_strictly_decrease(fixture_words, serial_config):
    candidates = prepare_candidates(fixture_words, serial_config)
    for solution in search(candidates, serial_config):
        assert list(solution) == sorted(solution, reverse=True)
        assert len(set(solution)) == 5


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_matches_brute_force(seed, serial_config):
    candidates = prepare(random_partition_words(seed))
    solutions = search(candidates, serial_config)
    words = [candidates.words_for(s) for s in solutions]

    # No solution is reported twice
    assert len(as_word_sets(words)) == len(words)
    assert as_word_sets(words) == brute_force(candidates)
    assert len(words) >= 6

    masks = candidates.masks.tolist()
    for solution in solutions:
        union = 0
        for i in solution:
            union |= masks[i]
        assert union.bit_count() == 25


@pytest.mark.parametrize("seed", [4, 5])
def test_ordering_does_not_change_solutions(seed):
    words = random_partition_words(seed)
    ordered = SolverConfig(parallel=False, order_by_frequency=True, blocklist=frozenset())
    unordered = SolverConfig(parallel=False, order_by_frequency=False, blocklist=frozenset())
    assert as_word_sets(find_quintuples(words, ordered)) == as_word_sets(
        find_quintuples(words, unordered)
    )


def test_parallel_matches_serial():
    words = random_partition_words(7, n_shuffles=8)
    serial = SolverConfig(parallel=False, blocklist=frozenset())
    parallel = SolverConfig(parallel=True, tasks_per_worker=3, blocklist=frozenset())
    serial_solutions = find_quintuples(words, serial)
    parallel_solutions = find_quintuples(words, parallel)
    assert len(parallel_solutions) == len(serial_solutions)
    assert as_word_sets(parallel_solutions) == as_word_sets(serial_solutions)


def test_blocked_word_removes_its_quintuple(fixture_words):
    config = SolverConfig(parallel=False, blocklist=frozenset({"waltz"}))
    assert find_quintuples(fixture_words, config) == []


def test_blocked_word_replaced_by_anagram(fixture_words):
    config = SolverConfig(parallel=False, blocklist=frozenset({"WALTZ"}))
    solutions = find_quintuples(fixture_words + ["zlatw"], config)
    assert as_word_sets(solutions) == {frozenset({"FJORD", "GUCKS", "NYMPH", "VIBEX", "ZLATW"})}


@pytest.mark.parametrize("words", [[], ["FJORD", "GUCKS", "NYMPH", "VIBEX"]])
def test_too_few_candidates_is_not_an_error(words, serial_config):
    assert search(prepare(words), serial_config) == []


def test_empty_parallel_search():
    assert search(prepare([]), SolverConfig(parallel=True)) == []


def test_other_word_length():
    config = SolverConfig(
        parallel=False, word_length=3, alphabet_size=15, blocklist=frozenset()
    )
    words = ["abc", "def", "ghi", "jkl", "mno", "adg"]
    assert as_word_sets(find_quintuples(words, config)) == {
        frozenset({"ABC", "DEF", "GHI", "JKL", "MNO"})
    }


def test_scratch_growth_keeps_all_solutions():
    candidates = prepare(random_partition_words(8))
    small = SolverConfig(parallel=False, scratch_capacity=1, blocklist=frozenset())
    large = SolverConfig(parallel=False, scratch_capacity=4096, blocklist=frozenset())
    assert search(candidates, small) == search(candidates, large)


def test_scratch_overflow_without_growth_raises():
    candidates = prepare(random_partition_words(8))
    config = SolverConfig(
        parallel=False, scratch_capacity=1, grow_scratch=False, blocklist=frozenset()
    )
    with pytest.raises(ScratchCapacityError):
        search(candidates, config)


def test_scratch_overflow_in_worker_propagates():
    candidates = prepare(random_partition_words(8))
    config = SolverConfig(
        parallel=True, scratch_capacity=1, grow_scratch=False, blocklist=frozenset()
    )
    with pytest.raises(ScratchCapacityError):
        search(candidates, config)


def test_solve_with_first_word_partitions_the_search():
    candidates = prepare(random_partition_words(9))
    masks = candidates.masks.tolist()
    scratch = ScratchBuffer(8)

    per_first = []
    for i in range(len(candidates)):
        out = []
        n = solve_with_first_word(i, masks, candidates.masks, scratch, out)
        assert n == len(out)
        assert all(s[0] == i for s in out)
        per_first.extend(out)

    everything = search_first_words(range(len(candidates)), masks, candidates.masks, scratch)
    assert sorted(per_first) == sorted(everything)
