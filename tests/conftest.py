import numpy as np
import pytest

from fivewords.candidate_set import MASK_DTYPE, CandidateSet
from fivewords.letters import letter_mask
from fivewords.solver.config import SolverConfig

# 25 distinct letters, Q unused
QUINTUPLE = ("FJORD", "GUCKS", "NYMPH", "VIBEX", "WALTZ")

# Each decoy has both A (shared with WALTZ) and E (shared with VIBEX), so no decoy
# can stand in for a word of the quintuple.
DECOYS = ("CRANE", "SLATE", "AROSE", "HEART", "LEAPT")


@pytest.fixture
def fixture_words():
    # Mixed case, plus entries the preparer must drop
    return [
        "crane", "fjord", "Slate", "gucks", "STALE", "hello", "nymph", "abc",
        "arose", "vibex", "fjords", "heart", "waltz", "leapt",
    ]


@pytest.fixture
def serial_config():
    return SolverConfig(parallel=False, blocklist=frozenset())


def as_word_sets(solutions):
    return {frozenset(s) for s in solutions}


def make_candidates(words, *, word_length=5):
    """Build a CandidateSet straight from uppercase words, skipping preparation."""
    return CandidateSet(
        words=tuple(words),
        masks=np.array([letter_mask(w) for w in words], dtype=MASK_DTYPE),
        word_length=word_length,
    )
