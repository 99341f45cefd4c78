"""The prepared, read-only list of candidate words searched by the solver."""

from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

from fivewords.letters import popcount

MASK_DTYPE = np.uint32


@dataclass(frozen=True, eq=False)
class CandidateSet:
    """An ordered sequence of (word, letter mask) pairs.

    Indices 0..N-1 identify words throughout the search.  No two entries share a mask;
    the search engine relies on this to report every solution exactly once.
    """

    words: tuple[str, ...]
    """The candidate words, uppercase."""

    masks: np.ndarray = field(repr=False)
    """Letter masks aligned with `words` (uint32, read-only)."""

    word_length: int = 5
    """Length of every word in the set."""

    def __post_init__(self) -> None:
        """Validate the set and freeze the mask array."""
        masks = np.asarray(self.masks, dtype=MASK_DTYPE).copy()
        if masks.ndim != 1 or len(masks) != len(self.words):
            raise ValueError(
                f"Got {len(masks)} masks for {len(self.words)} words; expected one per word."
            )
        if len(np.unique(masks)) != len(masks):
            raise ValueError("Candidate masks must be unique (anagrams were not removed).")
        for word, mask in zip(self.words, masks.tolist()):
            if len(word) != self.word_length or popcount(mask) != self.word_length:
                raise ValueError(f"Word {word!r} is not {self.word_length} distinct letters.")
        masks.flags.writeable = False
        object.__setattr__(self, "masks", masks)

    def __len__(self) -> int:
        return len(self.words)

    def word(self, index: int) -> str:
        """Return the word at an index."""
        return self.words[index]

    def words_for(self, solution: Sequence[int]) -> tuple[str, ...]:
        """Map a solution's word indices to the words themselves."""
        return tuple(self.words[i] for i in solution)

    def to_dict(self) -> dict:
        """Return a plain-dict form of the set, for handing to worker processes."""
        return {
            "words": list(self.words),
            "masks": self.masks.tolist(),
            "word_length": self.word_length,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CandidateSet":
        """Create a CandidateSet from its dict representation."""
        return cls(
            words=tuple(data["words"]),
            masks=np.array(data["masks"], dtype=MASK_DTYPE),
            word_length=data["word_length"],
        )
