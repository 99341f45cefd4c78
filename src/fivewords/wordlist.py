"""Module for word list loading, candidate preparation and ordering."""

from collections.abc import Collection, Iterable
from os import PathLike
from pathlib import Path

import numpy as np

from fivewords.candidate_set import MASK_DTYPE, CandidateSet
from fivewords.letters import ORD_A, letter_mask, popcount


def load_word_list(path: str | PathLike) -> list[str]:
    """Load a word list, one word per line, keeping file order.

    Args:
        path: Path to the word list file.

    Returns:
        The stripped, non-blank lines of the file.
    """
    word_list_path = Path(path)
    if not word_list_path.is_file():
        raise FileNotFoundError(f"Word list file not found: {word_list_path}")

    with word_list_path.open("r", encoding="utf-8") as f:
        words: list[str] = []
        for line in f:
            word = line.strip()
            if word:
                words.append(word)
        return words


def prepare(
    raw_words: Iterable[str],
    blocklist: Collection[str] = frozenset(),
    *,
    word_length: int = 5,
    alphabet_size: int = 26,
) -> CandidateSet:
    """Filter raw words down to the candidates the search works on.

    Keeps words of exactly `word_length` letters, uppercased, with no repeated letter and
    not in the blocklist.  Of several anagrams (same set of letters), only the first one seen
    is kept, so the result is reproducible for a given input order.

    Args:
        raw_words: Words in any case.
        blocklist: Words to exclude, in any case.
        word_length: Required word length.
        alphabet_size: Number of valid letters, counted from A.

    Returns:
        A CandidateSet whose masks are all distinct.

    Raises:
        InvalidWordError: If a word of the right length contains a character outside the
            alphabet.
    """
    blocked = {w.upper() for w in blocklist}
    by_mask: dict[int, str] = {}

    for raw in raw_words:
        if len(raw) != word_length:
            continue
        word = raw.upper()
        if len(word) != word_length:
            continue  # uppercasing changed the length, e.g. "ß" -> "SS"
        mask = letter_mask(word, alphabet_size=alphabet_size)
        if popcount(mask) < word_length:
            continue  # repeated letter
        if word in blocked:
            continue
        by_mask.setdefault(mask, word)

    return CandidateSet(
        words=tuple(by_mask.values()),
        masks=np.fromiter(by_mask.keys(), dtype=MASK_DTYPE, count=len(by_mask)),
        word_length=word_length,
    )


def get_letter_frequency(words: Iterable[str], *, alphabet_size: int = 26) -> np.ndarray:
    """Count the occurrences of each letter across the given words.

    Returns:
        An int64 array of length `alphabet_size`; entry n counts letter n (A = 0).
    """
    counts = np.zeros(alphabet_size, dtype=np.int64)
    for word in words:
        for ch in word:
            counts[ord(ch) - ORD_A] += 1
    return counts


def order_by_entropy(candidates: CandidateSet) -> CandidateSet:
    """Return the candidates sorted by ascending total letter frequency.

    A word's score is the sum over its letters of how often that letter occurs across all
    candidates.  Words built from rare letters come first, which lets the search prune more
    of the remaining space early.  Ties keep their original order.
    """
    if not len(candidates):
        return candidates

    counts = get_letter_frequency(candidates.words)
    # Each mask has exactly one bit per letter, so a word's score is bits @ counts
    bits = (candidates.masks[:, None] >> np.arange(len(counts), dtype=MASK_DTYPE)) & 1
    scores = bits.astype(np.int64) @ counts
    order = np.argsort(scores, kind="stable")

    return CandidateSet(
        words=tuple(candidates.words[i] for i in order.tolist()),
        masks=candidates.masks[order],
        word_length=candidates.word_length,
    )
