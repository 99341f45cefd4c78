"""Letter bitmaps: one bit per alphabet letter, A = bit 0."""

from functools import lru_cache

from fivewords.errors import InvalidWordError

ORD_A = ord("A")


@lru_cache(maxsize=300_000)
def letter_mask(word: str, *, alphabet_size: int = 26) -> int:
    """Return the bitmap of the distinct letters in an uppercase word.

    Two words share no letters exactly when the AND of their masks is zero.

    Raises:
        InvalidWordError: If the word contains a character outside the first
            `alphabet_size` uppercase letters.
    """
    mask = 0
    for ch in word:
        n = ord(ch) - ORD_A
        if not 0 <= n < alphabet_size:
            raise InvalidWordError(word, alphabet_size)
        mask |= 1 << n
    return mask


def popcount(mask: int) -> int:
    """Number of set bits in a mask."""
    return mask.bit_count()


def mask_letters(mask: int, *, alphabet_size: int = 26) -> str:
    """Render the letters set in a mask, in alphabetical order."""
    return "".join(chr(ORD_A + n) for n in range(alphabet_size) if mask >> n & 1)
