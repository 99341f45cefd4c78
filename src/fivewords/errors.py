"""Exceptions raised while preparing candidates and searching."""


class InvalidWordError(ValueError):
    """A word contains a character outside the configured alphabet.

    Raised during candidate preparation; a malformed word aborts the run instead of being
    dropped.
    """

    def __init__(self, word: str, alphabet_size: int = 26) -> None:
        last = chr(ord("A") + alphabet_size - 1)
        super().__init__(f"Invalid word {word!r}: letters must be in A-{last}")
        self.word = word
        """The offending (uppercased) word."""
        self.alphabet_size = alphabet_size

    def __reduce__(self):
        return (self.__class__, (self.word, self.alphabet_size))


class ScratchCapacityError(RuntimeError):
    """A worker scratch buffer is too small and is not allowed to grow."""

    def __init__(self, required: int, capacity: int) -> None:
        super().__init__(
            f"Scratch buffer needs {required} entries but capacity is {capacity} "
            "(raise scratch_capacity or enable grow_scratch)"
        )
        self.required = required
        self.capacity = capacity

    def __reduce__(self):
        return (self.__class__, (self.required, self.capacity))
