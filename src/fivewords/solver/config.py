"""Five-word solver configuration."""

from dotenv import find_dotenv
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine the environment file path, or None if not found
ENV_FILE = find_dotenv() or None

# Junk entries in words_alpha.txt that are not real words
DEFAULT_BLOCKLIST = frozenset(
    {"FLDXT", "HDQRS", "ZHMUD", "SEQWL", "CHIVW", "GCONV", "FCONV", "EXPWY", "PBXES"}
)

N_SLOTS = 5
"""Number of words in a solution."""


class SolverConfig(BaseSettings):
    """Configuration settings for the five-word solver."""

    parallel: bool = True
    """Whether to spread the search over worker processes. Default: True."""

    order_by_frequency: bool = True
    """Whether to try words made of rare letters first. Default: True.

    Affects only the running time, never the set of solutions found.
    """

    blocklist: frozenset[str] = DEFAULT_BLOCKLIST
    """Words excluded even if they otherwise qualify (matched case-insensitively)."""

    scratch_capacity: int = 4096
    """Initial number of slot-3 candidates each worker's scratch buffer can hold."""

    grow_scratch: bool = True
    """Grow a full scratch buffer instead of failing with ScratchCapacityError. Default: True."""

    max_workers: int | None = None
    """Maximum number of worker processes to use. If None (default), uses os.cpu_count() - 1."""

    tasks_per_worker: int = 4
    """Number of batches of first-word indices to submit per worker process. Default: 4."""

    word_length: int = 5
    """Length of the words to combine. Default: 5."""

    alphabet_size: int = 26
    """Number of letters in the alphabet, counted from A. Default: 26."""

    word_list_path: str = "words_alpha.txt"
    """Path of the word list, one word per line."""

    log_dir: str | None = None
    """Directory to write a run log into, in addition to stdout. Default: None (no log file)."""

    model_config = SettingsConfigDict(
        env_prefix="FIVEWORDS_",
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="forbid",
    )

    @field_validator("blocklist", mode="after")
    @classmethod
    def _normalize_blocklist(cls, value: frozenset[str]) -> frozenset[str]:
        return frozenset(w.strip().upper() for w in value)

    @field_validator("scratch_capacity", "tasks_per_worker", "word_length")
    @classmethod
    def _check_positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError(f"must be positive, got {value}")
        return value

    @model_validator(mode="after")
    def _check_alphabet(self) -> "SolverConfig":
        if not 1 <= self.alphabet_size <= 26:
            raise ValueError(f"alphabet_size must be between 1 and 26, got {self.alphabet_size}")
        if N_SLOTS * self.word_length > self.alphabet_size:
            raise ValueError(
                f"{N_SLOTS} words of length {self.word_length} cannot have distinct letters "
                f"from an alphabet of {self.alphabet_size}"
            )
        return self


config = SolverConfig()
