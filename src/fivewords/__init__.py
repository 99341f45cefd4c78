"""Five-Word Finder.

Finds every set of five five-letter words, drawn from a word list, whose 25 letters are all
different.  Words are reduced to letter bitmaps, anagrams are collapsed, and a pruned search
over the five word slots runs in parallel over the choice of first word.
"""

from sys import argv, exit

from .solver.config import config as solver_config
from .solver.solver import run


def main() -> None:
    """Main entry point for the five-word finder."""
    # Expect at most one argument: path to the word list
    if len(argv) > 2:
        print("Usage: python -m fivewords [<path_to_word_list>]")
        exit(1)
    run_config = solver_config
    if len(argv) == 2:
        run_config = solver_config.model_copy(update={"word_list_path": argv[1]})
    try:
        run(run_config)
    except KeyboardInterrupt:
        exit(1)
