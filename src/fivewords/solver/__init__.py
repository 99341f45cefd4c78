"""Search engine: pruned enumeration of five words with disjoint letters."""

from fivewords.solver.collector import ResultCollector
from fivewords.solver.config import SolverConfig
from fivewords.solver.scratch import ScratchBuffer
from fivewords.solver.solver import find_quintuples, prepare_candidates, run, search
from fivewords.solver.worker import Solution

__all__ = [
    "ResultCollector",
    "ScratchBuffer",
    "Solution",
    "SolverConfig",
    "find_quintuples",
    "prepare_candidates",
    "run",
    "search",
]
