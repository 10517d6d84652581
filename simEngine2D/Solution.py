import numpy as np
from dataclasses import dataclass

SUCCESS_MSG = "Solution achieved"
TIMED_OUT_MSG = "No solution found. Solver timed out"
MAX_ITER_MSG = "No solution found. Max number of iterations reached"
_PAIRINGS = {(True, SUCCESS_MSG), (False, TIMED_OUT_MSG), (False, MAX_ITER_MSG)}

@dataclass(frozen=True)
class SolverSolution:
    """
    Result of a Solver run. Build through `success`, `timed_out` or
    `max_iter_reached`; each fixes the (solved, message) pairing.
    """
    x: np.ndarray
    solved: bool
    message: str
    iterations: int = 0

    def __post_init__(self):
        if (self.solved, self.message) not in _PAIRINGS:
            raise ValueError(f"Invalid solution state: solved={self.solved}, message={self.message!r}")

    @classmethod
    def _make(cls, x, solved: bool, message: str, iterations: int) -> "SolverSolution":
        x = np.array(x, dtype=float)
        x.setflags(write=False)
        return cls(x, solved, message, iterations)

    @classmethod
    def success(cls, x: np.ndarray, iterations: int = 0) -> "SolverSolution":
        return cls._make(x, True, SUCCESS_MSG, iterations)

    @classmethod
    def timed_out(cls, x: np.ndarray, iterations: int = 0) -> "SolverSolution":
        return cls._make(x, False, TIMED_OUT_MSG, iterations)

    @classmethod
    def max_iter_reached(cls, x: np.ndarray, iterations: int = 0) -> "SolverSolution":
        return cls._make(x, False, MAX_ITER_MSG, iterations)
