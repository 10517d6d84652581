import time
import scipy.linalg
import numpy as np
from dataclasses import dataclass
from typing import Callable, List, Optional
from loguru import logger
from .Solution import SolverSolution

ResidualFn = Callable[[np.ndarray], np.ndarray]

class SolverConfigurationError(Exception):
    """The system cannot be solved by this method at the current state (not a convergence failure)"""


def _eval(f: ResidualFn, x: np.ndarray) -> np.ndarray:
    return np.asarray(f(x), dtype=float).reshape(-1)

def _max_abs(y: np.ndarray) -> float:
    return float(np.max(np.abs(y), initial=0.0))

def _is_singular(A: np.ndarray, max_condition: float) -> bool:
    s = scipy.linalg.svdvals(A)
    return s[-1] <= s[0] / max_condition

def _solveAxb(A: np.ndarray, b: np.ndarray, max_condition: float = 1e6) -> np.ndarray:
    """Solve A x = b. Numerically singular A gets the minimum-norm least-squares x."""
    if _is_singular(A, max_condition):
        x, *_ = scipy.linalg.lstsq(A, b, cond=1.0/max_condition)
        return x
    return scipy.linalg.solve(A, b, check_finite=False)


def numerical_jacobian(f: ResidualFn, x: np.ndarray, delta: float = 1e-9) -> np.ndarray:
    """
    Central-difference Jacobian of f at x, shape (m, n).

    Entries of residuals that do not depend on x_j come out as exactly 0.0,
    which `select_indices` relies on.

    f (Callable): Residual function R^n -> R^m.
    x (np.ndarray): Point of evaluation.
    delta (float): Perturbation, scaled by max(1, |x_j|).
    """
    x = np.asarray(x, dtype=float).reshape(-1)
    n = len(x)
    m = len(_eval(f, x))
    jac = np.empty((m, n), dtype=float)

    for idx in range(n):
        h = delta * max(1.0, abs(x[idx]))
        xu = x.copy()
        xd = x.copy()
        xu[idx] += h
        xd[idx] -= h
        jac[:, idx] = (_eval(f, xu) - _eval(f, xd)) / (xu[idx] - xd[idx])

    return jac


def select_indices(jac: np.ndarray, rng: Optional[np.random.Generator] = None) -> List[int]:
    """
    Choose m of the n columns of jac to treat as free variables.

    Rows with the fewest nonzero entries are the most constrained, so they pick
    first. Each row claims one unclaimed column it depends on: the lowest index,
    or a random one when `rng` is given.

    Returns the claimed column indices in ascending order.
    """
    jac = np.atleast_2d(jac)
    nonzero = np.abs(np.sign(jac))
    row_counts = nonzero.sum(axis=1)
    claimed = np.zeros(jac.shape[1], dtype=bool)
    selected = []

    for i in np.argsort(row_counts, kind="stable"):
        candidates = np.flatnonzero((nonzero[i] != 0) & ~claimed)
        if len(candidates) == 0:
            raise SolverConfigurationError(
                f"Unable to find enough independent variables to solve the system (residual row {i})")

        j = candidates[0] if rng is None else rng.choice(candidates)
        claimed[j] = True
        selected.append(int(j))

    return sorted(selected)


@dataclass
class Solver:
    """
    Newton-Raphson on a numerically estimated Jacobian.

    stop_error (float): Converged once max|f(x)| < stop_error.
    max_iterations (float): Iteration budget. math.inf disables it.
    time_out (float): Wall-clock budget, in ms.
    delta (float): Numerical differentiation step.
    reselect_every (int): Underdetermined systems recompute the free variables
                          every `reselect_every` iterations.
    max_reselections (int): Reselections tried when the free sub-Jacobian is
                            singular.
    max_condition (float): Matrices with a larger condition number are treated
                           as singular and stepped with least squares.
    rng (np.random.Generator): Random tie-breaks in `select_indices`. None is
                               deterministic (lowest column index).
    """
    stop_error: float = 1e-6
    max_iterations: float = 1000
    time_out: float = 3.6e6
    delta: float = 1e-9
    reselect_every: int = 10
    max_reselections: int = 10
    max_condition: float = 1e6
    rng: Optional[np.random.Generator] = None

    def solve(self, f: ResidualFn, x0: np.ndarray) -> SolverSolution:
        """Drive f(x) to 0 starting from x0. Dispatches on the shape of the system."""
        x = np.array(x0, dtype=float).reshape(-1)
        n = len(x)
        m = len(_eval(f, x))

        if n == m:
            return self.solve_determined(f, x)
        elif n > m:
            return self.solve_underdetermined(f, x)

        raise SolverConfigurationError(
            f"Unable to solve. System has more equations ({m}) than variables ({n})")

    def _out_of_budget(self, x: np.ndarray, iteration: int, t0: float) -> Optional[SolverSolution]:
        if iteration >= self.max_iterations:
            logger.info("Solver stopped: max iterations ({}) reached", self.max_iterations)
            return SolverSolution.max_iter_reached(x, iteration)
        if (time.monotonic() - t0) * 1e3 >= self.time_out:
            logger.info("Solver stopped: timed out after {} iterations", iteration)
            return SolverSolution.timed_out(x, iteration)
        return None

    @staticmethod
    def _check_finite(error: float, iteration: int):
        if not np.isfinite(error):
            raise FloatingPointError(f"Residual became non-finite at iteration {iteration}")

    def solve_determined(self, f: ResidualFn, x0: np.ndarray) -> SolverSolution:
        """Classic Newton-Raphson for n == m"""
        x = np.array(x0, dtype=float).reshape(-1)
        y = _eval(f, x)
        if len(y) != len(x):
            raise SolverConfigurationError(
                f"Unable to solve. System has {len(y)} equations and {len(x)} variables")

        error = _max_abs(y)
        self._check_finite(error, 0)
        iteration = 0
        t0 = time.monotonic()

        while error >= self.stop_error:
            stop = self._out_of_budget(x, iteration, t0)
            if stop is not None:
                return stop

            jac = numerical_jacobian(f, x, self.delta)
            if _is_singular(jac, self.max_condition):
                logger.warning("Iteration {}: singular Jacobian; taking a least-squares step", iteration)
            h = _solveAxb(jac, -y, self.max_condition)
            x = x + h
            y = _eval(f, x)
            error = _max_abs(y)
            iteration += 1
            logger.debug("Iteration {}: |h| = {:.3e}, error = {:.3e}", iteration, np.linalg.norm(h), error)
            self._check_finite(error, iteration)

        logger.info("Solver converged in {} iterations (error = {:.3e})", iteration, error)
        return SolverSolution.success(x, iteration)

    def _reselect_if_singular(self, jac: np.ndarray, free: List[int]) -> List[int]:
        """
        Swap a free set with a singular sub-Jacobian for another selection. Keeps
        the last set tried when no selection helps; the step is then a
        least-squares one.
        """
        for _ in range(self.max_reselections):
            if not _is_singular(jac[:, free], self.max_condition):
                return free
            try:
                new_free = select_indices(jac, self.rng)
            except SolverConfigurationError:
                break
            if new_free == free:
                break
            logger.warning("Singular sub-Jacobian for free variables {}; retrying with {}", free, new_free)
            free = new_free

        if _is_singular(jac[:, free], self.max_condition):
            logger.warning("Singular sub-Jacobian for free variables {}; taking a least-squares step", free)
        return free

    def solve_underdetermined(self, f: ResidualFn, x0: np.ndarray) -> SolverSolution:
        """
        Newton-Raphson for n > m. Each iteration solves for m "free" variables and
        holds the remaining n - m at their current values.
        """
        x = np.array(x0, dtype=float).reshape(-1)
        y = _eval(f, x)
        n = len(x)
        m = len(y)
        if m > n:
            raise SolverConfigurationError(
                f"Unable to solve. System has more equations ({m}) than variables ({n})")
        if m == n:
            logger.warning("System has as many variables as equations. Use solve_determined for better performance.")

        error = _max_abs(y)
        self._check_finite(error, 0)
        iteration = 0
        t0 = time.monotonic()
        free: List[int] = []

        while error >= self.stop_error:
            stop = self._out_of_budget(x, iteration, t0)
            if stop is not None:
                return stop

            jac = numerical_jacobian(f, x, self.delta)
            if iteration % self.reselect_every == 0:
                free = select_indices(jac, self.rng)
                logger.debug("Iteration {}: free variables {}", iteration, free)
            free = self._reselect_if_singular(jac, free)

            h = _solveAxb(jac[:, free], -y, self.max_condition)
            x[free] += h
            y = _eval(f, x)
            error = _max_abs(y)
            iteration += 1
            logger.debug("Iteration {}: |h| = {:.3e}, error = {:.3e}", iteration, np.linalg.norm(h), error)
            self._check_finite(error, iteration)

        logger.info("Solver converged in {} iterations (error = {:.3e})", iteration, error)
        return SolverSolution.success(x, iteration)
