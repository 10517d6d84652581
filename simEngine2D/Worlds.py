import numpy as np
from typing import Dict, List, Optional, Sequence, Tuple
from loguru import logger
from .Bodies import Body
from .KCons import KCon, RotationalConstraint, FixedConstraint
from .Solution import SolverSolution
from .solvers import Solver

class WorldSetupError(Exception):
    """Inconsistent or unsolvable set of constraints. `errors` holds every problem found."""
    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        msg = "Errors occurred setting up the world:\n"
        msg += "".join(f"  - {e}\n" for e in self.errors)
        super().__init__(msg)


class UnableToSolveError(Exception):
    def __init__(self, solver_message: str):
        self.solver_message = solver_message
        super().__init__(f"Unable to solve world - solver message: {solver_message}")


class World:
    """
    Set of bodies, rotational constraints and fixed constraints.

    Body i of the registry owns slots [3i, 3i+1, 3i+2] = (x, y, theta) of the
    generalized coordinates q.
    """
    def __init__(self,
                 rot_constraints: Sequence[RotationalConstraint],
                 fix_constraints: Sequence[FixedConstraint]):
        self.rot_constraints: List[RotationalConstraint] = list(rot_constraints)
        self.fix_constraints: List[FixedConstraint] = list(fix_constraints)
        self.last_solution: Optional[SolverSolution] = None

        errors = []
        self._bodies: Dict[str, Body] = {}
        for kc in self.rot_constraints:
            if kc.body_a.id == kc.body_b.id:
                errors.append(f"A body can't have a rotational constraint with itself. Body id: {kc.body_a.id}")
            self._add_bodies(kc)
        for kc in self.fix_constraints:
            self._add_bodies(kc)

        self.indices: Dict[str, Tuple[int, int, int]] = {
            bid: (3*ii, 3*ii + 1, 3*ii + 2) for ii, bid in enumerate(self._bodies)
        }

        if self.dof < 0:
            errors.append(f"System has negative number of degrees of freedom. (dof = {self.dof})")

        if errors:
            raise WorldSetupError(errors)

        logger.info("World set up: {} bodies, {} rotational, {} fixed constraints, dof = {}",
                    self.nb, len(self.rot_constraints), len(self.fix_constraints), self.dof)

    def _add_bodies(self, kc: KCon):
        for bdy in kc.bodies:
            self._bodies[bdy.id] = bdy

    @property
    def bodies(self) -> List[Body]:
        return list(self._bodies.values())

    @property
    def constraints(self) -> List[KCon]:
        """Constraints in residual order: rotational first, then fixed"""
        return [*self.rot_constraints, *self.fix_constraints]

    @property
    def nb(self):
        return len(self._bodies)

    @property
    def nq(self):
        return 3 * self.nb

    @property
    def nc(self):
        """Number of scalar constraint equations"""
        return sum(kc.n_eqs for kc in self.constraints)

    @property
    def dof(self) -> int:
        """deg_of_freedom = 3*b - 2*r - 3*f"""
        return 3*self.nb - 2*len(self.rot_constraints) - 3*len(self.fix_constraints)

    def get_bodies(self) -> Dict[str, Body]:
        """Registry of bodies, keyed by body id"""
        return self._bodies

    def pack_q(self) -> np.ndarray:
        q = np.zeros(self.nq)
        for bid, bdy in self._bodies.items():
            q[list(self.indices[bid])] = bdy.pose
        return q

    def unpack_q(self, q: np.ndarray):
        for bid, bdy in self._bodies.items():
            bdy.set_pose(q[list(self.indices[bid])])

    def phi(self, q: np.ndarray) -> np.ndarray:
        """
        Residuals of every constraint at q: rotational pairs in constraint order,
        then fixed triples in constraint order.
        """
        q = np.asarray(q, dtype=float)
        rows = [np.zeros(0)]
        for kc in self.constraints:
            poses = [q[list(self.indices[bdy.id])] for bdy in kc.bodies]
            rows.append(kc.phi(*poses))

        return np.concatenate(rows)

    def solve(self, solver: Optional[Solver] = None) -> "World":
        """
        Solve the constraint system and move the bodies to their solved poses.

        Raises UnableToSolveError, leaving the bodies untouched, when the solver
        does not converge.
        """
        if solver is None:
            solver = Solver()

        sol = solver.solve(self.phi, self.pack_q())
        self.last_solution = sol
        if not sol.solved:
            raise UnableToSolveError(sol.message)

        self.unpack_q(sol.x)
        return self
