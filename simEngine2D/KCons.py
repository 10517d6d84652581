import numpy as np
from typing import Optional, Tuple, Union
from .Bodies import Body
from .Frames import local_to_global_pos
from .Vectors import VecLike, as_vec

# Kinematic constraints. Each variant exposes the same capability:
#   bodies  -> bodies whose poses the constraint reads
#   n_eqs   -> number of algebraic constraint equations (ACEs)
#   phi(*q) -> ACE residuals given one q = [x, y, theta] per body in `bodies`

class RotationalConstraint:
    """Pin joint: point P on body A coincides with point Q on body B"""
    n_eqs = 2

    def __init__(self, body_a: Body, anchor_a: VecLike, body_b: Body, anchor_b: VecLike):
        """
        body_a (Body): A body
        anchor_a (VecLike): Location of P in L-RF of body A
        body_b (Body): B body
        anchor_b (VecLike): Location of Q in L-RF of body B
        """
        # Self-referencing pairs are rejected by World, not here
        self.body_a = body_a
        self.anchor_a = as_vec(anchor_a)
        self.body_b = body_b
        self.anchor_b = as_vec(anchor_b)

    @property
    def bodies(self) -> Tuple[Body, Body]:
        return (self.body_a, self.body_b)

    def phi(self, qa: np.ndarray, qb: np.ndarray) -> np.ndarray:
        """
        ACE: \\Phi = (r_a + A(theta_a) s_a^P) - (r_b + A(theta_b) s_b^Q) = 0
        """
        p_global = local_to_global_pos(self.anchor_a, qa[0:2], qa[2])
        q_global = local_to_global_pos(self.anchor_b, qb[0:2], qb[2])
        return p_global - q_global

    def __repr__(self):
        return (f"RotationalConstraint({self.body_a.id!r}, {self.anchor_a.tolist()}, "
                f"{self.body_b.id!r}, {self.anchor_b.tolist()})")


class FixedConstraint:
    """Locks a body's pose to a target pose"""
    n_eqs = 3

    def __init__(self,
                 body: Body,
                 x: Optional[float] = None,
                 y: Optional[float] = None,
                 theta: Optional[float] = None,
                 power: int = 1):
        """
        body (Body): Constrained body. Its current pose is the default target.
        x, y, theta (float): Override individual target components.
        power (int): Odd exponent applied to each difference (sign preserved).
                     1 gives the plain difference; higher powers flatten the
                     residual near the target.
        """
        if not isinstance(power, (int, np.integer)) or power < 1 or power % 2 == 0:
            raise ValueError(f"power must be a positive odd integer, got {power!r}")

        self.body = body
        self.target = np.array([
            body.x if x is None else x,
            body.y if y is None else y,
            body.theta if theta is None else theta,
        ], dtype=float)
        self.power = int(power)

    @property
    def bodies(self) -> Tuple[Body]:
        return (self.body,)

    def phi(self, q: np.ndarray) -> np.ndarray:
        """
        ACE: \\Phi = (q - q_target)^power = 0
        """
        d = np.asarray(q, dtype=float) - self.target
        if self.power == 1:
            return d
        return d**self.power     # odd power keeps the sign of d

    def __repr__(self):
        return f"FixedConstraint({self.body.id!r}, target={self.target.tolist()})"


KCon = Union[RotationalConstraint, FixedConstraint]
