import numpy as np
from dataclasses import dataclass

@dataclass(eq=False)
class Body:
    id: str
    x: float        # CG position in G-RF
    y: float
    theta: float    # Orientation of L-RF w.r.t. G-RF, in radians

    @property
    def r(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=float)

    @property
    def pose(self) -> np.ndarray:
        """q = [x, y, theta]"""
        return np.array([self.x, self.y, self.theta], dtype=float)

    def set_pose(self, q_new: np.ndarray):
        [self.x, self.y, self.theta] = (float(qi) for qi in q_new)
