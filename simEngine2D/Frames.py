import numpy as np
from .Vectors import VecLike, add, rotate, subtract

# A frame is described by the global position of its origin and its rotation
# (radians) relative to the global frame.

def local_to_global_pos(local_pos: VecLike, origin: VecLike, rotation: float = 0.0) -> np.ndarray:
    """
    Position expressed in a local frame -> position in the global frame

    local_pos (VecLike): Position in the local frame.
    origin (VecLike): Global position of the local frame's origin.
    rotation (float): Rotation of the local frame, in radians.
    """
    return add(rotate(local_pos, rotation), origin)

def global_to_local_pos(global_pos: VecLike, origin: VecLike, rotation: float = 0.0) -> np.ndarray:
    """Inverse of `local_to_global_pos`"""
    return rotate(subtract(global_pos, origin), -rotation)

def local_to_global_vec(local_vec: VecLike, rotation: float) -> np.ndarray:
    return rotate(local_vec, rotation)

def global_to_local_vec(global_vec: VecLike, rotation: float) -> np.ndarray:
    return rotate(global_vec, -rotation)
