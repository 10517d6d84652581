import numpy as np
from typing import Sequence, Tuple, Union

VecLike = Union[np.ndarray, Sequence[float]]

def as_vec(v: VecLike) -> np.ndarray:
    """
    Coerce v to a float (2,) array

    v (VecLike): Any pair of numbers, e.g. (x, y) or np.array([x, y]).
    """
    arr = np.array(v, dtype=float).reshape(-1)
    if arr.shape != (2,):
        raise ValueError(f"Expected a 2D vector, got shape {np.shape(v)}")
    return arr

def rotate(v: VecLike, angle: float) -> np.ndarray:
    """
    Rotate v counter-clockwise by angle

    v (VecLike): Vector to rotate.
    angle (float): Angle of rotation, in radians.
    """
    x, y = as_vec(v)
    c, s = np.cos(angle), np.sin(angle)
    return np.array([c*x - s*y, s*x + c*y])

def scale(v: VecLike, k: float) -> np.ndarray:
    return as_vec(v) * k

def add(a: VecLike, b: VecLike) -> np.ndarray:
    return as_vec(a) + as_vec(b)

def subtract(a: VecLike, b: VecLike) -> np.ndarray:
    """a - b"""
    return as_vec(a) - as_vec(b)

def magnitude(v: VecLike) -> float:
    return float(np.hypot(*as_vec(v)))

def unit(v: VecLike) -> np.ndarray:
    """Unit vector of v, or [0, 0] if v is the null vector"""
    mag = magnitude(v)
    if mag == 0.0:
        return np.zeros(2)
    return scale(v, 1.0/mag)

def direction(v: VecLike) -> float:
    """Direction of v in radians, in (-pi, pi]"""
    x, y = as_vec(v)
    return float(np.arctan2(y, x))

def to_mag_and_dir(v: VecLike) -> Tuple[float, float]:
    return magnitude(v), direction(v)

def from_mag_and_dir(mag: float, dir: float) -> np.ndarray:
    return np.array([mag*np.cos(dir), mag*np.sin(dir)])
