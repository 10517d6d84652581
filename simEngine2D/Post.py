from __future__ import annotations
from pathlib import Path
from collections.abc import Iterable, Mapping
from typing import Union
import pandas as pd
from .Bodies import Body
from .Worlds import World

BodiesLike = Union[World, Mapping[str, Body], Iterable[Body]]

def _as_bodies(bodies: BodiesLike) -> list[Body]:
    if isinstance(bodies, World):
        return bodies.bodies
    if isinstance(bodies, Mapping):
        return list(bodies.values())
    return list(bodies)

def pose_table(bodies: BodiesLike) -> pd.DataFrame:
    """One row per body (indexed by id) with its current x, y, theta"""
    data = [[bdy.id, bdy.x, bdy.y, bdy.theta] for bdy in _as_bodies(bodies)]
    df = pd.DataFrame(data=data, columns=["id", "x", "y", "theta"])
    df.set_index("id", inplace=True)
    return df

def write_xlsx(bodies: BodiesLike, out_path: str | Path) -> Path:
    out_path = Path(out_path).with_suffix(".xlsx")
    pose_table(bodies).to_excel(out_path)
    return out_path
