import pandas as pd
import pytest
from simEngine2D import Body, RotationalConstraint, FixedConstraint, World
from simEngine2D.Post import pose_table, write_xlsx


@pytest.fixture
def solved_world():
    a = Body("A", 0.0, 0.0, 0.0)
    b = Body("B", 2.0, 0.0, 0.0)
    return World([RotationalConstraint(a, (1, 0), b, (0, 0))], [FixedConstraint(a)]).solve()


def test_pose_table(solved_world):
    df = pose_table(solved_world)
    assert list(df.index) == ["A", "B"]
    assert list(df.columns) == ["x", "y", "theta"]
    assert df.loc["B", "x"] == pytest.approx(1.0, abs=1e-6)


def test_pose_table_accepts_mapping_and_iterable(solved_world):
    from_mapping = pose_table(solved_world.get_bodies())
    from_list = pose_table(solved_world.bodies)
    pd.testing.assert_frame_equal(from_mapping, from_list)


def test_write_xlsx(solved_world, tmp_path):
    out = write_xlsx(solved_world, tmp_path / "poses")
    assert out.suffix == ".xlsx"
    df = pd.read_excel(out, index_col=0)
    assert list(df.index) == ["A", "B"]
    assert df.loc["B", "x"] == pytest.approx(1.0, abs=1e-6)
