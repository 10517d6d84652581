import importlib

__all__ = [
    # classes
    "Body", "RotationalConstraint", "FixedConstraint", "World", "Solver", "SolverSolution",
    # errors
    "WorldSetupError", "UnableToSolveError", "SolverConfigurationError",
    # functions
    "numerical_jacobian", "select_indices", "local_to_global_pos", "global_to_local_pos",
    "local_to_global_vec", "global_to_local_vec", "pose_table", "write_xlsx",
    # vector algebra
    "rotate", "scale", "add", "subtract", "magnitude", "unit", "direction",
    "to_mag_and_dir", "from_mag_and_dir",
]

_exports = {
    # classes
    "Body":                     ("simEngine2D.Bodies",   "Body"),
    "RotationalConstraint":     ("simEngine2D.KCons",    "RotationalConstraint"),
    "FixedConstraint":          ("simEngine2D.KCons",    "FixedConstraint"),
    "World":                    ("simEngine2D.Worlds",   "World"),
    "Solver":                   ("simEngine2D.solvers",  "Solver"),
    "SolverSolution":           ("simEngine2D.Solution", "SolverSolution"),
    # errors
    "WorldSetupError":          ("simEngine2D.Worlds",   "WorldSetupError"),
    "UnableToSolveError":       ("simEngine2D.Worlds",   "UnableToSolveError"),
    "SolverConfigurationError": ("simEngine2D.solvers",  "SolverConfigurationError"),
    # functions
    "numerical_jacobian":       ("simEngine2D.solvers",  "numerical_jacobian"),
    "select_indices":           ("simEngine2D.solvers",  "select_indices"),
    "local_to_global_pos":      ("simEngine2D.Frames",   "local_to_global_pos"),
    "global_to_local_pos":      ("simEngine2D.Frames",   "global_to_local_pos"),
    "local_to_global_vec":      ("simEngine2D.Frames",   "local_to_global_vec"),
    "global_to_local_vec":      ("simEngine2D.Frames",   "global_to_local_vec"),
    "pose_table":               ("simEngine2D.Post",     "pose_table"),
    "write_xlsx":               ("simEngine2D.Post",     "write_xlsx"),
    # vector algebra
    "rotate":                   ("simEngine2D.Vectors",  "rotate"),
    "scale":                    ("simEngine2D.Vectors",  "scale"),
    "add":                      ("simEngine2D.Vectors",  "add"),
    "subtract":                 ("simEngine2D.Vectors",  "subtract"),
    "magnitude":                ("simEngine2D.Vectors",  "magnitude"),
    "unit":                     ("simEngine2D.Vectors",  "unit"),
    "direction":                ("simEngine2D.Vectors",  "direction"),
    "to_mag_and_dir":           ("simEngine2D.Vectors",  "to_mag_and_dir"),
    "from_mag_and_dir":         ("simEngine2D.Vectors",  "from_mag_and_dir"),
}

def __getattr__(name):
    try:
        mod_name, attr = _exports[name]
    except KeyError:
        raise AttributeError(f"module 'simEngine2D' has no attribute {name!r}") from None
    obj = getattr(importlib.import_module(mod_name), attr)
    globals()[name] = obj  # cache for next access
    return obj

def __dir__():
    return sorted(list(globals().keys()) + list(__all__))
