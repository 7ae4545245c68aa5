import numpy as np


class ModelConsistencyError(ArithmeticError):
    """
    Raised when an intermediate result of the analytical model leaves its
    mathematical domain (a probability outside [0, 1], a NaN, a non-positive
    occupancy correction). It points to a modelling or numerical bug, never
    to bad user input.
    """


def check_probability(name, value, tol=1e-9):
    """
    Assert that `value` (scalar or array) is a probability. Values within
    `tol` of the [0, 1] borders are accepted as rounding noise.
    """
    arr = np.asarray(value, dtype=float)
    if np.any(np.isnan(arr)) or np.any(arr < -tol) or np.any(arr > 1 + tol):
        raise ModelConsistencyError(f"{name} is not a probability: {value}")
    return value
