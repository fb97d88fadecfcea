"""
pestrisk/solver/grid_search.py

Maximization over a discretized choice grid.
"""

from typing import Sequence, Tuple, Union

import numpy as np

from pestrisk.errors import DomainError, EmptyInput


def argmax(curve: Union[Sequence[float], np.ndarray]) -> Tuple[int, float]:
    """
    Index and value of the maximum of a curve aligned with the input grid.

    Ties are broken by first occurrence, i.e. the lowest input level.

    Raises:
        EmptyInput: If the curve is empty.
        DomainError: If the curve contains NaN.
    """
    values = np.asarray(curve, dtype=np.float64).reshape(-1)

    if values.size == 0:
        raise EmptyInput("Cannot maximize an empty curve")
    if np.any(np.isnan(values)):
        raise DomainError("Criterion curve contains NaN", context={"n_nan": int(np.isnan(values).sum())})

    # np.argmax returns the first occurrence of the maximum
    idx = int(np.argmax(values))
    return idx, float(values[idx])
