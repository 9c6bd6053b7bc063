"""
Sequence reduction with Kahan summation.

Folds an iterable of floating-point values through a ``KahanSum`` in
iteration order instead of accumulating them naively.
"""

import itertools
import logging
from typing import Any, Iterable

import numpy as np
import torch

from .core import KahanSum, dtype_name, infer_dtype

logger = logging.getLogger(__name__)


def kahan_sum(values: Iterable[Any], dtype=None) -> KahanSum:
    """
    Compute the Kahan sum of an iterable.

    The iterable is consumed once, left to right; generators, lists, 1-D NumPy
    arrays and 1-D tensors all work. Elements are converted one at a time, so
    nothing is copied up front.

    Args:
        values: Finite iterable of scalars
        dtype: Numeric type to sum in (default: dtype of an array or tensor
            input, otherwise type of the first element)

    Returns:
        The final accumulator; ``sum`` holds the total, ``err`` the remaining
        compensation term

    Example:
        >>> import numpy as np
        >>> acc = kahan_sum(np.array([10000.0, 3.14159, 2.71828], dtype=np.float32))
        >>> print(acc)
        KahanSum(sum=10005.86, err=0.0004813671)
    """
    # Typed containers carry their dtype even when empty
    if dtype is None and isinstance(values, (np.ndarray, torch.Tensor)):
        dtype = infer_dtype(values)

    terms = iter(values)

    if dtype is None:
        try:
            first = next(terms)
        except StopIteration:
            logger.debug("kahan_sum called on an empty iterable")
            return KahanSum()
        dtype = infer_dtype(first)
        terms = itertools.chain([first], terms)

    accumulator = KahanSum(dtype=dtype)
    count = 0
    for count, term in enumerate(terms, start=1):
        accumulator.add(term)

    logger.debug("Summed %d terms as %s", count, dtype_name(accumulator.dtype))
    return accumulator
