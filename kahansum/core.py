"""
Core Kahan summation implementation.

This module contains the compensated accumulator, the single-step
compensated addition it is built on, and the helpers that map Python,
NumPy and PyTorch scalars onto the accumulator's numeric type.
"""

import copy
from typing import Any, Optional, Tuple

import numpy as np
import torch


def normalize_dtype(dtype):
    """
    Resolve a user-supplied numeric type to the form the accumulator uses.

    Accepts scalar types (``float``, ``np.float32``, ``decimal.Decimal``, ...),
    ``torch.dtype`` objects, ``np.dtype`` instances and dtype names such as
    ``"float32"``.

    Raises:
        TypeError: If the type is not usable as a floating-point type.
    """
    if isinstance(dtype, torch.dtype):
        if not dtype.is_floating_point:
            raise TypeError(f"Expected a floating-point torch dtype, got {dtype}")
        return dtype

    if isinstance(dtype, (str, np.dtype)):
        dtype = np.dtype(dtype).type

    if not callable(dtype):
        raise TypeError(f"Unsupported numeric type: {dtype!r}")
    rejected = (int, complex, np.integer, np.bool_, np.complexfloating)
    if isinstance(dtype, type) and issubclass(dtype, rejected):
        raise TypeError(f"Expected a floating-point type, got {dtype.__name__}")

    return dtype


def infer_dtype(value: Any):
    """Numeric type an accumulator should use for ``value``."""
    if isinstance(value, torch.Tensor):
        if value.dtype.is_floating_point:
            return value.dtype
        return torch.get_default_dtype()

    if isinstance(value, (np.ndarray, np.generic)):
        scalar_type = value.dtype.type
        if issubclass(scalar_type, (np.integer, np.bool_)):
            return np.float64
        return scalar_type

    # Plain Python integers are summed as binary64
    if isinstance(value, int):
        return float

    return type(value)


def dtype_name(dtype) -> str:
    if isinstance(dtype, torch.dtype):
        return str(dtype)
    return getattr(dtype, "__name__", repr(dtype))


def zero_of(dtype):
    """Additive identity of ``dtype``."""
    if isinstance(dtype, torch.dtype):
        return torch.zeros((), dtype=dtype)
    return dtype(0)


def as_dtype(value: Any, dtype):
    """
    View a single scalar as ``dtype``.

    Tensors are copied so the result never shares storage with ``value``;
    other values already of the right type are returned as they are. NumPy arrays
    and tensors are accepted as long as they hold exactly one element.

    Args:
        value: Scalar-like value to convert
        dtype: Normalized numeric type (see ``normalize_dtype``)

    Returns:
        ``value`` expressed in ``dtype``

    Raises:
        ValueError: If ``value`` holds more than one element.
    """
    if isinstance(dtype, torch.dtype):
        if isinstance(value, torch.Tensor) and value.dtype == dtype and value.dim() == 0:
            return value.detach().clone()
        tensor = torch.as_tensor(value, dtype=dtype).detach()
        if tensor.numel() != 1:
            raise ValueError(
                f"Expected a scalar term, got a tensor with {tensor.numel()} elements"
            )
        return tensor.reshape(()).clone()

    if type(value) is dtype:
        return value

    if isinstance(value, np.ndarray):
        if value.size != 1:
            raise ValueError(f"Expected a scalar term, got an array of shape {value.shape}")
        value = value.reshape(()).item()
    elif isinstance(value, torch.Tensor):
        if value.numel() != 1:
            raise ValueError(
                f"Expected a scalar term, got a tensor with {value.numel()} elements"
            )
        value = value.item()

    return dtype(value)


def kahan_add(total, term, err=0) -> Tuple[Any, Any]:
    """
    Single-step compensated addition.

    The operand of larger magnitude is used as the base of the addition, so
    the low-order bits of the smaller one end up in the returned error term
    whichever side they came from.

    Args:
        total: Current running sum
        term: Value to add
        err: Current compensation term

    Returns:
        Tuple of (new_sum, new_err)

    Example:
        >>> kahan_add(1.0, 1e100)
        (1e+100, -1.0)
    """
    if abs(total) < abs(term):
        total, term = term, total

    y = term - err
    new_total = total + y
    new_err = (new_total - total) - y
    return new_total, new_err


class KahanSum:
    """
    Running Kahan summation.

    Holds the rounded running total and the compensation term recovering the
    bits lost by the previous additions. The compensated estimate of the true
    total is ``sum - err``.

    Terms are converted to the accumulator's numeric type before they are
    added, so a float32 accumulator performs every step in float32. Infinities
    and NaNs propagate according to IEEE-754 rules.

    Example:
        >>> acc = KahanSum(dtype=np.float32)
        >>> acc += 10000.0
        >>> acc += 3.14159
        >>> print(acc)
        KahanSum(sum=10003.142, err=1.1444092e-05)
    """

    __slots__ = ("_sum", "_err", "_dtype")
    __hash__ = None

    def __init__(self, initial: Optional[Any] = None, dtype=None):
        """
        Initialize the accumulator.

        Args:
            initial: Starting value of the sum, taken as exact (err stays 0)
            dtype: Numeric type to sum in. Defaults to the type of
                ``initial``, or ``float`` for an empty accumulator.
        """
        if dtype is None:
            dtype = float if initial is None else infer_dtype(initial)
        self._dtype = normalize_dtype(dtype)
        self._err = zero_of(self._dtype)
        if initial is None:
            self._sum = zero_of(self._dtype)
        else:
            self._sum = as_dtype(initial, self._dtype)

    @property
    def sum(self):
        """Current running sum."""
        return self._sum

    @property
    def err(self):
        """Current compensation term."""
        return self._err

    @property
    def dtype(self):
        return self._dtype

    def add(self, term: Any):
        """
        Add ``term`` in place.

        Args:
            term: Scalar convertible to the accumulator's numeric type
        """
        term = as_dtype(term, self._dtype)
        self._sum, self._err = kahan_add(self._sum, term, self._err)

    def plus(self, term: Any) -> "KahanSum":
        """Return a new accumulator with ``term`` added, leaving this one unchanged."""
        result = self.copy()
        result.add(term)
        return result

    def reset(self):
        """Reset the accumulator to zero."""
        self._sum = zero_of(self._dtype)
        self._err = zero_of(self._dtype)

    def copy(self) -> "KahanSum":
        return copy.copy(self)

    def __copy__(self):
        clone = type(self).__new__(type(self))
        clone._sum = _own(self._sum)
        clone._err = _own(self._err)
        clone._dtype = self._dtype
        return clone

    def __iadd__(self, term):
        self.add(term)
        return self

    def __add__(self, term):
        return self.plus(term)

    def __eq__(self, other):
        if not isinstance(other, KahanSum):
            return NotImplemented
        return bool(self._sum == other._sum) and bool(self._err == other._err)

    def __float__(self):
        return float(self._sum)

    def __repr__(self):
        return f"{type(self).__name__}(sum={_scalar_str(self._sum)}, err={_scalar_str(self._err)})"


def _own(value):
    if isinstance(value, torch.Tensor):
        return value.clone()
    return value


def _scalar_str(value) -> str:
    if isinstance(value, torch.Tensor):
        return str(value.item())
    return str(value)
