"""
Kahan Summation Library

Compensated (Kahan) summation for floating-point values, with the
magnitude-ordered refinement that keeps the larger operand as the base of
every addition.

This library provides:
- KahanSum, a running accumulator with in-place and value-returning addition
- kahan_sum, a reduction of any iterable of floats into a KahanSum
- Support for Python floats, NumPy scalar types and PyTorch dtypes
"""

from .core import KahanSum, kahan_add
from .algorithms import kahan_sum

__version__ = "1.0.0"
__author__ = "Kahan Summation Contributors"

__all__ = [
    "KahanSum",
    "kahan_add",
    "kahan_sum",
]
