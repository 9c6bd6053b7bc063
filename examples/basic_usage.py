#!/usr/bin/env python3
"""
Basic usage examples for the kahansum package.

This script shows how compensated summation keeps low-order bits that
naive float32 accumulation throws away.
"""

import math

import numpy as np

from kahansum import KahanSum, kahan_sum


def demonstrate_precision_loss():
    """Show how standard summation loses precision."""
    print("=" * 60)
    print("DEMONSTRATION: Precision Loss in Standard Summation")
    print("=" * 60)

    data = np.array([10000.0, 3.14159, 2.71828, 3.14159, 2.71828, 3.14159, 2.71828],
                    dtype=np.float32)
    exact = math.fsum(float(v) for v in data)

    naive = np.float32(0.0)
    for v in data:
        naive = naive + v

    result = kahan_sum(data)

    print(f"Exact sum:            {exact:.7f}")
    print(f"Naive float32 sum:    {naive}  (error {abs(float(naive) - exact):.2e})")
    print(f"Kahan float32 sum:    {result.sum}  (error {abs(float(result.sum) - exact):.2e})")
    print(f"Compensation term:    {result.err}")
    print(f"sum - err:            {float(result.sum) - float(result.err):.7f}")
    print()


def demonstrate_running_accumulator():
    """Accumulate values one at a time."""
    print("=" * 60)
    print("DEMONSTRATION: Running Accumulator")
    print("=" * 60)

    acc = KahanSum(dtype=np.float32)
    acc += 10000.0
    acc += 3.14159
    print(f"In place:             {acc}")

    branched = acc + 2.71828
    print(f"Value-returning add:  {branched}")
    print(f"Original unchanged:   {acc}")
    print()


if __name__ == "__main__":
    demonstrate_precision_loss()
    demonstrate_running_accumulator()
