#!/usr/bin/env python3
"""
Pytest configuration and fixtures for Kahan summation tests.

This file contains shared test fixtures, configuration, and utilities
used across the test suite.
"""

import math
import os
import sys

import numpy as np
import pytest
import torch

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))


@pytest.fixture(scope="session")
def random_seed():
    """Set random seed for reproducible tests."""
    seed = 42
    np.random.seed(seed)
    torch.manual_seed(seed)
    return seed


@pytest.fixture
def simple_data():
    """Simple test data for basic functionality tests."""
    return [1.0, 2.0, 3.0, 4.0, 5.0]


@pytest.fixture
def pi_e_float32():
    """A large term followed by alternating pi and e, as float32."""
    return np.array(
        [10000.0, 3.14159, 2.71828, 3.14159, 2.71828, 3.14159, 2.71828],
        dtype=np.float32,
    )


@pytest.fixture
def large_then_small_float32():
    """One large term followed by many terms below its rounding unit."""
    data = np.full(1001, 0.1, dtype=np.float32)
    data[0] = 10000.0
    return data


@pytest.fixture
def random_normal_data(random_seed):
    """Random normal distribution data."""
    return np.random.normal(0, 1, 1000).astype(np.float32)


@pytest.fixture(params=[np.float32, np.float64])
def dtype(request):
    """Parameterized fixture for different data types."""
    return request.param


@pytest.fixture(params=[torch.float32, torch.float64])
def torch_dtype(request):
    """Parameterized fixture for different torch data types."""
    return request.param


class AccuracyChecker:
    """Utility class for checking numerical accuracy."""

    @staticmethod
    def exact_sum(values) -> float:
        """Correctly rounded binary64 sum of the values as stored."""
        return math.fsum(float(v) for v in values)

    @staticmethod
    def naive_sum(values):
        """Left-to-right sum in the values' own precision."""
        total = values[0] - values[0]
        for v in values:
            total = total + v
        return total

    @staticmethod
    def relative_error(computed: float, reference: float) -> float:
        """Calculate relative error."""
        if reference == 0:
            return abs(computed)
        return abs(computed - reference) / abs(reference)


@pytest.fixture
def accuracy_checker():
    """Fixture providing accuracy checking utilities."""
    return AccuracyChecker()

