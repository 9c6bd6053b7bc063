"""
Test suite for the kahansum package.

Test Structure:
- test_core.py: Tests for the accumulator, kahan_add and dtype helpers
- test_algorithms.py: Tests for the kahan_sum reduction
- conftest.py: Shared fixtures and configuration

Usage:
    # Run all tests
    pytest

    # Run specific test file
    pytest tests/test_core.py

    # Run tests with coverage
    pytest --cov=kahansum
"""
