"""Pytest configuration and shared fixtures for tabsimplex tests.

This module provides:
- A deterministic NumPy RNG fixture for property-style tests
- Shared linear programs used across test modules
"""

import os

import numpy as np
import pytest

from tabsimplex import Relation, Term, constraint, objective


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    This ensures tests are reproducible while allowing override for debugging.
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Auto-use fixture to set the legacy numpy global seed."""
    np.random.seed(int(os.environ.get("TEST_RNG_SEED", "0")))


@pytest.fixture
def production_lp():
    """Maximize 7x + 8y + 10z s.t. 2x + 3y + 2z <= 1000, x + y + 2z <= 800."""
    z = objective(Term(7, "x"), Term(8, "y"), Term(10, "z"))
    constraints = [
        constraint(Term(2, "x"), Term(3, "y"), Term(2, "z"), relation=Relation.LESS_EQUAL, rhs=1000),
        constraint(Term(1, "x"), Term(1, "y"), Term(2, "z"), relation=Relation.LESS_EQUAL, rhs=800),
    ]
    return z, constraints


@pytest.fixture
def minimization_lp():
    """Minimize -2x - 3y - 4z s.t. 3x + 2y + z <= 10, 2x + 5y + 3z <= 15."""
    z = objective(Term(-2, "x"), Term(-3, "y"), Term(-4, "z"))
    constraints = [
        constraint(Term(3, "x"), Term(2, "y"), Term(1, "z"), relation=Relation.LESS_EQUAL, rhs=10),
        constraint(Term(2, "x"), Term(5, "y"), Term(3, "z"), relation=Relation.LESS_EQUAL, rhs=15),
    ]
    return z, constraints


@pytest.fixture
def two_phase_lp():
    """Minimize 6x + 3y s.t. x + y >= 1, 2x - y >= 1, 3y <= 2."""
    z = objective(Term(6, "x"), Term(3, "y"))
    constraints = [
        constraint(Term(1, "x"), Term(1, "y"), relation=Relation.GREATER_EQUAL, rhs=1),
        constraint(Term(2, "x"), Term(-1, "y"), relation=Relation.GREATER_EQUAL, rhs=1),
        constraint(Term(3, "y"), relation=Relation.LESS_EQUAL, rhs=2),
    ]
    return z, constraints


@pytest.fixture
def infeasible_lp():
    """x >= 5 and x <= 2."""
    z = objective(Term(1, "x"))
    constraints = [
        constraint(Term(1, "x"), relation=Relation.GREATER_EQUAL, rhs=5),
        constraint(Term(1, "x"), relation=Relation.LESS_EQUAL, rhs=2),
    ]
    return z, constraints
