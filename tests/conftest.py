"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from clonekit import TypeClassifier


@pytest.fixture
def classifier():
    """Fresh TypeClassifier with the built-in opaque types registered."""
    return TypeClassifier()


@pytest.fixture
def bare_classifier():
    """Fresh TypeClassifier without any opaque type registered."""
    return TypeClassifier(opaque_types=())
