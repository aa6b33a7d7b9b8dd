"""
Shared fixtures for integration tests.
"""

import sys
from pathlib import Path

import pytest

# Make the example trials importable
examples_dir = Path(__file__).parent.parent.parent / "examples"
sys.path.insert(0, str(examples_dir))


@pytest.fixture
def xor_inputs():
    """XOR inputs (list format)."""
    return [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]


@pytest.fixture
def xor_outputs():
    """XOR expected outputs (list format)."""
    return [[0.0], [1.0], [1.0], [0.0]]
