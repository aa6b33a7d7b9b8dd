"""Pytest configuration and shared fixtures."""

import random
import sys
from pathlib import Path

import numpy as np
import pytest

# Add the source directory to the Python path
src_dir = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_dir))


@pytest.fixture(autouse=True)
def set_random_seeds():
    """Seed both random number generators used by the library."""
    random.seed(42)
    np.random.seed(42)
    yield
    random.seed(None)
    np.random.seed(None)


@pytest.fixture
def config():
    """Default configuration (no INI file)."""
    from neatevo.run.config import Config
    return Config()


@pytest.fixture
def tracker():
    """A fresh innovation tracker."""
    from neatevo.genotype.innovation_tracker import InnovationTracker
    return InnovationTracker()


@pytest.fixture
def make_genome(config):
    """
    Factory building a genome from a compact description.

    Usage:
        make_genome(inputs=[1, 2], outputs=[3], hidden=[4],
                    connections=[(1, 3, 0.5), (2, 3, -1.0, False)],
                    tracker=tracker, biases={3: 0.0})
    """
    from neatevo.genotype import ConnectionGene, Genome, InnovationTracker, NodeGene, NodeType

    def _make(inputs=(1, 2), outputs=(3,), hidden=(), connections=(), tracker=None, biases=None):
        tracker = tracker if tracker is not None else InnovationTracker()
        biases  = biases or {}
        genome  = Genome(config)
        for node_id in inputs:
            genome.add_node_gene(NodeGene(node_id, NodeType.INPUT, config))
        for node_id in hidden:
            genome.add_node_gene(NodeGene(node_id, NodeType.HIDDEN, config, bias=biases.get(node_id, 0.0)))
        for node_id in outputs:
            genome.add_node_gene(NodeGene(node_id, NodeType.OUTPUT, config, bias=biases.get(node_id, 0.0)))
        for conn in connections:
            node_in, node_out, weight = conn[:3]
            enabled = conn[3] if len(conn) > 3 else True
            innov   = tracker.get_innovation_number(node_in, node_out)
            genome.add_connection_gene(ConnectionGene(node_in, node_out, weight, innov, config, enabled=enabled))
        return genome

    return _make
