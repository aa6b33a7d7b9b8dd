"""
Unit tests for NodeGene class and NodeType enumeration.

Tests cover construction, type enforcement, bias initialization,
bounded perturbation and cloning.
"""

import pytest
from unittest.mock import patch

from neatevo.errors              import InvalidArgumentError
from neatevo.genotype.node_gene  import NodeGene, NodeType
from neatevo.run.config          import Config


# ============================================================================
# Test: Construction
# ============================================================================

class TestNodeGeneInit:
    """Test NodeGene initialization."""

    def test_input_node_has_zero_bias(self, config):
        """Input nodes always get a zero bias, even if one is given."""
        node = NodeGene(1, NodeType.INPUT, config, bias=3.0)
        assert node.id == 1
        assert node.type == NodeType.INPUT
        assert node.bias == 0.0

    def test_explicit_bias(self, config):
        node = NodeGene(4, NodeType.HIDDEN, config, bias=-1.5)
        assert node.bias == -1.5

    def test_random_bias_within_bounds(self, config):
        """Randomly initialized biases are finite and bounded."""
        for node_id in range(1, 200):
            node = NodeGene(node_id, NodeType.OUTPUT, config)
            assert -config.max_bias <= node.bias <= config.max_bias

    def test_bias_clamped_at_construction(self, config):
        assert NodeGene(3, NodeType.OUTPUT, config, bias=1e9).bias == config.max_bias
        assert NodeGene(3, NodeType.OUTPUT, config, bias=-1e9).bias == -config.max_bias

    @pytest.mark.parametrize("bad_type", ["HIDDEN", 1, None, "H"])
    def test_invalid_node_type(self, config, bad_type):
        """Anything other than a NodeType is rejected."""
        with pytest.raises(InvalidArgumentError):
            NodeGene(1, bad_type, config)

    def test_invalid_argument_is_type_error(self, config):
        """InvalidArgumentError can be caught as a TypeError."""
        with pytest.raises(TypeError):
            NodeGene(1, "INPUT", config)


# ============================================================================
# Test: Perturbation
# ============================================================================

class TestNodeGenePerturb:
    """Test NodeGene.perturb()."""

    def test_perturb_adds_gaussian_value(self, config):
        node = NodeGene(3, NodeType.OUTPUT, config, bias=0.5)
        with patch('neatevo.genotype.node_gene.random.gauss', return_value=0.25):
            node.perturb()
        assert node.bias == pytest.approx(0.75)

    def test_perturb_clamps_upper_bound(self, config):
        node = NodeGene(3, NodeType.OUTPUT, config, bias=99.5)
        with patch('neatevo.genotype.node_gene.random.gauss', return_value=10.0):
            node.perturb()
        assert node.bias == config.max_bias

    def test_perturb_clamps_lower_bound(self, config):
        node = NodeGene(3, NodeType.OUTPUT, config, bias=-99.5)
        with patch('neatevo.genotype.node_gene.random.gauss', return_value=-10.0):
            node.perturb()
        assert node.bias == -config.max_bias

    def test_repeated_perturbation_stays_bounded(self):
        """With a tiny bound, many perturbations never escape it."""
        config = Config()
        config.max_bias = 0.5
        node = NodeGene(3, NodeType.HIDDEN, config, bias=0.0)
        for _ in range(1000):
            node.perturb()
            assert -0.5 <= node.bias <= 0.5


# ============================================================================
# Test: Cloning and string representation
# ============================================================================

class TestNodeGeneClone:

    def test_clone_is_independent(self, config):
        node  = NodeGene(3, NodeType.OUTPUT, config, bias=0.5)
        clone = node.clone()
        assert clone is not node
        assert (clone.id, clone.type, clone.bias) == (3, NodeType.OUTPUT, 0.5)

        clone.bias = 2.0
        assert node.bias == 0.5

    def test_str(self, config):
        assert str(NodeGene(1, NodeType.INPUT, config)) == "[I1]"
        assert str(NodeGene(4, NodeType.HIDDEN, config, bias=0.5)) == "[H4,b=0.50]"
