"""
Unit tests for the Neuron and Network classes.

Tests cover network construction from a genome, the relaxation-based
forward pass (feedforward and recurrent topologies), convergence
detection and input validation.
"""

import math
import pytest

from neatevo.activations import steepened_sigmoid_activation
from neatevo.errors      import InvalidArgumentError
from neatevo.phenotype   import Network, Neuron, build_phenotype


def sigmoid(x, slope=4.9):
    return 1.0 / (1.0 + math.exp(-slope * x))


# ============================================================================
# Test: Activation
# ============================================================================

class TestSteepenedSigmoid:

    def test_values(self):
        assert steepened_sigmoid_activation(0.0) == pytest.approx(0.5)
        assert steepened_sigmoid_activation(1.0) == pytest.approx(0.992608, abs=1e-6)
        assert steepened_sigmoid_activation(1.0, slope=1.0) == pytest.approx(sigmoid(1.0, 1.0))

    def test_extreme_inputs_do_not_overflow(self):
        assert steepened_sigmoid_activation(1e6) == pytest.approx(1.0)
        assert steepened_sigmoid_activation(-1e6) == pytest.approx(0.0)


# ============================================================================
# Test: Construction
# ============================================================================

class TestNetworkInit:

    def test_counts(self, make_genome):
        genome  = make_genome(hidden=[4], connections=[(1, 4, 1.0), (4, 3, 1.0), (2, 3, 1.0, False)])
        network = build_phenotype(genome)
        assert isinstance(network, Network)
        assert network.number_nodes == 4
        assert network.number_nodes_hidden == 1
        assert network.number_connections == 3
        assert network.number_connections_enabled == 2

    def test_genome_not_modified(self, make_genome):
        genome = make_genome(connections=[(1, 3, 1.0), (2, 3, 1.0, False)])
        network = Network(genome)
        network.feed_forward([1.0, 1.0])
        assert genome.conn_genes[2].enabled is False
        assert len(genome.node_genes) == 3

    def test_invalid_genome(self):
        with pytest.raises(InvalidArgumentError):
            Network("genome")

    def test_neuron_from_gene(self, make_genome):
        genome = make_genome(biases={3: 0.5})
        neuron = Neuron(genome.node_genes[3])
        assert (neuron.id, neuron.bias, neuron.incoming, neuron.output) == (3, 0.5, [], 0.0)


# ============================================================================
# Test: Forward pass
# ============================================================================

class TestFeedForward:

    def test_single_output(self, make_genome):
        network = Network(make_genome(connections=[(1, 3, 1.0), (2, 3, 1.0)]))
        outputs = network.feed_forward([0.0, 1.0])
        assert outputs == [pytest.approx(0.992608, abs=1e-6)]
        # the second round reproduces the first one exactly
        assert network.iterations == 2
        assert network.converged is True

    def test_single_round(self, make_genome, config):
        # stability can only be detected in a second round (see test_single_output),
        # so a single round returns the same outputs without convergence
        config.max_iterations = 1
        network = Network(make_genome(connections=[(1, 3, 1.0), (2, 3, 1.0)]))
        outputs = network.feed_forward([0.0, 1.0])
        assert outputs == [pytest.approx(0.992608, abs=1e-6)]
        assert network.iterations == 1
        assert network.converged is False

    def test_bias(self, make_genome):
        network = Network(make_genome(connections=[(1, 3, 1.0)], biases={3: -0.5}))
        assert network.feed_forward([1.0, 0.0]) == [pytest.approx(sigmoid(0.5))]

    def test_no_connections(self, make_genome):
        network = Network(make_genome())
        assert network.feed_forward([3.0, 4.0]) == [pytest.approx(0.5)]

    def test_disabled_connections_ignored(self, make_genome):
        network = Network(make_genome(connections=[(1, 3, 1.0), (2, 3, 100.0, False)]))
        assert network.feed_forward([1.0, 1.0]) == [pytest.approx(sigmoid(1.0))]

    def test_hidden_layer(self, make_genome):
        genome  = make_genome(hidden=[4], connections=[(1, 4, 1.0), (4, 3, 2.0)])
        network = Network(genome)
        hidden  = sigmoid(1.0)
        assert network.feed_forward([1.0, 0.0]) == [pytest.approx(sigmoid(2.0 * hidden))]
        assert network.converged is True

    def test_multiple_outputs_in_id_order(self, make_genome):
        genome  = make_genome(outputs=[3, 4], connections=[(1, 3, 1.0), (1, 4, -1.0)])
        outputs = Network(genome).feed_forward([1.0, 0.0])
        assert outputs == [pytest.approx(sigmoid(1.0)), pytest.approx(sigmoid(-1.0))]

    def test_recurrent_network_without_convergence(self, make_genome, config):
        """An oscillating self-loop never settles but still yields outputs."""
        genome  = make_genome(connections=[(3, 3, -10.0)])
        network = Network(genome)
        outputs = network.feed_forward([0.0, 0.0])
        assert len(outputs) == 1
        assert 0.0 <= outputs[0] <= 1.0
        assert network.converged is False
        assert network.iterations == config.max_iterations

    def test_repeated_calls_are_independent(self, make_genome):
        genome  = make_genome(hidden=[4], connections=[(1, 4, 1.0), (4, 3, 1.0), (3, 4, 0.5)])
        network = Network(genome)
        first   = network.feed_forward([1.0, 0.0])
        network.feed_forward([0.0, 1.0])
        assert network.feed_forward([1.0, 0.0]) == first

    def test_wrong_number_of_inputs(self, make_genome):
        network = Network(make_genome(connections=[(1, 3, 1.0)]))
        with pytest.raises(ValueError):
            network.feed_forward([1.0])
        with pytest.raises(ValueError):
            network.feed_forward([1.0, 2.0, 3.0])
