"""
NEAT Network Module

This module implements the phenotype representation for the NEAT algorithm:
the executable neural network expressed by a genome.

Networks built from NEAT genomes may contain cycles. Instead of sorting the
nodes topologically, a forward pass repeatedly updates every non-input neuron
until the outputs stop changing (or a maximum number of rounds is reached).

Classes:
    Neuron:  A computational node applying the steepened sigmoid
    Network: A (possibly recurrent) neural network built from a genome

Functions:
    build_phenotype(genome): Build the Network encoded by a genome
"""

from typing import Sequence

from neatevo.activations       import steepened_sigmoid_activation
from neatevo.errors            import InvalidArgumentError
from neatevo.genotype.genome   import Genome
from neatevo.genotype.node_gene import NodeGene, NodeType
from neatevo.run.config        import Config

class Neuron:
    """
    A computational node (neuron) in a neural network.

    Input neurons simply pass through their input unchanged.
    Hidden and output neurons compute their output as:
        steepened_sigmoid(weighted_input + bias)

    Public Attributes:
        id:              ID of the node gene this neuron expresses
        type:            Neuron type (INPUT, HIDDEN, or OUTPUT)
        bias:            Bias value added to the weighted input
        incoming:        (source neuron ID, weight) for every enabled incoming connection
        input_sum:       The weighted input calculated in the latest update
        output:          The current output
        previous_output: The output before the latest update (used to detect stability)
    """

    def __init__(self, gene: NodeGene):
        """
        Parameters:
            gene: the gene encoding the Node/Neuron
        """
        self.id             : int                     = gene.id
        self.type           : NodeType                = gene.type
        self.bias           : float                   = gene.bias
        self.incoming       : list[tuple[int, float]] = []
        self.input_sum      : float                   = 0.0
        self.output         : float                   = 0.0
        self.previous_output: float                   = 0.0

    def reset(self) -> None:
        self.input_sum       = 0.0
        self.output          = 0.0
        self.previous_output = 0.0

    @property
    def stable(self) -> bool:
        return self.output == self.previous_output

    def __repr__(self):
        return f"Neuron({self.id:03d}, NodeType.{self.type.name:6s}, bias={self.bias}, incoming={self.incoming})"

class Network:
    """
    A NEAT neural network, built from a genome.

    The network is derived from (and does not alter) the genome: one neuron per
    node gene, and one incoming edge per *enabled* connection gene. Disabled
    connection genes contribute nothing.

    Public Attributes:
        iterations: Number of relaxation rounds carried out by the latest forward pass
        converged:  Whether the latest forward pass reached a stable state

    Public Properties:
        number_nodes:               Total number of nodes in the network
        number_nodes_hidden:        Number of hidden nodes in the network
        number_connections:         Total number of connection genes behind the network
        number_connections_enabled: Number of connections (edges) in the network

    Public Methods:
        feed_forward(inputs): Process inputs through the network and return outputs
    """

    def __init__(self, genome: Genome, config: Config | None = None):
        """
        Parameters:
            genome: the Genome encoding the network
            config: stores configuration parameters (defaults to the genome's)

        Raises:
            InvalidArgumentError: If 'genome' is not a Genome
        """
        if not isinstance(genome, Genome):
            raise InvalidArgumentError(f"argument provided to Network() is of type "
                                       f"{type(genome).__name__}, not Genome")
        self._genome = genome
        self._config = config if config is not None else genome.config

        # Create neurons from node genes, segregated by type and ordered by ID
        self._neurons: dict[int, Neuron] = {}
        for gene in sorted(genome.node_genes.values(), key=lambda g: g.id):
            self._neurons[gene.id] = Neuron(gene)

        self._input_neurons  = [n for n in self._neurons.values() if n.type == NodeType.INPUT]
        self._hidden_neurons = [n for n in self._neurons.values() if n.type == NodeType.HIDDEN]
        self._output_neurons = [n for n in self._neurons.values() if n.type == NodeType.OUTPUT]

        # Hidden neurons are updated before output neurons in each round
        self._non_input_neurons = self._hidden_neurons + self._output_neurons

        # For each neuron, build the list of incoming (enabled) connections
        for conn in genome.conn_genes.values():
            if conn.enabled:
                self._neurons[conn.node_out].incoming.append((conn.node_in, conn.weight))

        self.iterations: int  = 0
        self.converged : bool = False

    @property
    def number_nodes(self) -> int:
        return len(self._neurons)

    @property
    def number_nodes_hidden(self) -> int:
        return len(self._hidden_neurons)

    @property
    def number_connections(self) -> int:
        return len(self._genome.conn_genes)

    @property
    def number_connections_enabled(self) -> int:
        return sum(len(neuron.incoming) for neuron in self._neurons.values())

    def feed_forward(self, inputs: Sequence[float]) -> list[float]:
        """
        Perform a complete forward pass through the network.

        Each round updates every hidden neuron, then every output neuron. A neuron's
        weighted input uses the *current* output of its sources: the value produced
        earlier in the same round for sources already updated, the value from the
        previous round otherwise. Rounds are repeated until every non-input neuron's
        output equals its output before the round, or 'max_iterations' is reached.

        Parameters:
            inputs: the network inputs (one per input neuron, in node ID order)

        Returns:
            the outputs of the output neurons (in node ID order), whether or not
            the network reached a stable state
        """
        # The number of inputs must match the number of input neurons
        if len(inputs) != len(self._input_neurons):
            raise ValueError(f"Expected {len(self._input_neurons)} inputs, got {len(inputs)}")

        for neuron in self._neurons.values():
            neuron.reset()

        # an input neuron always outputs its input, un-modified
        for neuron, value in zip(self._input_neurons, inputs):
            neuron.input_sum = value
            neuron.output    = value

        slope = self._config.sigmoid_slope
        self.iterations = 0
        self.converged  = False
        while self.iterations < self._config.max_iterations:
            self.iterations += 1
            for neuron in self._non_input_neurons:
                neuron.previous_output = neuron.output
                neuron.input_sum = sum(self._neurons[src].output * weight for src, weight in neuron.incoming)
                neuron.output    = float(steepened_sigmoid_activation(neuron.input_sum + neuron.bias, slope))

            if all(neuron.stable for neuron in self._non_input_neurons):
                self.converged = True
                break

        return [neuron.output for neuron in self._output_neurons]

    def __str__(self):
        lines = []
        for neuron in self._neurons.values():
            lines.append(f"node {neuron.id} -> bias: {neuron.bias:.10f}")
            for src, weight in neuron.incoming:
                lines.append(f"    weight ({src}->{neuron.id}): {weight:.10f}")
        return "\n".join(lines)

def build_phenotype(genome: Genome, config: Config | None = None) -> Network:
    """
    Build the network expressed by a genome.
    """
    return Network(genome, config)
