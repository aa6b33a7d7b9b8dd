"""
NEAT Genome Module

This module implements the Genome class for the NEAT
(NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    Genome: An individual's genotype, together with its mutation,
            crossover and compatibility distance operators
"""

import math
import numbers
import random
from loguru import logger

from neatevo.errors                      import InvalidArgumentError, PreconditionViolationError
from neatevo.genotype.connection_gene    import ConnectionGene
from neatevo.genotype.innovation_tracker import InnovationTracker
from neatevo.genotype.node_gene          import NodeType, NodeGene
from neatevo.run.config                  import Config

class Genome:
    """
    A NEAT genome representing a neural network as a collection of node and connection genes.

    In the NEAT (NeuroEvolution of Augmenting Topologies) algorithm, a genome encodes
    the structure and parameters of a neural network at the genotype level. It consists of:
    - Node genes: describe network nodes (input, hidden, output) and their biases
    - Connection genes: describe weighted connections between nodes, each with a unique
      innovation number for tracking historical markings during crossover

    Genomes are compared with each other only through their connection genes'
    innovation numbers, never through node IDs directly. Connections may form
    cycles: the network built from a genome is evaluated by bounded relaxation,
    so no acyclicity is enforced here.

    Attributes:
        node_genes: Dictionary mapping node IDs to NodeGene objects
        conn_genes: Dictionary mapping innovation numbers to ConnectionGene objects
        fitness:    Fitness assigned after evaluation (0 until then)

    Public Properties:
        input_nodes:  List of all input node genes
        hidden_nodes: List of all hidden node genes
        output_nodes: List of all output node genes

    Public Methods:
        add_node_gene(gene):                   Insert a node gene, keyed by node ID
        add_connection_gene(gene):             Insert a connection gene, keyed by innovation number
        set_fitness(value):                    Record the fitness of this genome
        mutate_connection_weights():           Perturb weights and biases
        add_connection_mutation(tracker):      Add a connection between two unconnected nodes
        add_node_mutation(tracker):            Split a connection with a new hidden node
        crossover(other):                      Create offspring with a less (or equally) fit genome
        compatibility_distance(other):         Calculate genetic distance to another genome
        clone():                               Create an independent copy
    """

    def __init__(self, config: Config | None = None):
        """
        Initialize an empty Genome (no node or connection genes).

        Parameters:
            config: Stores configuration parameters (defaults are used if None)
        """
        self._config: Config = config if config is not None else Config()

        self.node_genes: dict[int, NodeGene]       = {}  # node ID => node gene
        self.conn_genes: dict[int, ConnectionGene] = {}  # innovation number => connection gene
        self.fitness   : float                     = 0.0

    @property
    def config(self) -> Config:
        return self._config

    @property
    def input_nodes(self) -> list[NodeGene]:
        return sorted((n for n in self.node_genes.values() if n.type == NodeType.INPUT), key=lambda n: n.id)

    @property
    def hidden_nodes(self) -> list[NodeGene]:
        return sorted((n for n in self.node_genes.values() if n.type == NodeType.HIDDEN), key=lambda n: n.id)

    @property
    def output_nodes(self) -> list[NodeGene]:
        return sorted((n for n in self.node_genes.values() if n.type == NodeType.OUTPUT), key=lambda n: n.id)

    @property
    def num_enabled_connections(self) -> int:
        return sum(1 for conn in self.conn_genes.values() if conn.enabled)

    def add_node_gene(self, gene: NodeGene) -> None:
        """
        Add a node gene to this genome. A gene with the same ID is overwritten.

        Raises:
            InvalidArgumentError: If 'gene' is not a NodeGene
        """
        if not isinstance(gene, NodeGene):
            raise InvalidArgumentError(f"argument provided to add_node_gene() is of type "
                                       f"{type(gene).__name__}, not NodeGene")
        self.node_genes[gene.id] = gene

    def add_connection_gene(self, gene: ConnectionGene) -> None:
        """
        Add a connection gene to this genome. A gene with the same innovation number is overwritten.

        Raises:
            InvalidArgumentError: If 'gene' is not a ConnectionGene
        """
        if not isinstance(gene, ConnectionGene):
            raise InvalidArgumentError(f"argument provided to add_connection_gene() is of type "
                                       f"{type(gene).__name__}, not ConnectionGene")
        self.conn_genes[gene.innovation] = gene

    def set_fitness(self, value: float) -> None:
        """
        Record the fitness of this genome, as calculated by an external evaluation.
        A NaN fitness is treated as 0.0 (worst possible fitness for invalid networks).

        Parameters:
            value: a non-negative real number

        Raises:
            InvalidArgumentError: If 'value' is not a real number, or is negative
        """
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise InvalidArgumentError(f"fitness must be a real number, not {type(value).__name__}")
        value = float(value)
        if math.isnan(value):
            value = 0.0
        if value < 0:
            raise InvalidArgumentError(f"fitness must be non-negative, got {value}")
        self.fitness = value

    def mutate_connection_weights(self) -> None:
        """
        Mutate the weights of the connection genes and the biases of the non-input node genes.

        Every gene gets its own, independent, coin flip deciding whether it is perturbed.
        """
        for conn in self.conn_genes.values():
            if random.random() < self._config.weight_perturb_prob:
                conn.perturb()

        # input nodes are not mutated, they always pass in the inputs unchanged
        for node in self.node_genes.values():
            if node.type != NodeType.INPUT and random.random() < self._config.bias_perturb_prob:
                node.perturb()

    def add_connection_mutation(self, tracker: InnovationTracker) -> None:
        """
        Add a new connection between two existing, not yet connected, nodes.

        The nodes representing the two ends of the new connection are selected at
        random, however we cannot add a connection:
         + from a node to itself
         + ending at an INPUT node
         + between two nodes already connected by a direct connection (in that direction)
        Recurrent connections are allowed.

        Note that the method does NOT add a new connection if it fails to find a
        suitable pair of nodes within a maximum number of attempts.

        Parameters:
            tracker: assigns the innovation number of the new connection

        Raises:
            InvalidArgumentError: If 'tracker' is not an InnovationTracker
        """
        if not isinstance(tracker, InnovationTracker):
            raise InvalidArgumentError(f"argument provided to add_connection_mutation() is of type "
                                       f"{type(tracker).__name__}, not InnovationTracker")

        node_IDs = list(self.node_genes.keys())
        if len(node_IDs) < 2:
            return

        # Get the node pairs already connected by a direct connection.
        connected_nodes = {(conn.node_in, conn.node_out) for conn in self.conn_genes.values()}

        for _ in range(self._config.max_connection_attempts):

            # Select at random the two (distinct) ends of the new connection
            node_in, node_out = random.sample(node_IDs, 2)

            if self.node_genes[node_out].type == NodeType.INPUT:
                continue
            if (node_in, node_out) in connected_nodes:
                continue

            # Success - add connection gene to the genome and return
            innovation_num = tracker.get_innovation_number(node_in, node_out)
            weight         = random.uniform(-self._config.new_weight_range, self._config.new_weight_range)
            self.conn_genes[innovation_num] = ConnectionGene(node_in, node_out, weight, innovation_num, self._config)
            return

        logger.debug("add_connection_mutation: no new connection found after {} attempts",
                     self._config.max_connection_attempts)

    def add_node_mutation(self, tracker: InnovationTracker) -> None:
        """
        Split an existing connection by adding a new node.

        The connection to split is selected at random from *all* connections,
        disabled ones included. The new hidden node gets the ID following the
        largest node ID in the genome.
        The split connection is disabled and replaced by:
         + a connection from its source to the new node, with weight 1.0
         + a connection from the new node to its destination, with the original weight
        so that the signal along the new path is initially the same as before.

        Parameters:
            tracker: assigns the innovation numbers of the two new connections

        Raises:
            InvalidArgumentError: If 'tracker' is not an InnovationTracker
        """
        if not isinstance(tracker, InnovationTracker):
            raise InvalidArgumentError(f"argument provided to add_node_mutation() is of type "
                                       f"{type(tracker).__name__}, not InnovationTracker")

        if not self.conn_genes:
            logger.debug("add_node_mutation: genome has no connection to split")
            return

        split_conn_gene = random.choice(list(self.conn_genes.values()))
        split_conn_gene.disable()

        # Create the gene describing the new (hidden) node; crossover can leave
        # gaps in the node IDs, so the new ID follows the largest one
        new_node_id = max(self.node_genes, default=0) + 1
        self.node_genes[new_node_id] = NodeGene(new_node_id, NodeType.HIDDEN, self._config)

        # First new connection: original input -> new node (weight = 1.0)
        innov1 = tracker.get_innovation_number(split_conn_gene.node_in, new_node_id)
        self.conn_genes[innov1] = ConnectionGene(split_conn_gene.node_in, new_node_id, 1.0, innov1, self._config)

        # Second new connection: new node -> original output (weight = old weight)
        innov2 = tracker.get_innovation_number(new_node_id, split_conn_gene.node_out)
        self.conn_genes[innov2] = ConnectionGene(new_node_id, split_conn_gene.node_out,
                                                 split_conn_gene.weight, innov2, self._config)

    def crossover(self, other: 'Genome') -> 'Genome':
        """
        Perform NEAT crossover between this genome and another to create offspring.
        This genome must be at least as fit as 'other'.

        NEAT crossover rules:
        - Matching genes: randomly inherit from either parent
        - Disjoint/excess genes of this (fitter) genome: always inherited
        - Disjoint/excess genes of 'other': dropped
        An inherited connection gene that is disabled gets re-enabled with a given
        probability. The node genes at both ends of an inherited connection gene are
        copied from the same parent as the connection gene.

        Parameters:
            other: the other, less (or equally) fit, parent genome

        Returns:
            New offspring genome

        Raises:
            InvalidArgumentError:       If 'other' is not a Genome
            PreconditionViolationError: If this genome is less fit than 'other'
        """
        if not isinstance(other, Genome):
            raise InvalidArgumentError(f"argument provided to crossover() is of type "
                                       f"{type(other).__name__}, not Genome")
        if self.fitness < other.fitness:
            raise PreconditionViolationError("with p1.crossover(p2), require p1.fitness >= p2.fitness")

        offspring = Genome(self._config)

        # Get connection innovation numbers from both parents
        innovs_self  = set(self.conn_genes.keys())
        innovs_other = set(other.conn_genes.keys())

        # Matching connections: inherit connection gene randomly from either parent
        for innov in sorted(innovs_self & innovs_other):
            donor = self if random.random() < 0.5 else other
            offspring._inherit(donor, innov)

        # Disjoint & excess connections: inherit connection genes from the fitter parent
        for innov in sorted(innovs_self - innovs_other):
            offspring._inherit(self, innov)

        return offspring

    def _inherit(self, donor: 'Genome', innov: int) -> None:
        """
        Copy a connection gene, and the node genes at its ends, from 'donor' into this genome.
        """
        conn_gene = donor.conn_genes[innov].clone()
        if not conn_gene.enabled and random.random() < self._config.connection_enable_prob:
            conn_gene.enable()
        self.add_connection_gene(conn_gene)
        self.add_node_gene(donor.node_genes[conn_gene.node_in].clone())
        self.add_node_gene(donor.node_genes[conn_gene.node_out].clone())

    def compatibility_distance(self, other: 'Genome') -> float:
        """
        Calculate the compatibility distance between this genome and another.

           distance = c1 * E / N + c3 * W̄

        Where:
        - E = number of non-matching connection genes (excess and disjoint genes
              are not told apart)
        - N = number of connection genes in the larger genome (at least 1)
        - W̄ = average absolute weight difference of matching connection genes
              (0 if there are no matching genes)
        - c1, c3 = weight of the two terms (from configuration)

        Parameters:
            other: the genome relative to which we are calculating the distance

        Returns:
            the compatibility distance between this genome and 'other'

        Raises:
            InvalidArgumentError: If 'other' is not a Genome
        """
        if not isinstance(other, Genome):
            raise InvalidArgumentError(f"argument provided to compatibility_distance() is of type "
                                       f"{type(other).__name__}, not Genome")

        innovs1 = set(self.conn_genes.keys())
        innovs2 = set(other.conn_genes.keys())

        matching_innovs = innovs1 & innovs2
        num_extra       = len(innovs1 ^ innovs2)

        avg_weight_diff = 0.0
        if matching_innovs:
            weight_diff = sum(abs(self.conn_genes[i].weight - other.conn_genes[i].weight) for i in matching_innovs)
            avg_weight_diff = weight_diff / len(matching_innovs)

        N = max(len(self.conn_genes), len(other.conn_genes), 1)
        return (self._config.distance_extra_coeff  * num_extra / N +
                self._config.distance_weight_coeff * avg_weight_diff)

    def clone(self) -> 'Genome':
        """
        Create an independent copy of this genome: no gene is shared with the copy.
        """
        genome = Genome(self._config)
        for node in self.node_genes.values():
            genome.add_node_gene(node.clone())
        for conn in self.conn_genes.values():
            genome.add_connection_gene(conn.clone())
        genome.fitness = self.fitness
        return genome

    def __str__(self):
        node_genes_str  = ''.join(str(node) for node in self.input_nodes)
        node_genes_str += ''.join(str(node) for node in self.hidden_nodes)
        node_genes_str += ''.join(str(node) for node in self.output_nodes)
        conn_genes_str  = ''.join(str(conn) for conn in self.conn_genes.values())
        return f"Nodes: {node_genes_str}\nConns: {conn_genes_str}"
