"""
NEAT Node Gene Module.

This module implements the NodeGene class and NodeType enumeration
for the NEAT (NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    NodeType: Enumeration for node types (INPUT, HIDDEN, OUTPUT)
    NodeGene: Gene encoding a single network node with its bias
"""

import copy
import numpy as np
import random
from enum   import Enum

from neatevo.errors     import InvalidArgumentError
from neatevo.run.config import Config

class NodeType(Enum):
    """
    Nodes come in three types: input, hidden, output.
    """
    INPUT  = "I"
    HIDDEN = "H"
    OUTPUT = "O"

class NodeGene:
    """
    A gene describing a node in a Neural Network.

    Each node gene encodes the properties of a single node in the neural network:
    its type (input, hidden, or output) and its bias. Node genes are identified by
    a node ID which remains stable for the lifetime of the genome owning them.
    Node genes are never deleted; their bias only changes via bounded perturbation.

    The node computes its output as: steepened_sigmoid(weighted_input + bias)

    Public Attributes:
        id:   Identifier for this node (a positive integer)
        type: Type of node (INPUT, HIDDEN, or OUTPUT)
        bias: Bias value added to the node's weighted input (always 0 for INPUT nodes)

    Public Methods:
        perturb(): Add a normally distributed amount to the bias, then clamp it
        clone():   Create an independent copy of this gene
    """

    def __init__(self,
                 node_id  : int,
                 node_type: NodeType,
                 config   : Config,
                 bias     : float | None = None):
        """
        Initialize a node gene.
        If the 'bias' parameter is not specified it is initialized with a random
        value, according to the configuration. Input nodes always get a zero bias.

        Parameters:
            node_id:   Identifier for this node
            node_type: Type of node (INPUT, HIDDEN, or OUTPUT)
            config:    Stores configuration parameters
            bias:      Bias value added to the node's weighted input

        Raises:
            InvalidArgumentError: If 'node_type' is not a NodeType
        """
        if not isinstance(node_type, NodeType):
            raise InvalidArgumentError(f"argument provided to NodeGene() is of type "
                                       f"{type(node_type).__name__}, not NodeType")

        self._config: Config   = config
        self.id     : int      = int(node_id)
        self.type   : NodeType = node_type

        if node_type == NodeType.INPUT:
            bias = 0.0
        elif bias is None:
            bias = np.random.normal(config.bias_init_mean, config.bias_init_stdev)
        self.bias: float = float(np.clip(bias, -config.max_bias, config.max_bias))

    def perturb(self) -> None:
        """
        Perturb the bias of this node.
        A cap is placed on the bias so that it can't go beyond [-max_bias, +max_bias].
        """
        new_bias  = self.bias + random.gauss(0, self._config.bias_perturb_strength)
        self.bias = float(np.maximum(-self._config.max_bias, np.minimum(self._config.max_bias, new_bias)))

    def clone(self) -> 'NodeGene':
        """
        Create an independent copy of this gene (sharing only the configuration).
        """
        return copy.copy(self)

    def __repr__(self):
        return f"NodeGene(node_id={self.id:03d}, node_type=NodeType.{self.type.name:6s}, bias={self.bias})"

    def __str__(self):
        if self.type == NodeType.INPUT:
            return f"[{self.type.value}{self.id}]"
        else:
            return f"[{self.type.value}{self.id},b={self.bias:.2f}]"
