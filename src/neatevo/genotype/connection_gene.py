"""
NEAT Connection Gene Module

This module implements the ConnectionGene class for the
NEAT (NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    ConnectionGene: Gene encoding a weighted connection between nodes
"""

import copy
import numpy as np
import random
from neatevo.run.config import Config

class ConnectionGene:
    """
    A gene describing a weighted connection between two nodes in a Neural Network.

    Each connection gene represents a directed edge in the neural network graph,
    connecting a source node to a destination node with an associated weight.
    Connection genes are uniquely identified by their innovation number, which
    serves as a historical marker enabling proper gene alignment during crossover.

    Connection genes are never deleted, only disabled. A disabled connection is
    kept in the genome (and may be re-enabled when inherited), but contributes
    no edge to the network built from the genome.

    Public Attributes:
        node_in:    ID of the source node
        node_out:   ID of the destination node
        weight:     Weight of the connection
        enabled:    Whether this connection is active in the network

    Public Properties:
        innovation: Global innovation number uniquely identifying this connection

    Public Methods:
        perturb(): Add a normally distributed amount to the weight, then clamp it
        enable():  Mark the connection as active
        disable(): Mark the connection as inactive
        clone():   Create an independent copy of this gene
    """

    def __init__(self,
                 node_in   : int,
                 node_out  : int,
                 weight    : float,
                 innovation: int,
                 config    : Config,
                 enabled   : bool = True):
        """
        Initialize a connection gene.

        Parameters:
            node_in:    ID of the source node
            node_out:   ID of the destination node
            weight:     Weight of the connection (clamped to [-max_weight, +max_weight])
            innovation: Number uniquely and globally identifying this connection
            config:     Stores configuration parameters
            enabled:    Whether this connection is active in the network
        """
        self._config    : Config = config
        self.node_in    : int    = int(node_in)
        self.node_out   : int    = int(node_out)
        self.weight     : float  = float(np.clip(weight, -config.max_weight, config.max_weight))
        self.enabled    : bool   = bool(enabled)
        self._innovation: int    = int(innovation)

    @property
    def innovation(self) -> int:
        """The innovation number; immutable once the gene is created."""
        return self._innovation

    def perturb(self) -> None:
        """
        Perturb the weight of this connection.
        A cap is placed on the weight so that it can't go beyond [-max_weight, +max_weight].
        """
        new_weight  = self.weight + random.gauss(0, self._config.weight_perturb_strength)
        self.weight = float(np.maximum(-self._config.max_weight, np.minimum(self._config.max_weight, new_weight)))

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def clone(self) -> 'ConnectionGene':
        """
        Create an independent copy of this gene (sharing only the configuration).
        """
        return copy.copy(self)

    def __repr__(self):
        return (f"ConnectionGene(node_in={self.node_in:03d}, node_out={self.node_out:03d},"
                f"weight={self.weight:+.6f}, enabled={self.enabled}, innovation={self.innovation:03d})")

    def __str__(self):
        s  = f"[{self.innovation:03d},{'E' if self.enabled else 'D'},"
        s += f"{self.node_in:02d}=>{self.node_out:02d},{self.weight:+.02f}]"
        return s
