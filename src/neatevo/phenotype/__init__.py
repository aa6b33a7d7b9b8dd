"""
NEAT Phenotype Package

This package implements the phenotype representation for the NEAT (NeuroEvolution
of Augmenting Topologies) algorithm: the executable neural network expressed by
a genome. Networks are derived, disposable objects: build one from a genome,
evaluate it, then discard it.

Modules:
    network: Neuron and Network classes, build_phenotype()

Exported:
    Neuron:          A computational node applying the steepened sigmoid
    Network:         A (possibly recurrent) neural network built from a genome
    build_phenotype: Build the Network encoded by a genome
"""

from neatevo.phenotype.network import Neuron, Network, build_phenotype

__all__ = ['Neuron',
           'Network',
           'build_phenotype']
