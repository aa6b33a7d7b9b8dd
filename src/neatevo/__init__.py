"""
neatevo - NEAT (NeuroEvolution of Augmenting Topologies) in Python.

This package evolves both the weights and the topology of small neural networks.

Main components:
- genotype:  Genetic encoding (genomes, genes, innovation tracking)
- phenotype: Networks expressed by genomes, evaluated by bounded relaxation
- pool:      Speciation, fitness sharing, selection and reproduction
- run:       Configuration and the trial driver

Example:
    >>> from neatevo import Config, InnovationTracker, Population, build_phenotype
    >>> tracker    = InnovationTracker()
    >>> population = Population(2, 1, 150, tracker)
    >>> for genome in population.genomes:
    ...     outputs = build_phenotype(genome).feed_forward([0.0, 1.0])
    ...     genome.set_fitness(evaluate(outputs))
    >>> population.explicit_fitness_sharing()
    >>> population.reproduce(tracker)
"""

__version__ = "0.1.0"

from loguru import logger

from neatevo.run.config import Config
from neatevo.errors     import InvalidArgumentError, NeatError, PreconditionViolationError
from neatevo.genotype   import ConnectionGene, Genome, InnovationTracker, NodeGene, NodeType
from neatevo.phenotype  import Network, build_phenotype
from neatevo.pool       import Population, Species
from neatevo.run.trial  import Trial

# Library code stays silent unless the application opts in with logger.enable("neatevo")
logger.disable("neatevo")

__all__ = [
    "Config",
    "ConnectionGene",
    "Genome",
    "InnovationTracker",
    "InvalidArgumentError",
    "NeatError",
    "Network",
    "NodeGene",
    "NodeType",
    "Population",
    "PreconditionViolationError",
    "Species",
    "Trial",
    "build_phenotype",
]
