"""
NEAT Pool Package

This package implements the population level of the NEAT algorithm:
speciation, explicit fitness sharing, selection and reproduction.

Modules:
    population: Population class
    species:    Species class
    selection:  Fitness-proportionate selection

Exported:
    Population:              All genomes of the current generation, grouped into species
    Species:                 An ordered group of genomes, represented by its first member
    proportionate_selection: Choose a genome with probability proportional to its fitness
"""

from neatevo.pool.population import Population
from neatevo.pool.selection  import proportionate_selection
from neatevo.pool.species    import Species

__all__ = ['Population',
           'Species',
           'proportionate_selection']
