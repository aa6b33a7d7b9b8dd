"""
NEAT Selection Module

Fitness-proportionate ("roulette wheel") selection of parents.
"""

import random
from typing import Sequence, TYPE_CHECKING

from neatevo.errors import InvalidArgumentError
if TYPE_CHECKING:
    from neatevo.genotype import Genome

def proportionate_selection(genomes: Sequence['Genome'], total_fitness: float) -> 'Genome':
    """
    Choose a genome using fitness-proportionate selection.
    Genomes with higher fitness values are more likely to be picked.

    Draws 'pick' uniformly in [0, total_fitness), then walks the list accumulating
    fitness and returns the first genome whose cumulative fitness exceeds 'pick'.

    Parameters:
        genomes:       the genomes to choose from
        total_fitness: the sum of the fitness of all 'genomes'

    Returns:
        the selected genome
    """
    if not genomes:
        raise InvalidArgumentError("cannot select from an empty list of genomes")

    # Without any fitness to go by, every genome is equally likely
    if total_fitness <= 0:
        return random.choice(genomes)

    pick = random.random() * total_fitness
    running_total = 0.0
    for genome in genomes:
        running_total += genome.fitness
        if running_total > pick:
            return genome

    # 'total_fitness' may exceed the actual sum by a rounding error
    return genomes[-1]
