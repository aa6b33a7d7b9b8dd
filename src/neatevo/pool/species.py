"""
NEAT Species Module

This module implements the Species class for the NEAT algorithm.
A species represents a cluster of genetically similar genomes
that compete primarily within their own niche.

Classes:
    Species: An ordered group of genomes, represented by its first member
"""

import numpy as np
from typing import Iterator

from neatevo.genotype import Genome

class Species:
    """
    A species: a cluster of genetically similar genomes in NEAT.

    In NEAT, the population is divided into species based on genetic similarity,
    allowing different evolutionary niches to develop independently. This protects
    innovative structures from being eliminated by competition with more mature
    solutions, as genomes only compete for offspring within their own species.

    Members are kept in insertion order. The first member is the species'
    representative: new genomes join the species if their compatibility distance
    to the representative is below the compatibility threshold.

    Public Attributes:
        id:      Species identifier (unique within a population)
        members: The genomes that are part of this species, in insertion order

    Public Properties:
        representative: The first member
        total_fitness:  Sum of the fitness of all members

    Public Methods:
        add(genome):                 Append a genome to the species
        distance_to(genome):         Compatibility distance between the representative and a genome
        share_fitness():             Divide each member's fitness by the species size
        best_genome():               The (first) member with the highest fitness
        survivors(kill_percentile):  The members at or above a fitness percentile
    """

    def __init__(self, species_id: int, representative: Genome):
        """
        Initialize a new species.

        Parameters:
            species_id:     species identifier
            representative: the first member of the species
        """
        self.id     : int          = species_id
        self.members: list[Genome] = [representative]

    @property
    def representative(self) -> Genome:
        return self.members[0]

    @property
    def total_fitness(self) -> float:
        return sum(genome.fitness for genome in self.members)

    def add(self, genome: Genome) -> None:
        self.members.append(genome)

    def distance_to(self, genome: Genome) -> float:
        """
        Calculate the compatibility distance between this species and a given genome.
        Uses the species representative for comparison.
        """
        return genome.compatibility_distance(self.representative)

    def share_fitness(self) -> None:
        """
        Explicit fitness sharing: divide the fitness of each member by the number
        of members, so that large species don't dominate purely by headcount.
        """
        size = len(self.members)
        for genome in self.members:
            genome.set_fitness(genome.fitness / size)

    def best_genome(self) -> Genome:
        """
        Return the member with the highest fitness (the first one, in case of ties).
        """
        return max(self.members, key=lambda genome: genome.fitness)

    def survivors(self, kill_percentile: float) -> list[Genome]:
        """
        Return the members allowed to reproduce: those whose fitness is at or above
        the 'kill_percentile' percentile of the fitness within the species.

        The percentile uses the midpoint interpolation (numpy's 'hazen' method),
        so with 10 members of distinct fitness and a percentile of 80 the top 2 survive.

        Parameters:
            kill_percentile: percentage (0-100) of the species that is killed off

        Returns:
            the surviving members, in insertion order
        """
        fitness   = np.array([genome.fitness for genome in self.members])
        threshold = np.percentile(fitness, kill_percentile, method='hazen')
        return [genome for genome, f in zip(self.members, fitness) if f >= threshold]

    def __len__(self):
        return len(self.members)

    def __iter__(self) -> Iterator[Genome]:
        return iter(self.members)

    def __repr__(self):
        return f"Species(id={self.id}, size={len(self.members)})"
