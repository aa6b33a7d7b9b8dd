"""
NEAT Population Module

This module implements the Population class, which owns all genomes of a
generation, partitioned into species, and turns one generation into the next
through fitness sharing, selection and reproduction.

Classes:
    Population: All genomes of the current generation, grouped into species
"""

import math
import numpy as np
import random
from itertools import count
from loguru    import logger

from neatevo.errors         import InvalidArgumentError
from neatevo.genotype       import ConnectionGene, Genome, InnovationTracker, NodeGene, NodeType
from neatevo.pool.selection import proportionate_selection
from neatevo.pool.species   import Species
from neatevo.run.config     import Config

class Population:
    """
    A population of evolving genomes in the NEAT algorithm.

    The population is partitioned into species (species ID => Species). Each
    generation, after every genome has been assigned a fitness by an external
    evaluation, the caller runs:
      1. explicit_fitness_sharing(): normalize fitness by species size
      2. reproduce(tracker):         breed the next generation

    Public Attributes:
        species:          Species of the current generation:  species ID => Species
        previous_species: Species of the previous generation: species ID => Species
        total_fitness:    Sum of the (shared) fitness of all genomes
        size:             Target number of genomes in each generation

    Public Properties:
        genomes:           All genomes of the current generation
        number_of_species: How many species the current generation is split into

    Public Methods:
        speciate(genome, species):   Place a genome in the first compatible species
        explicit_fitness_sharing():  Normalize fitness by species size
        reproduce(tracker):          Create the next generation
        get_fittest_genome():        Return the genome with highest fitness
    """

    def __init__(self,
                 num_inputs : int,
                 num_outputs: int,
                 size       : int,
                 tracker    : InnovationTracker,
                 config     : Config | None = None):
        """
        Create 'size' fully connected genomes (every input node connected to every
        output node, with random weights) and split them into species.

        Node numbering convention:
            - Input nodes:  [1, num_inputs]
            - Output nodes: [num_inputs + 1, num_inputs + num_outputs]
            - Hidden nodes: assigned by mutation, after all existing nodes

        Parameters:
            num_inputs:  number of input nodes of each genome
            num_outputs: number of output nodes of each genome
            size:        number of genomes in each generation
            tracker:     assigns innovation numbers to the initial connections
            config:      stores configuration parameters (defaults are used if None)

        Raises:
            InvalidArgumentError: If 'tracker' is not an InnovationTracker
        """
        if not isinstance(tracker, InnovationTracker):
            raise InvalidArgumentError(f"argument provided to Population() is of type "
                                       f"{type(tracker).__name__}, not InnovationTracker")

        self._config     : Config = config if config is not None else Config()
        self._species_ids         = count(1)
        self.size        : int    = size
        self.total_fitness: float = 0.0

        self.species         : dict[int, Species] = {}
        self.previous_species: dict[int, Species] = {}

        for _ in range(size):
            genome = self._create_genome(num_inputs, num_outputs, tracker)
            self.speciate(genome, self.species)

        self.previous_species = dict(self.species)
        logger.debug("Initial population: {} genomes in {} species", size, len(self.species))

    def _create_genome(self, num_inputs: int, num_outputs: int, tracker: InnovationTracker) -> Genome:
        """
        Create a genome whose input nodes are all connected to all its output nodes.
        """
        genome   = Genome(self._config)
        inputs   = [NodeGene(i, NodeType.INPUT, self._config) for i in range(1, num_inputs + 1)]
        outputs  = [NodeGene(num_inputs + i, NodeType.OUTPUT, self._config) for i in range(1, num_outputs + 1)]
        for node in inputs + outputs:
            genome.add_node_gene(node)

        for input_node in inputs:
            for output_node in outputs:
                innovation = tracker.get_innovation_number(input_node.id, output_node.id)
                weight     = np.random.normal(self._config.weight_init_mean, self._config.weight_init_stdev)
                genome.add_connection_gene(ConnectionGene(input_node.id, output_node.id,
                                                          weight, innovation, self._config))
        return genome

    @property
    def genomes(self) -> list[Genome]:
        return [genome for spec in self.species.values() for genome in spec]

    @property
    def number_of_species(self) -> int:
        return len(self.species)

    def speciate(self, genome: Genome, species: dict[int, Species]) -> Species:
        """
        Place a genome into the first species (in ascending ID order) whose
        representative is within the compatibility threshold; if there is no
        such species, create a new one containing only this genome.

        Parameters:
            genome:  the genome to place
            species: the species map to place it in (modified in place)

        Returns:
            the species the genome was placed in
        """
        for species_id in sorted(species):
            spec = species[species_id]
            if spec.distance_to(genome) < self._config.compatibility_threshold:
                spec.add(genome)
                return spec

        spec = Species(self._next_species_id(species), genome)
        species[spec.id] = spec
        return spec

    def _next_species_id(self, species: dict[int, Species]) -> int:
        # never reuse the ID of a species alive in this or the previous generation
        taken = set(species) | set(self.previous_species)
        species_id = next(self._species_ids)
        while species_id in taken:
            species_id = next(self._species_ids)
        return species_id

    def explicit_fitness_sharing(self) -> None:
        """
        Perform fitness sharing within each species: each genome's fitness is divided
        by the size of its species. Also recomputes the total fitness of the population.

        Call once per generation, after assigning fitnesses to all genomes and
        before calling reproduce().
        """
        self.total_fitness = 0.0
        for spec in self.species.values():
            spec.share_fitness()
            self.total_fitness += spec.total_fitness

    def reproduce(self, tracker: InnovationTracker) -> None:
        """
        Create the next generation of species.

        For each species of the current generation:
          - its best genome is carried over, unchanged, to the next generation
          - genomes below the kill-off percentile of fitness are discarded
          - the survivors breed a number of offspring proportional to their total
            fitness (relative to the total fitness of all survivors); each child
            results from the crossover of two parents chosen by fitness-proportionate
            selection, followed by mutations
        Every child is placed in the first compatible species of the new generation,
        which is not necessarily the species of its parents.

        Parameters:
            tracker: assigns innovation numbers to connections created by mutation

        Raises:
            InvalidArgumentError: If 'tracker' is not an InnovationTracker
        """
        if not isinstance(tracker, InnovationTracker):
            raise InvalidArgumentError(f"argument provided to reproduce() is of type "
                                       f"{type(tracker).__name__}, not InnovationTracker")

        self.previous_species = self.species
        self.species          = {}

        # Kill off the weakest genomes of each species
        elites          : dict[int, Genome]       = {}
        parents         : dict[int, list[Genome]] = {}
        species_fitness : dict[int, float]        = {}
        self.total_fitness = 0.0
        for species_id in sorted(self.previous_species):
            spec = self.previous_species[species_id]
            if len(spec) == 0:
                continue
            elites[species_id]          = spec.best_genome()
            parents[species_id]         = spec.survivors(self._config.kill_off_percentile)
            species_fitness[species_id] = sum(genome.fitness for genome in parents[species_id])
            self.total_fitness         += species_fitness[species_id]

        # The best genome of every species seeds the new generation
        for species_id, elite in elites.items():
            self.species[species_id] = Species(species_id, elite)

        # Each species breeds its share of the next generation
        for species_id in elites:
            num_offspring = self._offspring_allocation(species_fitness[species_id], len(elites))
            spec = self.species[species_id]

            iteration = 0
            while len(spec) < num_offspring and iteration < num_offspring:
                child = self._breed(parents[species_id], species_fitness[species_id], tracker)
                self.speciate(child, self.species)
                iteration += 1

        logger.debug("Reproduction: {} species -> {} species, {} genomes, total fitness {:.4f}",
                     len(self.previous_species), len(self.species), len(self), self.total_fitness)

    def _offspring_allocation(self, species_fitness: float, num_species: int) -> int:
        """
        Number of genomes a species should have in the next generation (up to
        roundoff, so the population may end up one genome larger or smaller).
        """
        if self.total_fitness > 0:
            share = species_fitness / self.total_fitness * self.size
        else:
            share = self.size / num_species
        # round half up, not to even
        return int(math.floor(share + 0.5))

    def _breed(self, parents: list[Genome], total_fitness: float, tracker: InnovationTracker) -> Genome:
        """
        Create one child from two parents chosen by fitness-proportionate selection.
        """
        parent1 = proportionate_selection(parents, total_fitness)
        parent2 = proportionate_selection(parents, total_fitness)
        if parent1.fitness > parent2.fitness:
            child = parent1.crossover(parent2)
        else:
            child = parent2.crossover(parent1)

        # perform mutations on the child based on predetermined probabilities
        if random.random() < self._config.weight_mutation_prob:
            child.mutate_connection_weights()
        if random.random() < self._config.node_add_probability:
            child.add_node_mutation(tracker)
        if random.random() < self._config.connection_add_probability:
            child.add_connection_mutation(tracker)
        return child

    def get_fittest_genome(self) -> Genome | None:
        """
        Find and return the genome with the highest fitness in the population.

        Returns:
            The genome with the highest fitness value, or None if population is empty
        """
        genomes = self.genomes
        if not genomes:
            return None
        return max(genomes, key=lambda genome: genome.fitness)

    def __len__(self):
        return sum(len(spec) for spec in self.species.values())

    def __str__(self):
        return '\n'.join(f"species {spec.id}: {len(spec)} genomes" for spec in self.species.values())
