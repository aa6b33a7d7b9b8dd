"""
NEAT Trial Module

This module defines the abstract base class for NEAT trials with built-in
support for CPU-based parallelization using joblib.

A trial represents one independent run of the NEAT algorithm, evolving a
population through generations until a solution is found or the maximum
number of generations is reached.
"""

from abc        import ABC, abstractmethod
from joblib     import Parallel, delayed
from loguru     import logger
from statistics import mean

from neatevo.genotype  import Genome, InnovationTracker
from neatevo.phenotype import Network, build_phenotype
from neatevo.pool      import Population
from neatevo.run.config import Config

class Trial(ABC):
    """
    Abstract base class for implementing a NEAT trial.

    A trial represents one independent run of the NEAT algorithm, evolving a
    population through generations until a solution is found or the maximum
    number of generations is reached. Each trial owns its InnovationTracker.

    Each generation:
      1. every genome is expressed as a Network and evaluated (_evaluate_fitness)
      2. progress is reported and the termination condition is checked
      3. the population performs explicit fitness sharing and reproduces

    Subclasses must implement:
    - _evaluate_fitness(network): Evaluate the fitness of a single network
    - _report_progress(): Display progress after each generation
    - _final_report(): Display final results

    Subclasses can override:
    - _reset(): Reset trial-specific state (must call super()._reset())
    - _terminate(): Custom termination logic (default: max generations + fitness threshold)

    Public Methods:
        run(): Execute a complete NEAT trial

    Parallelization of fitness evaluation:
        num_jobs=1:  Serial evaluation (no parallelization, deterministic for a fixed seed)
        num_jobs>1:  Use specified number of parallel processes
        num_jobs=-1: Use all available CPU cores
    """

    def __init__(self, config: Config, suppress_output: bool = False):
        """
        Initialize the trial.

        Parameters:
            config:          Configuration parameters
            suppress_output: If True, suppress progress and final reports
        """
        self._config            : Config            = config
        self._generation_counter: int               = 0
        self._population        : Population | None = None
        self._tracker           : InnovationTracker = InnovationTracker()
        self._suppress_output   : bool              = suppress_output
        self.failed             : bool              = True

    def run(self, num_jobs: int = 1):
        """
        Run the trial.

        Resets the trial state and runs the evolutionary
        algorithm until the terminate condition is met.

        Parameters:
            num_jobs: Number of parallel processes for fitness evaluation
                      1 = serial (no parallelization)
                     -1 = use all available CPU cores
                     >1 = use specified number of processes
        """
        # Reset the trial state before starting a new run
        self._reset()

        # Create the initial population
        self._population = Population(self._config.num_inputs,
                                      self._config.num_outputs,
                                      self._config.population_size,
                                      self._tracker,
                                      self._config)

        # Evaluate the fitness of the initial population
        self._evaluate_fitness_all(num_jobs)
        if not self._suppress_output:
            self._report_progress()

        # Evolution loop
        while not self._terminate():
            self._generation_counter += 1

            # The members of the population share fitness, mate and create offspring
            self._population.explicit_fitness_sharing()
            self._population.reproduce(self._tracker)

            # Evaluate the fitness of each genome in the new generation
            self._evaluate_fitness_all(num_jobs)
            if not self._suppress_output:
                self._report_progress()

        logger.info("Trial finished after {} generations ({})",
                    self._generation_counter, "failed" if self.failed else "succeeded")

        # Produce final report
        if not self._suppress_output:
            self._final_report()

    def _reset(self):
        """
        Reset the trial state before starting a new run.

        Subclasses overriding this method should call super()._reset().
        """
        self._tracker            = InnovationTracker()
        self._generation_counter = 0
        self.failed              = True

    def _evaluate(self, genome: Genome) -> float:
        """
        Express a genome as a network and evaluate its fitness.
        """
        return self._evaluate_fitness(build_phenotype(genome, self._config))

    @abstractmethod
    def _evaluate_fitness(self, network: Network) -> float:
        """
        Evaluate and return the fitness of a network.

        This method should test the network on the problem domain and compute
        a fitness score. Higher fitness values indicate better performance and
        higher probability of procreating.

        IMPORTANT: The fitness must be a positive number (or zero).

        Parameters:
            network: The network (built from a genome) to evaluate

        Returns:
            float: Fitness score for the network
        """
        pass

    def _evaluate_fitness_all(self, num_jobs: int):
        """
        Evaluate fitness for all genomes in the population.

        Uses serial or parallel evaluation based on num_jobs:
        - num_jobs=1: Sequential evaluation in single process
        - num_jobs>1 or -1: Parallel evaluation using joblib

        Only fitness values come back from the worker processes;
        genomes are only ever modified in this process.
        """
        genomes = self._population.genomes

        if num_jobs == 1:
            fitness_all = [self._evaluate(genome) for genome in genomes]
        else:
            fitness_all = Parallel(num_jobs)(delayed(self._evaluate)(genome) for genome in genomes)

        for genome, fitness in zip(genomes, fitness_all):
            genome.set_fitness(fitness)

        logger.info("Generation {}: {} genomes in {} species, max fitness {:.4f}",
                    self._generation_counter, len(genomes), self._population.number_of_species,
                    max(fitness_all, default=0.0))

    @abstractmethod
    def _report_progress(self):
        """
        Report trial progress after each generation.

        This method is suppressed by setting 'self._suppress_output' to 'True'.
        """
        pass

    @abstractmethod
    def _final_report(self):
        """
        Produce final report at the end of the trial.

        This method is suppressed by setting 'self._suppress_output' to 'True'.
        """
        pass

    def _terminate(self) -> bool:
        """
        Determine whether the trial should terminate.

        This default implementation stops the trial after a maximum number
        of generations and (optionally) also stops it if a given measure of
        population fitness has reached a given threshold. It is called after
        evaluation and before fitness sharing, so it sees raw fitness values.

        Returns:
            bool: True if the trial should stop, False otherwise
        """
        # Has this trial run for too long?
        terminate = self._generation_counter >= self._config.max_number_generations

        # Check whether the fitness has reached a target threshold
        if self._config.fitness_termination_check:
            genome_fitness = [genome.fitness for genome in self._population.genomes]

            if self._config.fitness_criterion == "max":
                overall_fitness = max(genome_fitness)
            elif self._config.fitness_criterion == "mean":
                overall_fitness = mean(genome_fitness)
            else:
                raise RuntimeError("bad 'fitness_criterion' in configuration file")

            # A measure of population fitness (max, mean, ...) must exceed the threshold
            success   = overall_fitness > self._config.fitness_threshold
            terminate = terminate or success

            if terminate:
                self.failed = not success

        return terminate
