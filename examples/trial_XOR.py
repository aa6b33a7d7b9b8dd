"""
XOR Problem Implementation for NEAT

This module implements the classic XOR (exclusive OR) problem as a benchmark
for the NEAT algorithm. XOR is not linearly separable: solving it requires
at least one hidden node, making it a minimal test case for topology-evolving
algorithms like NEAT.

The XOR Problem:
    Input (0, 0) → Output 0
    Input (0, 1) → Output 1
    Input (1, 0) → Output 1
    Input (1, 1) → Output 0

Fitness Function:
    Fitness = 1 / Σ(output - target)²

    The trial succeeds once the fittest network scores more than the
    threshold from the configuration file (10 by default).

Usage:
    python examples/trial_XOR.py [config_file] [num_jobs]
"""

import sys
from pathlib    import Path
from statistics import mean

from loguru import logger

from neatevo.phenotype  import Network, build_phenotype
from neatevo.run.config import Config
from neatevo.run.trial  import Trial

class Trial_XOR(Trial):
    """
    NEAT trial for solving the XOR (exclusive OR) problem.

    Implemented Methods:
        _evaluate_fitness(network): Test network on all 4 XOR cases
        _report_progress(): Display generation statistics
        _final_report(): Display the fittest network and its XOR truth table
    """

    xor_inputs  = [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]
    xor_outputs = [[0.0],      [1.0],      [1.0],      [0.0]]

    def _evaluate_fitness(self, network: Network) -> float:
        """
        Evaluate network fitness by testing on XOR inputs.

        Returns:
            Inverse of the sum of squared errors over the 4 XOR cases
        """
        error = 0.0
        for inputs, expected_output in zip(self.xor_inputs, self.xor_outputs):
            output = network.feed_forward(inputs)
            error += (output[0] - expected_output[0]) ** 2
        return 1.0 / max(error, 1e-12)

    def _report_progress(self):
        """
        Print a one-line report describing the current generation.
        """
        fitness = [genome.fitness for genome in self._population.genomes]
        print(f"generation {self._generation_counter:4d} - "
              f"num species: {self._population.number_of_species:3d} - "
              f"mean fitness: {mean(fitness):.2f} - max fitness: {max(fitness):.2f}")

    def _final_report(self):
        """
        Display the fittest network and its outputs for all XOR cases.
        """
        fittest = self._population.get_fittest_genome()
        network = build_phenotype(fittest, self._config)

        s  = f"\n{'FAILED' if self.failed else 'SOLVED'} after {self._generation_counter} generations\n"
        s += f"fitness = {fittest.fitness:.4f}\n\n"
        s += str(fittest) + "\n\n"
        s += "input         output   target  error\n"
        s += "------------------------------------\n"
        for inputs, expected_output in zip(self.xor_inputs, self.xor_outputs):
            output = network.feed_forward(inputs)[0]
            s += f"{inputs} -> {output:.4f}    {expected_output[0]}   {abs(output - expected_output[0]):.4f}\n"
        print(s)

if __name__ == "__main__":
    logger.enable("neatevo")

    config_file = sys.argv[1] if len(sys.argv) > 1 else Path(__file__).parent / "config_xor.ini"
    num_jobs    = int(sys.argv[2]) if len(sys.argv) > 2 else 1

    trial = Trial_XOR(Config(str(config_file)))
    trial.run(num_jobs=num_jobs)
