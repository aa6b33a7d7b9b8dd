"""
Unit tests for the Trial base class.

A minimal concrete trial is used to exercise the evolution loop,
the termination conditions and serial/parallel fitness evaluation.
"""

import pytest
from joblib import parallel_backend
from loguru import logger

from neatevo.genotype import InnovationTracker
from neatevo.run.trial import Trial


# ============================================================================
# Helper Trial Class
# ============================================================================

class TrialOutputSum(Trial):
    """Fitness is the sum of the network outputs for an all-ones input."""

    def __init__(self, config, suppress_output=False):
        super().__init__(config, suppress_output)
        self.progress_reports = 0
        self.final_reports    = 0
        self.resets           = 0

    def _reset(self):
        super()._reset()
        self.resets += 1

    def _evaluate_fitness(self, network):
        return sum(network.feed_forward([1.0] * self._config.num_inputs))

    def _report_progress(self):
        self.progress_reports += 1

    def _final_report(self):
        self.final_reports += 1


class TrialConstant(TrialOutputSum):
    """Every network gets the same fitness."""

    def _evaluate_fitness(self, network):
        return 1.0


@pytest.fixture
def small_config(config):
    config.population_size           = 20
    config.max_number_generations    = 3
    config.fitness_termination_check = False
    return config


# ============================================================================
# Test: Evolution loop
# ============================================================================

class TestTrialRun:

    def test_runs_max_generations(self, small_config):
        trial = TrialOutputSum(small_config)
        trial.run()
        assert trial._generation_counter == 3
        assert trial.failed is True
        assert trial.resets == 1
        # one report for the initial population, one per generation
        assert trial.progress_reports == 4
        assert trial.final_reports == 1

    def test_suppress_output(self, small_config):
        trial = TrialOutputSum(small_config, suppress_output=True)
        trial.run()
        assert trial.progress_reports == 0
        assert trial.final_reports == 0

    def test_every_genome_evaluated(self, small_config):
        trial = TrialOutputSum(small_config)
        trial.run()
        for genome in trial._population.genomes:
            assert 0.0 < genome.fitness <= 1.0

    def test_each_run_gets_fresh_tracker(self, small_config):
        trial = TrialOutputSum(small_config, suppress_output=True)
        trial.run()
        first_tracker = trial._tracker
        trial.run()
        assert trial._tracker is not first_tracker
        assert isinstance(trial._tracker, InnovationTracker)
        assert trial.resets == 2

    def test_parallel_evaluation(self, small_config):
        trial = TrialOutputSum(small_config, suppress_output=True)
        with parallel_backend('threading'):
            trial.run(num_jobs=2)
        assert trial._generation_counter == 3
        assert all(genome.fitness > 0.0 for genome in trial._population.genomes)


# ============================================================================
# Test: Termination
# ============================================================================

class TestTrialTerminate:

    def test_fitness_threshold_reached(self, small_config):
        small_config.fitness_termination_check = True
        small_config.fitness_threshold         = 0.0
        trial = TrialOutputSum(small_config)
        trial.run()
        assert trial._generation_counter == 0
        assert trial.failed is False
        assert trial.progress_reports == 1

    def test_fitness_threshold_not_reached(self, small_config):
        small_config.fitness_termination_check = True
        small_config.fitness_threshold         = 2.0
        trial = TrialOutputSum(small_config)
        trial.run()
        assert trial._generation_counter == 3
        assert trial.failed is True

    def test_fitness_equal_to_threshold_does_not_stop(self, small_config):
        """The threshold must be exceeded, not just reached."""
        small_config.fitness_termination_check = True
        small_config.fitness_threshold         = 1.0
        trial = TrialConstant(small_config)
        trial.run()
        assert trial._generation_counter == 3
        assert trial.failed is True

    def test_mean_criterion(self, small_config):
        small_config.fitness_termination_check = True
        small_config.fitness_criterion         = "mean"
        small_config.fitness_threshold         = 0.0
        trial = TrialOutputSum(small_config)
        trial.run()
        assert trial.failed is False

    def test_bad_criterion(self, small_config):
        small_config.fitness_termination_check = True
        small_config.fitness_criterion         = "median"
        with pytest.raises(RuntimeError):
            TrialOutputSum(small_config).run()

    def test_abstract_class(self, config):
        with pytest.raises(TypeError):
            Trial(config)


# ============================================================================
# Test: Logging
# ============================================================================

class TestTrialLogging:

    def test_silent_by_default(self, small_config, capfd):
        """Without an explicit opt-in, a suppressed trial writes nothing at all."""
        records    = []
        handler_id = logger.add(records.append, level="DEBUG")
        try:
            TrialOutputSum(small_config, suppress_output=True).run()
        finally:
            logger.remove(handler_id)

        assert records == []
        captured = capfd.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_records_after_enable(self, small_config):
        records    = []
        handler_id = logger.add(records.append, level="INFO")
        logger.enable("neatevo")
        try:
            TrialOutputSum(small_config, suppress_output=True).run()
        finally:
            logger.disable("neatevo")
            logger.remove(handler_id)

        assert any("Generation 0:" in record for record in records)
        assert any("Trial finished after 3 generations" in record for record in records)
