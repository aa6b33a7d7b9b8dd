"""
NEAT Configuration Module

This module implements the Config class, which holds every tunable parameter
of the NEAT algorithm. Parameters are read from an INI file; any parameter
missing from the file (or every parameter, when no file is given) takes its
default value, which reproduces the canonical behaviour of the algorithm.

Classes:
    Config: Hyperparameters of the NEAT algorithm
"""

import configparser
import os

class Config:
    """
    Hyperparameters of the NEAT algorithm.

    Example INI file (every key is optional):

        [POPULATION_INIT]
        population_size = 150
        num_inputs      = 2
        num_outputs     = 1

        [SPECIATION]
        compatibility_threshold = 3.0

        [TERMINATION]
        fitness_threshold = 10.0
    """

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or from the default values.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, every parameter takes its default value.

        Raises:
            FileNotFoundError: If 'config_file' does not exist
            ValueError:        If a value cannot be parsed as the expected type
        """
        parser = configparser.ConfigParser()

        if config_file is not None:
            if not os.path.exists(config_file):
                raise FileNotFoundError(f"Configuration file '{config_file}' not found")
            parser.read(config_file)

        # Helper function to safely parse values
        def get_value(section, key, value_type, default):
            try:
                raw_value = parser.get(section, key)
            except (configparser.NoSectionError, configparser.NoOptionError):
                return default
            if raw_value.lower() == 'none':
                return None
            if value_type == int:
                return parser.getint(section, key)
            elif value_type == float:
                return parser.getfloat(section, key)
            elif value_type == bool:
                return parser.getboolean(section, key)
            return raw_value

        # [POPULATION_INIT]

        # The number of genomes in each generation.
        self.population_size = get_value('POPULATION_INIT', 'population_size', int, 150)

        # The number of input nodes, through which the network receives inputs.
        self.num_inputs = get_value('POPULATION_INIT', 'num_inputs', int, 2)

        # The number of output nodes, to which the network delivers outputs.
        self.num_outputs = get_value('POPULATION_INIT', 'num_outputs', int, 1)

        # The mean and standard deviation of the normal distribution used to
        # initialize the weights of the input -> output connections of a new population.
        self.weight_init_mean  = get_value('POPULATION_INIT', 'weight_init_mean' , float, 0.0)
        self.weight_init_stdev = get_value('POPULATION_INIT', 'weight_init_stdev', float, 1.0)

        # [SPECIATION]

        # Genomes whose compatibility distance to a species representative
        # is strictly less than this threshold join that species.
        self.compatibility_threshold = get_value('SPECIATION', 'compatibility_threshold', float, 3.0)

        # The coefficient for the count of non-matching (excess and disjoint) genes.
        self.distance_extra_coeff = get_value('SPECIATION', 'distance_extra_coeff', float, 1.0)

        # The coefficient for the average weight difference of matching genes.
        self.distance_weight_coeff = get_value('SPECIATION', 'distance_weight_coeff', float, 0.4)

        # [REPRODUCTION]

        # Within each species, genomes below this percentile of fitness are
        # not allowed to reproduce.
        self.kill_off_percentile = get_value('REPRODUCTION', 'kill_off_percentile', float, 80.0)

        # The probability that an offspring has its weights and biases mutated.
        self.weight_mutation_prob = get_value('REPRODUCTION', 'weight_mutation_prob', float, 0.8)

        # The probability that an offspring gets a new node (splitting a connection).
        self.node_add_probability = get_value('REPRODUCTION', 'node_add_probability', float, 0.03)

        # The probability that an offspring gets a new connection.
        self.connection_add_probability = get_value('REPRODUCTION', 'connection_add_probability', float, 0.05)

        # The probability that a disabled connection gene is re-enabled when
        # it is inherited during crossover.
        self.connection_enable_prob = get_value('REPRODUCTION', 'connection_enable_prob', float, 0.25)

        # [NODE]

        # The mean and standard deviation of the normal distribution
        # used to initialize the 'bias' of new non-input nodes.
        self.bias_init_mean  = get_value('NODE', 'bias_init_mean' , float, 0.0)
        self.bias_init_stdev = get_value('NODE', 'bias_init_stdev', float, 1.0)

        # Biases are clamped to [-max_bias, +max_bias].
        self.max_bias = get_value('NODE', 'max_bias', float, 100.0)

        # The probability that a weight mutation perturbs the bias of a given node.
        self.bias_perturb_prob = get_value('NODE', 'bias_perturb_prob', float, 0.9)

        # The standard deviation of the zero-centered normal distribution
        # from which a bias perturbation is drawn.
        self.bias_perturb_strength = get_value('NODE', 'bias_perturb_strength', float, 1.0)

        # [CONNECTION]

        # Weights are clamped to [-max_weight, +max_weight].
        self.max_weight = get_value('CONNECTION', 'max_weight', float, 100000.0)

        # The probability that a weight mutation perturbs the weight of a given connection.
        self.weight_perturb_prob = get_value('CONNECTION', 'weight_perturb_prob', float, 0.9)

        # The standard deviation of the zero-centered normal distribution
        # from which a weight perturbation is drawn.
        self.weight_perturb_strength = get_value('CONNECTION', 'weight_perturb_strength', float, 1.0)

        # Connections created by mutation draw their weight uniformly
        # from [-new_weight_range, +new_weight_range].
        self.new_weight_range = get_value('CONNECTION', 'new_weight_range', float, 10.0)

        # How many node pairs the add-connection mutation tries before giving up.
        self.max_connection_attempts = get_value('CONNECTION', 'max_connection_attempts', int, 10)

        # [NETWORK]

        # The maximum number of relaxation rounds of a forward pass.
        self.max_iterations = get_value('NETWORK', 'max_iterations', int, 10)

        # The slope of the steepened sigmoid: 1 / (1 + exp(-slope * x)).
        self.sigmoid_slope = get_value('NETWORK', 'sigmoid_slope', float, 4.9)

        # [TERMINATION]

        # The number of generations after which to stop the run.
        self.max_number_generations = get_value('TERMINATION', 'max_number_generations', int, 150)

        # Whether to use the fitness of the most recent
        # generation as a criterion for stopping the run.
        self.fitness_termination_check = get_value('TERMINATION', 'fitness_termination_check', bool, True)

        # The function used to compute the termination criterion.
        # Allowed values:
        #   "mean" calculate the mean fitness across the entire population
        #   "max"  get the fitness of the fittest genome in the population
        self.fitness_criterion = get_value('TERMINATION', 'fitness_criterion', str, "max")

        # The fitness value which when exceeded causes the run to end.
        self.fitness_threshold = get_value('TERMINATION', 'fitness_threshold', float, 10.0)
