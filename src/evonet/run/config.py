import configparser
import os

from evonet.activations import activations
from evonet.exceptions  import ConfigurationError

SELECTION_OPTIONS     = ('elitist', 'remainder_stochastic')
RECOMBINATION_OPTIONS = ('default', 'random')
MUTATION_OPTIONS      = ('all', 'all_but_best_two')

class Config:

    @staticmethod
    def _parse_topology(raw_topology):
        """
        Parse the network topology from a comma-separated string to a list of ints.

        Parameters:
            raw_topology: Either a comma-separated string ("5,4,3,2") or already a sequence

        Returns:
            List of layer sizes, input layer first
        """
        if raw_topology is None:
            return None

        if isinstance(raw_topology, str):
            try:
                topology = [int(size.strip()) for size in raw_topology.split(',')]
            except ValueError:
                raise ConfigurationError(f"Invalid topology '{raw_topology}'") from None
        else:
            topology = [int(size) for size in raw_topology]

        if len(topology) < 2 or any(size < 1 for size in topology):
            raise ConfigurationError(f"Invalid topology {topology}: need at least two positive layer sizes")
        return topology

    @staticmethod
    def _check_option(name, value, allowed):
        if value not in allowed:
            raise ConfigurationError(f"Invalid {name} '{value}'. Allowed values: {', '.join(allowed)}")
        return value

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create a Config with default values.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, creates a Config holding the defaults, for manual attribute setting.
        """

        # Default config for testing/manual setup
        if config_file is None:
            self.population_size = 30
            self.topology        = [5, 4, 3, 2]
            self.activation      = 'softsign'

            self.init_param_min = -1.0
            self.init_param_max =  1.0

            self.selection       = 'remainder_stochastic'
            self.recombination   = 'random'
            self.mutation        = 'all_but_best_two'
            self.elitist_count   = 3
            self.sort_population = True

            self.swap_prob = 0.6

            self.mutation_perc   = 1.0
            self.mutation_prob   = 0.3
            self.mutation_amount = 2.0

            self.max_number_generations = 100

            self.save_statistics        = False
            self.statistics_dir         = '.'
            self.save_first_n_genotypes = 0
            return

        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file '{config_file}' not found")

        parser = configparser.ConfigParser()
        parser.read(config_file)

        # Sentinel for missing default values
        _NO_DEFAULT = object()

        # Helper function to safely parse values
        def get_value(section, key, value_type, default=_NO_DEFAULT):
            try:
                raw_value = parser.get(section, key)
                if raw_value.lower() == 'none':
                    return None
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == float:
                    return parser.getfloat(section, key)
                elif value_type == bool:
                    return parser.getboolean(section, key)
                elif value_type == str:
                    return raw_value
            except (configparser.NoSectionError, configparser.NoOptionError):
                if default is not _NO_DEFAULT:
                    return default
                raise

        # [POPULATION]

        # The number of genotypes in each generation.
        self.population_size = get_value('POPULATION', 'population_size', int)

        # The layer sizes of the feed-forward networks genotypes are decoded into,
        # input layer first. The genotype length follows from it.
        self.topology = get_value('POPULATION', 'topology', str)

        # The activation function of every network layer (see 'basic_activations.py').
        # Use "None" to output raw weighted sums.
        self.activation = get_value('POPULATION', 'activation', str, default='softsign')

        # [INITIALISATION]

        # The range from which the parameters of the initial population are drawn uniformly.
        self.init_param_min = get_value('INITIALISATION', 'init_param_min', float, default=-1.0)
        self.init_param_max = get_value('INITIALISATION', 'init_param_max', float, default=1.0)

        # [OPERATORS]

        # The selection operator.
        # Allowed values:
        #   "elitist"              - keep the 'elitist_count' best genotypes
        #   "remainder_stochastic" - remainder stochastic sampling, proportional to fitness
        self.selection = get_value('OPERATORS', 'selection', str, default='remainder_stochastic')

        # The recombination operator.
        # Allowed values:
        #   "default" - cross the best two genotypes of the intermediate population
        #   "random"  - keep the best two, then cross random pairs
        self.recombination = get_value('OPERATORS', 'recombination', str, default='random')

        # The mutation operator.
        # Allowed values:
        #   "all"              - every genotype may be mutated
        #   "all_but_best_two" - the first two genotypes of the new population are left untouched
        self.mutation = get_value('OPERATORS', 'mutation', str, default='all_but_best_two')

        # The number of genotypes kept by elitist selection.
        self.elitist_count = get_value('OPERATORS', 'elitist_count', int, default=3)

        # Whether to sort the population by fitness after fitness calculation.
        # Both selection operators rely on a sorted population.
        self.sort_population = get_value('OPERATORS', 'sort_population', bool, default=True)

        # [CROSSOVER]

        # The probability that a parameter is swapped between the offspring during crossover.
        self.swap_prob = get_value('CROSSOVER', 'swap_prob', float, default=0.6)

        # [MUTATION]

        # The fraction of genotypes of a new population that are offered to mutation.
        self.mutation_perc = get_value('MUTATION', 'mutation_perc', float, default=1.0)

        # The probability that a parameter of a mutated genotype is perturbed.
        self.mutation_prob = get_value('MUTATION', 'mutation_prob', float, default=0.3)

        # Perturbations are drawn uniformly from [-mutation_amount, mutation_amount].
        self.mutation_amount = get_value('MUTATION', 'mutation_amount', float, default=2.0)

        # [TERMINATION]

        # The number of generations after which to stop the run.
        # Use 0 to never terminate (the run is then bounded by the caller).
        self.max_number_generations = get_value('TERMINATION', 'max_number_generations', int, default=0)

        # [STATISTICS]

        # Whether to write the best evaluation of each generation to a statistics file.
        self.save_statistics = get_value('STATISTICS', 'save_statistics', bool, default=False)

        # The directory in which statistics files and saved genotypes are written.
        self.statistics_dir = get_value('STATISTICS', 'statistics_dir', str, default='.')

        # How many of the first genotypes to complete the task (evaluation >= 1) are saved to file.
        self.save_first_n_genotypes = get_value('STATISTICS', 'save_first_n_genotypes', int, default=0)

    def __setattr__(self, name, value):
        """
        Override 'setattr' to validate values as they are set, so that a Config
        adjusted by hand is checked the same way as one read from a file.
        """
        if name == 'topology':
            value = self._parse_topology(value)
        elif name == 'activation':
            if value is not None and value.lower() != 'none' and value not in activations:
                raise ConfigurationError(f"Invalid activation function '{value}'")
        elif name == 'selection':
            value = self._check_option(name, value, SELECTION_OPTIONS)
        elif name == 'recombination':
            value = self._check_option(name, value, RECOMBINATION_OPTIONS)
        elif name == 'mutation':
            value = self._check_option(name, value, MUTATION_OPTIONS)
        super().__setattr__(name, value)
