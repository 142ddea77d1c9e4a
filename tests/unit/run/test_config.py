"""
Unit tests for Config class.
"""

import pytest
import configparser
import os

from evonet.exceptions import ConfigurationError
from evonet.run.config import Config


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def test_config_dir():
    """Return the directory containing test configuration files."""
    return os.path.join(os.path.dirname(__file__), 'test_configs')


# ============================================================================
# Test Config Initialization
# ============================================================================

class TestConfigInit:
    """Test Config initialization."""

    def test_init_without_file_uses_defaults(self):
        """Test that Config() without file holds the default values."""
        config = Config()

        assert config.population_size == 30
        assert config.topology == [5, 4, 3, 2]
        assert config.activation == 'softsign'
        assert (config.init_param_min, config.init_param_max) == (-1.0, 1.0)
        assert config.selection == 'remainder_stochastic'
        assert config.recombination == 'random'
        assert config.mutation == 'all_but_best_two'
        assert config.elitist_count == 3
        assert config.sort_population is True
        assert config.swap_prob == 0.6
        assert (config.mutation_perc, config.mutation_prob, config.mutation_amount) == (1.0, 0.3, 2.0)
        assert config.max_number_generations == 100
        assert config.save_statistics is False
        assert config.save_first_n_genotypes == 0

    def test_init_with_nonexistent_file_raises_error(self):
        """Test that Config with nonexistent file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Configuration file .* not found"):
            Config('nonexistent_file.ini')

    def test_init_with_minimal_config(self, test_config_dir):
        """Test that a file with only the required keys gets the defaults."""
        config = Config(os.path.join(test_config_dir, 'minimal.ini'))

        assert config.population_size == 20
        assert config.topology == [2, 3, 1]
        assert config.activation == 'softsign'
        assert config.selection == 'remainder_stochastic'
        assert config.recombination == 'random'
        assert config.mutation == 'all_but_best_two'
        assert config.swap_prob == 0.6
        assert config.mutation_amount == 2.0
        assert config.max_number_generations == 0
        assert config.statistics_dir == '.'

    def test_missing_required_key_raises(self, tmp_path):
        """Test that a missing population size is reported."""
        config_file = tmp_path / "bad.ini"
        config_file.write_text("[POPULATION]\ntopology = 2,1\n")

        with pytest.raises(configparser.NoOptionError):
            Config(str(config_file))


# ============================================================================
# Test Config File Sections
# ============================================================================

class TestConfigSections:
    """Test parsing of every section of a complete file."""

    @pytest.fixture
    def config(self, test_config_dir):
        return Config(os.path.join(test_config_dir, 'full.ini'))

    def test_population(self, config):
        assert config.population_size == 50
        assert config.topology == [4, 6, 2]
        assert config.activation == 'tanh'

    def test_initialisation(self, config):
        assert config.init_param_min == -0.5
        assert config.init_param_max == 0.5

    def test_operators(self, config):
        assert config.selection == 'elitist'
        assert config.recombination == 'default'
        assert config.mutation == 'all'
        assert config.elitist_count == 5
        assert config.sort_population is False

    def test_crossover(self, config):
        assert config.swap_prob == 0.4

    def test_mutation(self, config):
        assert config.mutation_perc == 0.8
        assert config.mutation_prob == 0.1
        assert config.mutation_amount == 0.5

    def test_termination(self, config):
        assert config.max_number_generations == 250

    def test_statistics(self, config):
        assert config.save_statistics is True
        assert config.statistics_dir == 'stats'
        assert config.save_first_n_genotypes == 3

    def test_none_activation(self, test_config_dir):
        config = Config(os.path.join(test_config_dir, 'no_activation.ini'))
        assert config.activation is None

    def test_invalid_option_in_file_raises(self, test_config_dir):
        with pytest.raises(ConfigurationError, match="Invalid selection 'tournament'"):
            Config(os.path.join(test_config_dir, 'invalid_selection.ini'))


# ============================================================================
# Test Config Validation
# ============================================================================

class TestConfigValidation:
    """Test that values are validated when set by hand."""

    def test_topology_from_string(self):
        config = Config()
        config.topology = "3, 2"
        assert config.topology == [3, 2]

    def test_topology_from_sequence(self):
        config = Config()
        config.topology = (1, 2, 3)
        assert config.topology == [1, 2, 3]

    @pytest.mark.parametrize("topology", ["", "2", "2,x", "2,0,1", [3], [2, -1]])
    def test_invalid_topology_raises(self, topology):
        config = Config()
        with pytest.raises(ConfigurationError):
            config.topology = topology

    @pytest.mark.parametrize("activation", ['sigmoid', 'tanh', 'softsign', 'identity', 'none', None])
    def test_valid_activation(self, activation):
        config = Config()
        config.activation = activation
        assert config.activation == activation

    def test_invalid_activation_raises(self):
        config = Config()
        with pytest.raises(ConfigurationError, match="Invalid activation function"):
            config.activation = 'relu6'

    @pytest.mark.parametrize("name, value", [
        ('selection',     'roulette'),
        ('recombination', 'uniform'),
        ('mutation',      'none'),
    ])
    def test_invalid_operator_option_raises(self, name, value):
        config = Config()
        with pytest.raises(ConfigurationError, match=f"Invalid {name}"):
            setattr(config, name, value)

    def test_configuration_error_is_value_error(self):
        config = Config()
        with pytest.raises(ValueError):
            config.selection = 'roulette'
