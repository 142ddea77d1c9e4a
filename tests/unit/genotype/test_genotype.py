"""
Unit tests for evonet.genotype.genotype module.
"""

import pytest
import numpy as np

from evonet.exceptions import GenotypeFormatError
from evonet.genotype   import Genotype


# ============================================================================
# Test Genotype Initialization and Access
# ============================================================================

class TestGenotypeInit:
    """Test Genotype.__init__ and parameter access."""

    def test_init_stores_parameters(self):
        genotype = Genotype([1.0, 2.0, 3.0])
        assert genotype.parameter_count == 3
        assert len(genotype) == 3
        assert list(genotype) == [1.0, 2.0, 3.0]

    def test_init_scores_are_zero(self):
        genotype = Genotype([1.0])
        assert genotype.evaluation == 0.0
        assert genotype.fitness == 0.0

    def test_init_copies_parameters(self):
        values = [1.0, 2.0]
        genotype = Genotype(values)
        values[0] = 99.0
        assert genotype[0] == 1.0

    def test_empty_genotype(self):
        genotype = Genotype([])
        assert genotype.parameter_count == 0
        assert list(genotype) == []

    def test_getitem_setitem(self):
        genotype = Genotype([0.0, 0.0])
        genotype[1] = 4.5
        assert genotype[1] == 4.5
        assert isinstance(genotype[1], float)

    @pytest.mark.parametrize("index", [2, 10, -1])
    def test_getitem_out_of_range_raises(self, index):
        genotype = Genotype([0.0, 0.0])
        with pytest.raises(IndexError):
            genotype[index]

    def test_setitem_out_of_range_raises(self):
        genotype = Genotype([0.0, 0.0])
        with pytest.raises(IndexError):
            genotype[2] = 1.0


# ============================================================================
# Test Random Parameters
# ============================================================================

class TestGenotypeRandomParameters:

    def test_set_random_parameters_within_range(self):
        genotype = Genotype([0.0] * 500)
        genotype.set_random_parameters(-1.0, 1.0)
        values = np.array(list(genotype))
        assert np.all(values >= -1.0)
        assert np.all(values < 1.0)

    def test_set_random_parameters_keeps_length(self):
        genotype = Genotype([0.0] * 7)
        genotype.set_random_parameters(2.0, 3.0)
        assert genotype.parameter_count == 7

    def test_set_random_parameters_draws_different_values(self):
        genotype = Genotype([0.0] * 50)
        genotype.set_random_parameters(-1.0, 1.0)
        assert len(set(genotype)) > 1

    def test_set_random_parameters_equal_bounds(self):
        genotype = Genotype([0.0] * 3)
        genotype.set_random_parameters(0.5, 0.5)
        assert list(genotype) == [0.5, 0.5, 0.5]

    def test_set_random_parameters_min_greater_than_max_raises(self):
        genotype = Genotype([0.0] * 3)
        with pytest.raises(ValueError, match="Minimum value may not exceed maximum value"):
            genotype.set_random_parameters(1.0, -1.0)

    def test_generate_random(self):
        genotype = Genotype.generate_random(10, -2.0, 2.0)
        assert genotype.parameter_count == 10
        assert all(-2.0 <= p < 2.0 for p in genotype)

    def test_generate_random_zero_length(self):
        genotype = Genotype.generate_random(0, -1.0, 1.0)
        assert genotype.parameter_count == 0


# ============================================================================
# Test Copy
# ============================================================================

class TestGenotypeCopy:

    def test_copy_of_parameters_equal(self):
        genotype = Genotype([1.0, -2.0])
        np.testing.assert_array_equal(genotype.copy_of_parameters(), [1.0, -2.0])

    def test_copy_of_parameters_independent(self):
        genotype = Genotype([1.0, -2.0])
        copy = genotype.copy_of_parameters()
        copy[0] = 100.0
        assert genotype[0] == 1.0

        genotype[1] = 5.0
        assert copy[1] == -2.0


# ============================================================================
# Test Ordering
# ============================================================================

class TestGenotypeOrdering:

    def test_higher_fitness_sorts_first(self):
        low, high = Genotype([0.0]), Genotype([1.0])
        low.fitness, high.fitness = 0.5, 2.0
        assert high < low
        assert not low < high

    def test_sort_descending_by_fitness(self):
        population = [Genotype([float(i)]) for i in range(4)]
        for genotype, fitness in zip(population, [0.2, 2.2, 0.8, 1.0]):
            genotype.fitness = fitness

        population.sort()

        assert [g.fitness for g in population] == [2.2, 1.0, 0.8, 0.2]

    def test_sort_is_stable_for_equal_fitness(self):
        population = [Genotype([float(i)]) for i in range(4)]
        for genotype in population:
            genotype.fitness = 1.0

        population.sort()

        assert [g[0] for g in population] == [0.0, 1.0, 2.0, 3.0]


# ============================================================================
# Test Serialisation
# ============================================================================

class TestGenotypeSerialisation:

    def test_save_format(self, tmp_path):
        path = tmp_path / "genotype.txt"
        Genotype([1.5, -2.0, 0.25]).save_to_file(path)
        assert path.read_text() == "1.5;-2.0;0.25"

    def test_save_has_no_trailing_separator(self, tmp_path):
        path = tmp_path / "genotype.txt"
        Genotype([1.0, 2.0]).save_to_file(path)
        assert not path.read_text().endswith(';')

    def test_round_trip(self, tmp_path):
        path = tmp_path / "genotype.txt"
        original = Genotype.generate_random(50, -10.0, 10.0)
        original.save_to_file(path)

        loaded = Genotype.load_from_file(path)

        np.testing.assert_array_equal(loaded.copy_of_parameters(), original.copy_of_parameters())

    def test_round_trip_extreme_values(self, tmp_path):
        path = tmp_path / "genotype.txt"
        values = [1e-300, -1e300, 0.1, 1.0 / 3.0, -0.0]
        Genotype(values).save_to_file(path)
        assert list(Genotype.load_from_file(path)) == values

    def test_load_accepts_str_path(self, tmp_path):
        path = tmp_path / "genotype.txt"
        path.write_text("1;2;3")
        assert list(Genotype.load_from_file(str(path))) == [1.0, 2.0, 3.0]

    def test_load_resets_scores(self, tmp_path):
        path = tmp_path / "genotype.txt"
        genotype = Genotype([1.0])
        genotype.fitness = 3.0
        genotype.save_to_file(path)
        loaded = Genotype.load_from_file(path)
        assert loaded.fitness == 0.0
        assert loaded.evaluation == 0.0

    def test_round_trip_empty_genotype(self, tmp_path):
        path = tmp_path / "genotype.txt"
        Genotype.generate_random(0, -1.0, 1.0).save_to_file(path)

        loaded = Genotype.load_from_file(path)

        assert path.read_text() == ""
        assert loaded.parameter_count == 0

    @pytest.mark.parametrize("content", ["1.0;abc;2.0", "1.0;;2.0", "1.0;2.0;", ";", "1,5"])
    def test_load_malformed_raises(self, tmp_path, content):
        path = tmp_path / "genotype.txt"
        path.write_text(content)
        with pytest.raises(GenotypeFormatError):
            Genotype.load_from_file(path)

    def test_format_error_is_value_error(self, tmp_path):
        path = tmp_path / "genotype.txt"
        path.write_text("x")
        with pytest.raises(ValueError, match="valid genotype serialisation"):
            Genotype.load_from_file(path)

    def test_load_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Genotype.load_from_file(tmp_path / "missing.txt")
