"""
Tests for the genetic operators

Crossover and deletion are random; their acceptance criterion is the
population-level behaviour (pairing rate close to the crossover probability,
every deletion removing exactly one aligned block), checked here on large
seeded samples.
"""

import unittest
from collections import Counter

import numpy as np

from bitga.genetic import (
    Individual, Population,
    ProportionalSelection, TwoPointCrossover, BitFlipMutation, BlockInsertion, BlockDeletion
)
from bitga.utils import create_rng


def constant_fitness(value):
    return lambda individual, population, index: value


def bits_of(population):
    return [individual.to_list() for individual in population]


class TestProportionalSelection(unittest.TestCase):
    """Fitness-proportionate reproduction."""

    def setUp(self):
        self.rng = create_rng(42)
        self.population = Population.random(20, 8, self.rng)

    def test_unit_fitness_keeps_size_and_order(self):
        offspring = ProportionalSelection(constant_fitness(1.0)).reproduce(self.population, self.rng)
        self.assertEqual(len(offspring), 20)
        self.assertEqual(bits_of(offspring), bits_of(self.population))

    def test_integer_fitness_gives_exact_copies(self):
        offspring = ProportionalSelection(constant_fitness(3)).reproduce(self.population, self.rng)
        self.assertEqual(len(offspring), 60)
        self.assertEqual(offspring[0], self.population[0])
        self.assertEqual(offspring[2], self.population[0])
        self.assertEqual(offspring[3], self.population[1])

    def test_zero_fitness_empties_population(self):
        offspring = ProportionalSelection(constant_fitness(0.0)).reproduce(self.population, self.rng)
        self.assertEqual(len(offspring), 0)

    def test_fractional_fitness_is_rounded_stochastically(self):
        population = Population.random(4000, 4, self.rng)
        offspring = ProportionalSelection(constant_fitness(1.25)).reproduce(population, self.rng)
        # Expected 5000, standard deviation about 27
        self.assertAlmostEqual(len(offspring), 5000, delta=200)

    def test_copy_count_follows_each_fitness(self):
        population = Population.from_bits([[0, 0], [1, 1], [0, 1]])
        scores = {0: 0.0, 1: 2.0, 2: 1.0}
        selection = ProportionalSelection(lambda ind, pop, i: scores[i])
        offspring = selection.reproduce(population, self.rng)
        self.assertEqual(bits_of(offspring), [[1, 1], [1, 1], [0, 1]])

    def test_oracle_receives_individual_population_and_index(self):
        calls = []

        def fitness(individual, population, index):
            calls.append((individual, population, index))
            return 1.0

        ProportionalSelection(fitness).reproduce(self.population, self.rng)
        self.assertEqual([index for _, _, index in calls], list(range(20)))
        for individual, population, index in calls:
            self.assertIs(population, self.population)
            self.assertIs(individual, self.population[index])

    def test_offspring_are_not_aliased(self):
        offspring = ProportionalSelection(constant_fitness(2.0)).reproduce(self.population, self.rng)
        self.assertIsNot(offspring[0], offspring[1])
        self.assertIsNot(offspring[0], self.population[0])
        offspring[0].chromosome[:] = 1 - offspring[0].chromosome
        self.assertNotEqual(offspring[0], offspring[1])
        self.assertEqual(offspring[1], self.population[0])


class RecordingCrossover(TwoPointCrossover):
    """Counts the individuals passed to crossover_pair"""

    def __init__(self, crossover_rate):
        super().__init__(crossover_rate)
        self.paired = []

    def crossover_pair(self, parent1, parent2, rng):
        self.paired.extend([parent1, parent2])
        return super().crossover_pair(parent1, parent2, rng)


class TestTwoPointCrossover(unittest.TestCase):
    """Two-point segment-swap crossover."""

    def setUp(self):
        self.rng = create_rng(7)

    def test_pair_conserves_bits_position_by_position(self):
        crossover = TwoPointCrossover(1.0)
        for _ in range(200):
            a = Individual.random(16, self.rng)
            b = Individual.random(16, self.rng)
            child_a, child_b = crossover.crossover_pair(a, b, self.rng)
            self.assertEqual(len(child_a), 16)
            self.assertEqual(len(child_b), 16)
            # Each position keeps the same pair of bits
            np.testing.assert_array_equal(
                np.sort(np.stack([child_a.chromosome, child_b.chromosome]), axis=0),
                np.sort(np.stack([a.chromosome, b.chromosome]), axis=0),
            )
            self.assertEqual(child_a.num_ones + child_b.num_ones, a.num_ones + b.num_ones)

    def test_pair_swaps_one_contiguous_interior_segment(self):
        crossover = TwoPointCrossover(1.0)
        zeros = Individual([0] * 12)
        ones = Individual([1] * 12)
        for _ in range(100):
            child_a, child_b = crossover.crossover_pair(zeros, ones, self.rng)
            swapped = np.flatnonzero(child_a.chromosome)
            # At least one bit, never from a cut at the end, and contiguous
            self.assertGreater(len(swapped), 0)
            self.assertLess(swapped[-1], 11)
            self.assertEqual(swapped[-1] - swapped[0] + 1, len(swapped))
            np.testing.assert_array_equal(child_b.chromosome, 1 - child_a.chromosome)

    def test_pair_keeps_tail_of_longer_parent(self):
        crossover = TwoPointCrossover(1.0)
        short = Individual([1] * 6)
        long = Individual([0] * 6 + [1, 0, 1, 1])
        for _ in range(50):
            child_short, child_long = crossover.crossover_pair(short, long, self.rng)
            self.assertEqual(len(child_short), 6)
            self.assertEqual(len(child_long), 10)
            self.assertEqual(child_long.to_list()[6:], [1, 0, 1, 1])

    def test_pair_too_short_for_two_cut_points(self):
        crossover = TwoPointCrossover(1.0)
        a, b = Individual([1]), Individual([0, 0, 0])
        child_a, child_b = crossover.crossover_pair(a, b, self.rng)
        self.assertEqual(child_a, a)
        self.assertEqual(child_b, b)
        self.assertIsNot(child_a, a)

    def test_zero_rate_leaves_population_unchanged(self):
        population = Population.random(30, 10, self.rng)
        offspring = TwoPointCrossover(0.0).crossover(population, self.rng)
        self.assertEqual(bits_of(offspring), bits_of(population))
        self.assertIsNot(offspring[0], population[0])

    def test_population_bits_are_conserved_per_position(self):
        population = Population.random(50, 12, self.rng)
        offspring = TwoPointCrossover(1.0).crossover(population, self.rng)
        self.assertEqual(len(offspring), 50)
        before = np.stack([individual.chromosome for individual in population]).sum(axis=0)
        after = np.stack([individual.chromosome for individual in offspring]).sum(axis=0)
        np.testing.assert_array_equal(before, after)

    def test_offspring_take_parent_slots(self):
        population = Population.from_bits([[0] * 8, [1] * 8])
        offspring = TwoPointCrossover(1.0).crossover(population, self.rng)
        # The last bit lies past the second cut point, so each slot keeps its own
        self.assertEqual(offspring[0][7], 0)
        self.assertEqual(offspring[1][7], 1)
        self.assertEqual(offspring[0].num_ones + offspring[1].num_ones, 8)

    def test_single_candidate_is_untouched(self):
        population = Population.from_bits([[0, 1, 0, 1, 1]])
        crossover = RecordingCrossover(1.0)
        offspring = crossover.crossover(population, self.rng)
        self.assertEqual(crossover.paired, [])
        self.assertEqual(bits_of(offspring), bits_of(population))

    def test_every_individual_pairs_at_most_once(self):
        population = Population.random(101, 8, self.rng)
        crossover = RecordingCrossover(1.0)
        crossover.crossover(population, self.rng)
        ids = [id(individual) for individual in crossover.paired]
        self.assertEqual(len(ids), 100)
        self.assertEqual(len(set(ids)), 100)

    def test_pairing_rate_matches_crossover_probability(self):
        population = Population.random(4000, 8, self.rng)
        crossover = RecordingCrossover(0.6)
        crossover.crossover(population, self.rng)
        rate = len(crossover.paired) / len(population)
        self.assertAlmostEqual(rate, 0.6, delta=0.05)


class TestBitFlipMutation(unittest.TestCase):
    """Per-bit flip mutation."""

    def setUp(self):
        self.rng = create_rng(3)
        self.population = Population.from_bits([[0, 1, 1, 0, 1], [1, 1, 1], []])

    def test_zero_rate_changes_nothing(self):
        mutated = BitFlipMutation(0.0).mutate(self.population, self.rng)
        self.assertEqual(bits_of(mutated), bits_of(self.population))

    def test_unit_rate_flips_every_bit(self):
        mutated = BitFlipMutation(1.0).mutate(self.population, self.rng)
        self.assertEqual(bits_of(mutated), [[1, 0, 0, 1, 0], [0, 0, 0], []])
        # Input untouched
        self.assertEqual(self.population[0].to_list(), [0, 1, 1, 0, 1])

    def test_flip_rate_is_per_bit(self):
        population = Population.from_bits([[0] * 10000])
        mutated = BitFlipMutation(0.05).mutate(population, self.rng)
        self.assertAlmostEqual(mutated[0].num_ones / 10000, 0.05, delta=0.01)
        self.assertTrue(set(mutated[0].to_list()) <= {0, 1})


class TestStructuralOperators(unittest.TestCase):
    """Block insertion and deletion for variable-length chromosomes."""

    def setUp(self):
        self.rng = create_rng(11)

    def test_insertion_appends_one_block(self):
        population = Population.random(20, 8, self.rng)
        grown = BlockInsertion(1.0, 3).insert(population, self.rng)
        for original, individual in zip(population, grown):
            self.assertEqual(len(individual), 11)
            self.assertEqual(individual.to_list()[:8], original.to_list())
            self.assertTrue(set(individual.to_list()) <= {0, 1})

    def test_insertion_zero_rate(self):
        population = Population.random(20, 8, self.rng)
        grown = BlockInsertion(0.0, 3).insert(population, self.rng)
        self.assertEqual(bits_of(grown), bits_of(population))

    def test_deletion_removes_exactly_one_block(self):
        population = Population.random(50, 12, self.rng)
        shrunk = BlockDeletion(1.0, 4).delete(population, self.rng)
        for individual in shrunk:
            self.assertEqual(len(individual), 8)

    def test_deletion_is_block_aligned(self):
        blocks = [[0, 0], [1, 1], [0, 1]]
        population = Population.from_bits([sum(blocks, [])] * 3000)
        shrunk = BlockDeletion(1.0, 2).delete(population, self.rng)
        expected = {
            tuple(sum(blocks[:k] + blocks[k + 1:], [])): k for k in range(3)
        }
        removed = Counter(expected[tuple(individual.to_list())] for individual in shrunk)
        # Each block position is chosen uniformly
        for k in range(3):
            self.assertAlmostEqual(removed[k] / 3000, 1 / 3, delta=0.05)

    def test_deletion_skips_individuals_shorter_than_a_block(self):
        population = Population.from_bits([[1, 0], [], [1, 1, 1, 0, 0]])
        shrunk = BlockDeletion(1.0, 3).delete(population, self.rng)
        self.assertEqual(shrunk[0].to_list(), [1, 0])
        self.assertEqual(len(shrunk[1]), 0)
        self.assertEqual(len(shrunk[2]), 2)

    def test_deletion_zero_rate(self):
        population = Population.random(20, 8, self.rng)
        shrunk = BlockDeletion(0.0, 4).delete(population, self.rng)
        self.assertEqual(bits_of(shrunk), bits_of(population))


if __name__ == '__main__':
    unittest.main()
