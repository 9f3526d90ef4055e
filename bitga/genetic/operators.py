"""
Genetic operators for bit-vector evolution

This module contains the genetic operators for the genetic algorithm. Every
operator takes a population and a random generator and returns a new
population; input individuals are never modified or shared with the output.
"""

import logging
import math
import numpy as np
from typing import Callable, Tuple
from .individual import Individual, BIT_DTYPE
from .population import Population

# (individual, population, index) -> non-negative score
FitnessFunction = Callable[[Individual, Population, int], float]

logger = logging.getLogger(__name__)


class ProportionalSelection:
    """Fitness-proportionate reproduction with stochastic rounding of copy counts"""

    def __init__(self, fitness: FitnessFunction):
        self.fitness = fitness

    def reproduce(self, population: Population, rng: np.random.Generator) -> Population:
        """
        Build the mating pool for the next generation

        Each individual is copied floor(f) times, plus once more with
        probability equal to the fractional part of f, so the expected number
        of copies equals its fitness f. The pool size is therefore variable.
        """
        offspring = []
        for i, individual in enumerate(population):
            fitness = self.fitness(individual, population, i)
            guaranteed = math.floor(fitness)
            p_extra = fitness - guaranteed

            copies = guaranteed + (1 if rng.random() < p_extra else 0)
            offspring.extend(individual.copy() for _ in range(copies))

        return Population(offspring)


class TwoPointCrossover:
    """Two-point crossover exchanging an interior segment between random pairs"""

    def __init__(self, crossover_rate: float):
        self.crossover_rate = crossover_rate

    def crossover_pair(self, parent1: Individual, parent2: Individual,
                       rng: np.random.Generator) -> Tuple[Individual, Individual]:
        """Swap the segment between two distinct random cut points"""
        length = min(len(parent1), len(parent2))
        if length < 2:
            # No two distinct cut points exist
            return parent1.copy(), parent2.copy()

        c1, c2 = sorted(int(c) for c in rng.choice(length, size=2, replace=False))

        chromosome1, chromosome2 = parent1.chromosome, parent2.chromosome
        child1 = np.concatenate((chromosome1[:c1], chromosome2[c1:c2], chromosome1[c2:]))
        child2 = np.concatenate((chromosome2[:c1], chromosome1[c1:c2], chromosome2[c2:]))

        return Individual(child1), Individual(child2)

    def crossover(self, population: Population, rng: np.random.Generator) -> Population:
        """
        Pair up crossover candidates and recombine each pair in place

        Every slot joins the candidate pool with probability crossover_rate.
        Candidates are paired uniformly at random without replacement; an odd
        leftover stays as it is. Offspring take their parents' slots.
        """
        offspring = [individual.copy() for individual in population]

        candidates = np.flatnonzero(rng.random(len(population)) < self.crossover_rate)
        candidates = rng.permutation(candidates)

        num_pairs = len(candidates) // 2
        for k in range(num_pairs):
            index1, index2 = int(candidates[2 * k]), int(candidates[2 * k + 1])
            offspring[index1], offspring[index2] = self.crossover_pair(
                population[index1], population[index2], rng
            )

        logger.debug(f"Crossover: {num_pairs} pairs from {len(candidates)} candidates")
        return Population(offspring)


class BitFlipMutation:
    """Bit-flip mutation operator"""

    def __init__(self, mutation_rate: float):
        self.mutation_rate = mutation_rate

    def mutate(self, population: Population, rng: np.random.Generator) -> Population:
        """Flip every bit of every individual independently with mutation_rate"""
        mutated = []
        for individual in population:
            flips = (rng.random(len(individual)) < self.mutation_rate).astype(BIT_DTYPE)
            mutated.append(Individual(individual.chromosome ^ flips))
        return Population(mutated)


class BlockInsertion:
    """Appends a block of random bits (VSLC only)"""

    def __init__(self, insertion_rate: float, block_size: int):
        self.insertion_rate = insertion_rate
        self.block_size = block_size

    def insert(self, population: Population, rng: np.random.Generator) -> Population:
        grown = []
        for individual in population:
            if rng.random() < self.insertion_rate:
                block = rng.integers(0, 2, size=self.block_size, dtype=BIT_DTYPE)
                grown.append(Individual(np.concatenate((individual.chromosome, block))))
            else:
                grown.append(individual.copy())
        return Population(grown)


class BlockDeletion:
    """Removes one block-aligned run of bits (VSLC only)"""

    def __init__(self, deletion_rate: float, block_size: int):
        self.deletion_rate = deletion_rate
        self.block_size = block_size

    def delete(self, population: Population, rng: np.random.Generator) -> Population:
        """
        Remove block_size bits starting at a uniformly chosen block boundary

        Individuals holding less than one whole block are left untouched.
        """
        shrunk = []
        for individual in population:
            num_blocks = len(individual) // self.block_size
            if rng.random() < self.deletion_rate and num_blocks > 0:
                start = int(rng.integers(num_blocks)) * self.block_size
                chromosome = np.delete(individual.chromosome, np.s_[start:start + self.block_size])
                shrunk.append(Individual(chromosome))
            else:
                shrunk.append(individual.copy())
        return Population(shrunk)
