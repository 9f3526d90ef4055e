"""
Population management for genetic algorithm

This module contains the ordered collection of individuals evolved by the engine.
"""

import numpy as np
from typing import Any, Dict, Iterable, List, Optional, Union
from .individual import Individual


class Population:
    """Manages an ordered collection of individuals in the genetic algorithm"""

    def __init__(self, individuals: Optional[Iterable[Individual]] = None):
        """
        Initialize population from existing individuals

        Args:
            individuals: Individuals in positional order. The list is copied,
                the individuals themselves are taken over by the population
        """
        self.individuals: List[Individual] = list(individuals) if individuals is not None else []

    @classmethod
    def from_bits(cls, sequences: Union['Population', Iterable[Iterable[int]]]) -> 'Population':
        """
        Build a population from bit sequences (initial population provider)

        Args:
            sequences: A Population, or an iterable of bit sequences

        Returns:
            New Population holding copies of every sequence
        """
        if isinstance(sequences, Population):
            return sequences.copy()
        return cls(Individual(bits) for bits in sequences)

    @classmethod
    def random(cls, size: int, length: int, rng: np.random.Generator) -> 'Population':
        """Create a population of uniformly random individuals of one length"""
        return cls(Individual.random(length, rng) for _ in range(size))

    def copy(self) -> 'Population':
        """Deep copy, no individual is shared with the original"""
        return Population(individual.copy() for individual in self.individuals)

    def best(self) -> Optional[Individual]:
        """Return the first evaluated individual with the highest fitness"""
        best_individual = None
        for individual in self.individuals:
            if individual.fitness is None:
                continue
            if best_individual is None or individual.fitness > best_individual.fitness:
                best_individual = individual
        return best_individual

    def get_statistics(self) -> Dict[str, Any]:
        """
        Calculate population statistics

        Returns:
            Dictionary with fitness and chromosome length statistics
        """
        lengths = [len(individual) for individual in self.individuals]
        fitness_values = [ind.fitness for ind in self.individuals if ind.fitness is not None]

        stats = {
            'size': len(self.individuals),
            'mean_length': float(np.mean(lengths)) if lengths else 0.0,
            'min_length': min(lengths) if lengths else 0,
            'max_length': max(lengths) if lengths else 0,
            'evaluated_count': len(fitness_values),
        }

        if not fitness_values:
            stats.update({
                'best_fitness': None,
                'worst_fitness': None,
                'avg_fitness': None,
                'std_fitness': None,
            })
            return stats

        stats.update({
            'best_fitness': max(fitness_values),
            'worst_fitness': min(fitness_values),
            'avg_fitness': float(np.mean(fitness_values)),
            'std_fitness': float(np.std(fitness_values)),
        })
        return stats

    def __len__(self) -> int:
        """Return population size"""
        return len(self.individuals)

    def __iter__(self):
        """Make population iterable"""
        return iter(self.individuals)

    def __getitem__(self, index: int) -> Individual:
        return self.individuals[index]
