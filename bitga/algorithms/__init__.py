"""Evolution controllers"""

from .genetic_algorithm import GeneticAlgorithm, Generation

__all__ = ['GeneticAlgorithm', 'Generation']
