"""
bitga: a genetic algorithm engine for bit-vector individuals
"""

from .config import RunConfig, Encoding, ConvergenceType
from .genetic import Individual, Population
from .algorithms import GeneticAlgorithm, Generation

__version__ = '0.1.0'

__all__ = [
    'RunConfig',
    'Encoding',
    'ConvergenceType',
    'Individual',
    'Population',
    'GeneticAlgorithm',
    'Generation',
]
