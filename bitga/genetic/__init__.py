"""Genetic algorithm components module"""

from .individual import Individual
from .population import Population
from .operators import (
    FitnessFunction,
    ProportionalSelection,
    TwoPointCrossover,
    BitFlipMutation,
    BlockInsertion,
    BlockDeletion,
)

__all__ = [
    'Individual',
    'Population',
    'FitnessFunction',
    'ProportionalSelection',
    'TwoPointCrossover',
    'BitFlipMutation',
    'BlockInsertion',
    'BlockDeletion',
]
