"""
Individual representation for genetic algorithm

This module contains the bit-vector individual evolved by the engine.
"""

import numpy as np
from typing import Iterable, List, Optional, Union

BIT_DTYPE = np.uint8


class Individual:
    """Represents a binary chromosome of fixed or variable length"""

    def __init__(self, chromosome: Union[np.ndarray, Iterable[int]], fitness: Optional[float] = None):
        """
        Initialize individual from a bit sequence

        Args:
            chromosome: Sequence of 0/1 values. Always copied, never aliased
            fitness: Cached fitness score, if already evaluated

        Raises:
            ValueError: If the sequence holds anything other than 0 and 1
        """
        if not isinstance(chromosome, np.ndarray):
            chromosome = list(chromosome)
        bits = np.asarray(chromosome)
        if bits.ndim != 1:
            raise ValueError("Chromosome must be a one-dimensional bit sequence")
        if not np.isin(bits, (0, 1)).all():
            raise ValueError("Chromosome must contain only 0 and 1 values")
        self.chromosome: np.ndarray = bits.astype(BIT_DTYPE)
        self.fitness = fitness

    @classmethod
    def random(cls, length: int, rng: np.random.Generator) -> 'Individual':
        """Generate an individual with uniformly random bits"""
        return cls(rng.integers(0, 2, size=length, dtype=BIT_DTYPE))

    @property
    def num_ones(self) -> int:
        """Number of set bits"""
        return int(self.chromosome.sum())

    def copy(self) -> 'Individual':
        """
        Create a deep copy of the individual

        Returns:
            New Individual instance with copied chromosome
        """
        return Individual(self.chromosome.copy(), self.fitness)

    def to_list(self) -> List[int]:
        return self.chromosome.tolist()

    def to_bitstring(self) -> str:
        """Render the chromosome as a string such as '010110'"""
        return ''.join('1' if bit else '0' for bit in self.chromosome)

    def __len__(self) -> int:
        return len(self.chromosome)

    def __getitem__(self, index):
        return self.chromosome[index]

    def __iter__(self):
        return iter(self.chromosome.tolist())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Individual):
            return NotImplemented
        return np.array_equal(self.chromosome, other.chromosome)

    __hash__ = None

    def __str__(self) -> str:
        fitness_str = f"{self.fitness:.4f}" if self.fitness is not None else "None"
        return f"Individual(bits={self.to_bitstring()}, fitness={fitness_str})"

    __repr__ = __str__
