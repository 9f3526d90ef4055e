"""
Genetic Algorithm Configuration

This module contains the run configuration for the genetic algorithm engine.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional, Union


class Encoding(str, Enum):
    """Chromosome encoding scheme"""

    FSLC = "FSLC"  # Fixed-String-Length Chromosome
    VSLC = "VSLC"  # Variable-String-Length Chromosome


class ConvergenceType(str, Enum):
    """Stopping rule for the evolution loop"""

    ITERATIONS = "ITERATIONS"
    IMPROVEMENT = "IMPROVEMENT"


@dataclass(frozen=True)
class RunConfig:
    """Configuration parameters for one run of the Genetic Algorithm"""

    encoding: Union[Encoding, str]
    convergence_type: Union[ConvergenceType, str]
    convergence_value: float

    # Block size for insertion/deletion (VSLC only)
    data_size: int = 0

    # Genetic operator probabilities
    p_crossover: float = 0.6
    p_mutate: float = 0.05
    p_insert: float = 0.001
    p_delete: float = 0.001

    # Hard cap for IMPROVEMENT runs (None = unbounded)
    max_generations: Optional[int] = None

    # Reproducibility
    random_seed: Optional[int] = None

    def __post_init__(self):
        """Coerce string modes to enums, leaving unknown values for validate()"""
        for field_name, enum_cls in (('encoding', Encoding),
                                     ('convergence_type', ConvergenceType)):
            value = getattr(self, field_name)
            try:
                object.__setattr__(self, field_name, enum_cls(value))
            except ValueError:
                pass

    @property
    def is_variable_length(self) -> bool:
        return self.encoding is Encoding.VSLC

    def validate(self) -> None:
        """Validate configuration parameters"""
        # Convergence parameters
        if not isinstance(self.convergence_type, ConvergenceType):
            raise ValueError(
                f"Invalid convergence type {self.convergence_type!r}; "
                "must be 'ITERATIONS' or 'IMPROVEMENT'"
            )
        if self.convergence_type is ConvergenceType.ITERATIONS and not self.convergence_value >= 1:
            raise ValueError("Invalid convergence value; must run at least 1 iteration")
        if self.max_generations is not None and self.max_generations < 1:
            raise ValueError("Max generations must be positive")

        # Encoding parameters
        if not isinstance(self.encoding, Encoding):
            raise ValueError(f"Invalid encoding {self.encoding!r}; must be 'FSLC' or 'VSLC'")
        if self.encoding is Encoding.VSLC and self.data_size < 1:
            raise ValueError("Data size must be positive when using VSLC encoding")

        # Genetic operator parameters
        if not 0 <= self.p_crossover <= 1:
            raise ValueError("Crossover probability must be between 0 and 1")
        if not 0 <= self.p_mutate <= 1:
            raise ValueError("Mutation probability must be between 0 and 1")
        if not 0 <= self.p_insert <= 1:
            raise ValueError("Insertion probability must be between 0 and 1")
        if not 0 <= self.p_delete <= 1:
            raise ValueError("Deletion probability must be between 0 and 1")

    def to_dict(self) -> dict:
        """Convert configuration to dictionary"""
        config = asdict(self)
        for key in ('encoding', 'convergence_type'):
            value = config[key]
            config[key] = value.value if isinstance(value, Enum) else value
        return config
