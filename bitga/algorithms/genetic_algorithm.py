"""
Main Genetic Algorithm controller
"""

import time
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

import numpy as np
import pandas as pd

from ..config import RunConfig, Encoding, ConvergenceType
from ..utils import create_rng
from ..genetic import (
    Individual, Population, FitnessFunction,
    ProportionalSelection, TwoPointCrossover, BitFlipMutation, BlockInsertion, BlockDeletion
)
from ..genetic.individual import BIT_DTYPE

# One step of the operator pipeline
PipelineStep = Callable[[Population, np.random.Generator], Population]


@dataclass
class Generation:
    """
    State of one run, updated in place by every generation step

    best_individual is a value snapshot of the best individual seen across all
    generations, independent of the population currently held.
    """

    population: Population
    best_individual: Optional[Individual] = None
    best_fitness: float = 0.0
    improvement: float = 0.0
    count: int = 0
    termination_reason: Optional[str] = None
    history: List[Dict[str, Any]] = field(default_factory=list)

    def history_frame(self) -> pd.DataFrame:
        """Per-generation history as a DataFrame (one row per generation)"""
        columns = ['generation', 'generation_best_fitness', 'best_fitness', 'improvement',
                   'avg_fitness', 'population_size', 'mean_length']
        return pd.DataFrame(self.history, columns=columns)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable summary of the run"""
        return {
            'best_individual': self.best_individual.to_list() if self.best_individual is not None else None,
            'best_bitstring': self.best_individual.to_bitstring() if self.best_individual is not None else None,
            'best_fitness': self.best_fitness,
            'last_improvement': self.improvement,
            'generations_run': self.count,
            'termination_reason': self.termination_reason,
            'final_population_stats': self.population.get_statistics(),
        }


class GeneticAlgorithm:
    """
    Main controller for the Genetic Algorithm evolution process

    The instance only holds the fitness oracle and the initial population.
    Everything a run changes lives in its own RunConfig, Generation and random
    generator, so one instance can serve several independent runs.
    """

    def __init__(self,
                 fitness: FitnessFunction,
                 population: Union[Population, Iterable[Iterable[int]]]):
        """
        Initialize genetic algorithm

        Args:
            fitness: Oracle called as fitness(individual, population, index);
                its score is used directly as the expected reproduction count
            population: Initial population, as a Population or bit sequences
        """
        self.fitness = fitness
        self.initial_population = Population.from_bits(population)
        self.logger = logging.getLogger(__name__)

    def run(self,
            encoding: Union[Encoding, str],
            convergence_type: Union[ConvergenceType, str],
            convergence_value: float,
            data_size: int = 0,
            p_crossover: float = 0.6,
            p_mutate: float = 0.05,
            p_insert: float = 0.001,
            p_delete: float = 0.001,
            random_seed: Optional[int] = None,
            max_generations: Optional[int] = None) -> np.ndarray:
        """
        Evolve the population and return the best individual found

        Args:
            encoding: 'FSLC' or 'VSLC'
            convergence_type: 'ITERATIONS' or 'IMPROVEMENT'
            convergence_value: Number of generations to run, or the improvement
                a generation must exceed for evolution to continue
            data_size: Bits inserted/deleted per structural change (VSLC only)
            p_crossover: Probability of a slot joining the crossover pool
            p_mutate: Per-bit flip probability
            p_insert: Per-individual block insertion probability
            p_delete: Per-individual block deletion probability
            random_seed: Seed for this run's random generator
            max_generations: Optional cap on IMPROVEMENT runs

        Returns:
            Bits of the best individual found (empty if nothing was ever evaluated)

        Raises:
            ValueError: If the configuration is invalid
        """
        config = RunConfig(
            encoding=encoding,
            convergence_type=convergence_type,
            convergence_value=convergence_value,
            data_size=data_size,
            p_crossover=p_crossover,
            p_mutate=p_mutate,
            p_insert=p_insert,
            p_delete=p_delete,
            max_generations=max_generations,
            random_seed=random_seed,
        )
        generation = self.evolve(config)

        if generation.best_individual is None:
            return np.zeros(0, dtype=BIT_DTYPE)
        return generation.best_individual.chromosome.copy()

    def evolve(self, config: RunConfig) -> Generation:
        """
        Run the complete evolution for one configuration

        Args:
            config: Run configuration, validated before any generation runs

        Returns:
            Final Generation record with the all-time best and the history
        """
        config.validate()

        self.logger.info("Starting Genetic Algorithm evolution")
        self.logger.info(f"Configuration: Encoding={config.encoding.value}, "
                         f"Convergence={config.convergence_type.value}({config.convergence_value}), "
                         f"Population={len(self.initial_population)}")

        rng = create_rng(config.random_seed)
        pipeline = self._build_pipeline(config)
        generation = Generation(population=self.initial_population.copy())
        start_time = time.time()

        try:
            if config.convergence_type is ConvergenceType.ITERATIONS:
                while generation.count < config.convergence_value:
                    self._next_generation(generation, pipeline, rng)
                generation.termination_reason = f"Completed {generation.count} iterations"
            else:
                while True:
                    self._next_generation(generation, pipeline, rng)
                    if generation.improvement <= config.convergence_value:
                        generation.termination_reason = (
                            f"Improvement {generation.improvement:.4f} did not exceed "
                            f"threshold {config.convergence_value}"
                        )
                        break
                    if config.max_generations is not None and generation.count >= config.max_generations:
                        generation.termination_reason = (
                            f"Maximum generations reached ({config.max_generations})"
                        )
                        break

            self.logger.info(generation.termination_reason)
            self.logger.info(f"Evolution results: {generation.count} generations, "
                             f"Best fitness: {generation.best_fitness:.4f}")
            return generation

        except Exception as e:
            self.logger.error(f"Error during evolution: {e}")
            raise
        finally:
            total_time = time.time() - start_time
            self.logger.info(f"Evolution completed in {total_time:.2f} seconds")

    def _build_pipeline(self, config: RunConfig) -> List[PipelineStep]:
        """Create this run's operators from its configuration"""
        pipeline: List[PipelineStep] = [
            ProportionalSelection(self.fitness).reproduce,
            TwoPointCrossover(config.p_crossover).crossover,
            BitFlipMutation(config.p_mutate).mutate,
        ]
        if config.is_variable_length:
            pipeline.append(BlockInsertion(config.p_insert, config.data_size).insert)
            pipeline.append(BlockDeletion(config.p_delete, config.data_size).delete)
        return pipeline

    def _next_generation(self,
                         generation: Generation,
                         pipeline: List[PipelineStep],
                         rng: np.random.Generator) -> Generation:
        """Apply the operator pipeline once, evaluate and update best-ever tracking"""
        generation_start = time.time()

        population = generation.population
        for step in pipeline:
            population = step(population, rng)

        # Evaluate against the new population, caching scores only once all are known
        scores = [self.fitness(individual, population, i) for i, individual in enumerate(population)]
        for individual, score in zip(population, scores):
            individual.fitness = score

        generation.population = population
        generation.count += 1

        current_best = population.best()
        if current_best is None:
            generation.improvement = float('-inf')
            self.logger.warning(f"Generation {generation.count}: population is extinct")
        else:
            generation.improvement = current_best.fitness - generation.best_fitness
            if generation.best_individual is None or current_best.fitness > generation.best_fitness:
                generation.best_individual = current_best.copy()
                generation.best_fitness = current_best.fitness

        stats = population.get_statistics()
        generation.history.append({
            'generation': generation.count,
            'generation_best_fitness': stats['best_fitness'],
            'best_fitness': generation.best_fitness,
            'improvement': generation.improvement,
            'avg_fitness': stats['avg_fitness'],
            'population_size': stats['size'],
            'mean_length': stats['mean_length'],
        })

        self._log_generation_progress(generation, stats, time.time() - generation_start)
        return generation

    def _log_generation_progress(self, generation: Generation, stats: Dict[str, Any],
                                 generation_time: float) -> None:
        """Log progress for current generation"""
        avg = stats['avg_fitness']
        message = (
            f"Generation {generation.count:3d}: "
            f"Best={generation.best_fitness:.4f}, "
            f"Avg={avg if avg is None else format(avg, '.4f')}, "
            f"Size={stats['size']}, "
            f"Length={stats['mean_length']:.1f}, "
            f"Time={generation_time:.2f}s"
        )
        if generation.count % 10 == 0 or generation.count <= 10:
            self.logger.info(message)
        else:
            self.logger.debug(message)
