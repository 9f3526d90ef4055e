#!/usr/bin/env python3
"""
Genetic Algorithm Experiments Runner

Runs example experiments with the bitga engine and collects reports and plots:
- OneMax with fixed-length chromosomes (FSLC)
- Block pattern matching with variable-length chromosomes (VSLC)
- Several seeded runs per configuration for comparison
"""

import logging
import os
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Dict, List

import numpy as np
from tqdm import tqdm

from bitga import GeneticAlgorithm, Generation, Population, RunConfig, Individual
from bitga.utils import create_rng, setup_logger
from bitga.reporting import GAReporter
from bitga.visualization import GAVisualizer

TARGET_BLOCK = np.array([1, 0, 1, 1], dtype=np.uint8)
TARGET_BLOCKS = 6


def onemax_fitness(individual: Individual, population: Population, index: int) -> float:
    """Number of set bits relative to the population mean, so the pool size stays stable"""
    total = sum(member.num_ones for member in population)
    if total == 0:
        return 1.0
    return len(population) * individual.num_ones / total


def block_pattern_score(individual: Individual) -> float:
    """Count of leading blocks equal to TARGET_BLOCK, penalized past TARGET_BLOCKS"""
    size = len(TARGET_BLOCK)
    blocks = len(individual) // size
    matches = sum(
        np.array_equal(individual.chromosome[b * size:(b + 1) * size], TARGET_BLOCK)
        for b in range(blocks)
    )
    return 1.0 + matches - max(0, blocks - TARGET_BLOCKS)


def block_pattern_fitness(individual: Individual, population: Population, index: int) -> float:
    scores = [max(block_pattern_score(member), 0.0) for member in population]
    total = sum(scores)
    if total == 0:
        return 1.0
    return len(population) * scores[index] / total


class ExperimentRunner:
    """
    Experiment runner collecting repeated GA runs per configuration
    """

    def __init__(self, results_dir: Path = Path("experiment_results"), plots_dir: Path = Path("plots")):
        self.logger = logging.getLogger('bitga.experiments')
        self.reporter = GAReporter(results_dir)
        self.visualizer = GAVisualizer(plots_dir)

        self.runs: Dict[str, List[Generation]] = {}
        self.configs: Dict[str, RunConfig] = {}

    def create_experiments(self) -> List[Dict]:
        """Experiment definitions: fitness oracle, initial population and configuration"""
        return [
            {
                'name': 'onemax_fslc',
                'fitness': onemax_fitness,
                'population_size': 30,
                'length': 32,
                'config': RunConfig(encoding='FSLC', convergence_type='ITERATIONS', convergence_value=60,
                                    p_crossover=0.6, p_mutate=0.01),
            },
            {
                'name': 'block_pattern_vslc',
                'fitness': block_pattern_fitness,
                'population_size': 30,
                'length': 8,
                'config': RunConfig(encoding='VSLC', convergence_type='ITERATIONS', convergence_value=80,
                                    data_size=len(TARGET_BLOCK), p_crossover=0.6, p_mutate=0.01,
                                    p_insert=0.1, p_delete=0.05),
            },
            {
                'name': 'onemax_improvement',
                'fitness': onemax_fitness,
                'population_size': 30,
                'length': 32,
                'config': RunConfig(encoding='FSLC', convergence_type='IMPROVEMENT', convergence_value=-0.5,
                                    max_generations=200),
            },
        ]

    def run_experiment(self, experiment: Dict, num_runs: int) -> List[Generation]:
        """Run one configuration num_runs times with distinct seeds"""
        name = experiment['name']
        results = []
        for run_id in tqdm(range(num_runs), desc=name):
            rng = create_rng(run_id)
            population = Population.random(experiment['population_size'], experiment['length'], rng)
            config = replace(experiment['config'], random_seed=run_id)

            ga = GeneticAlgorithm(experiment['fitness'], population)
            generation = ga.evolve(config)
            results.append(generation)

            self.reporter.save_results(f"{name}_run{run_id + 1}", generation, config, timestamp=False)

        best_run = max(results, key=lambda g: g.best_fitness)
        self.visualizer.generate_all_plots(name, best_run)
        if best_run.best_individual is not None:
            self.logger.info(f"{name}: best individual {best_run.best_individual.to_bitstring()} "
                             f"(fitness {best_run.best_fitness:.4f})")
        return results

    def run_all_experiments(self, num_runs_per_experiment: int = 5) -> Dict[str, List[Generation]]:
        for experiment in self.create_experiments():
            self.configs[experiment['name']] = experiment['config']
            self.runs[experiment['name']] = self.run_experiment(experiment, num_runs_per_experiment)

        summary = self.reporter.summarize_runs(self.runs)
        self.reporter.save_csv_summary(summary, 'summary_statistics', timestamp=False)
        report_path = self.reporter.generate_report(summary, self.configs)
        self.visualizer.plot_run_comparison(self.runs)

        self.logger.info(f"Analysis report: {report_path}")
        return self.runs


def main():
    """Main function to run the example experiments"""
    os.makedirs("logs", exist_ok=True)
    log_file = f"logs/experiments_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
    logger = setup_logger('bitga', log_file)

    try:
        runner = ExperimentRunner()
        results = runner.run_all_experiments(num_runs_per_experiment=5)

        logger.info("Experiments completed successfully!")
        logger.info(f"Log file: {log_file}")
        return results

    except Exception as e:
        logger.error(f"Experiments failed: {e}", exc_info=True)
        raise


if __name__ == "__main__":
    main()
