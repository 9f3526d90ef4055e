#!/usr/bin/env python3
"""
GA Visualizer Module

Visualization functions for Genetic Algorithm runs: evolution curves and
population size/chromosome length dynamics.
"""

import matplotlib.pyplot as plt
import seaborn as sns
import pandas as pd
from pathlib import Path
from typing import Dict, List

from ..algorithms import Generation


class GAVisualizer:
    """
    Visualizer for Genetic Algorithm runs
    """

    def __init__(self, plots_dir: Path, style: str = 'seaborn-v0_8'):
        """
        Initialize GA visualizer

        Args:
            plots_dir: Directory to save plots
            style: Matplotlib style to use
        """
        self.plots_dir = Path(plots_dir)
        self.plots_dir.mkdir(parents=True, exist_ok=True)

        self.setup_plotting_style(style)

    def setup_plotting_style(self, style: str = 'seaborn-v0_8'):
        """Setup consistent plotting style across all visualizations"""
        plt.style.use(style)
        sns.set_palette("husl")

        plt.rcParams.update({
            'figure.figsize': (10, 6),
            'font.size': 11,
            'axes.titlesize': 13,
            'axes.labelsize': 11,
            'legend.fontsize': 10,
            'figure.autolayout': True
        })

    def save_plot(self, filename: str, dpi: int = 150, bbox_inches: str = 'tight') -> Path:
        """Save current plot to file and close it"""
        filepath = self.plots_dir / filename
        plt.savefig(filepath, dpi=dpi, bbox_inches=bbox_inches)
        plt.close()
        return filepath

    def setup_grid(self, ax: plt.Axes, alpha: float = 0.3):
        """Add grid to plot with consistent styling"""
        ax.grid(True, alpha=alpha)

    def plot_evolution_curve(self, history: pd.DataFrame, name: str) -> Path:
        """Plot all-time best, generation best and mean fitness against generation"""
        fig, ax = plt.subplots(figsize=(10, 6))

        ax.plot(history['generation'], history['best_fitness'], linewidth=2, label='Best Fitness (all-time)')
        ax.plot(history['generation'], history['generation_best_fitness'], linewidth=1,
                linestyle='--', label='Generation Best')
        ax.plot(history['generation'], history['avg_fitness'], linewidth=1, alpha=0.7, label='Mean Fitness')

        ax.set_title(f"Evolution Curve - {name}")
        ax.set_xlabel('Generation')
        ax.set_ylabel('Fitness (Higher is Better)')
        self.setup_grid(ax)
        ax.legend()

        return self.save_plot(f'evolution_curve_{name}.png')

    def plot_population_dynamics(self, history: pd.DataFrame, name: str) -> Path:
        """Plot population size and mean chromosome length against generation"""
        fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(14, 5))
        fig.suptitle(f"Population Dynamics - {name}")

        ax1.plot(history['generation'], history['population_size'], color='tab:blue', linewidth=2)
        ax1.set_title('Population Size')
        ax1.set_xlabel('Generation')
        ax1.set_ylabel('Individuals')
        self.setup_grid(ax1)

        ax2.plot(history['generation'], history['mean_length'], color='tab:green', linewidth=2)
        ax2.set_title('Mean Chromosome Length')
        ax2.set_xlabel('Generation')
        ax2.set_ylabel('Bits')
        self.setup_grid(ax2)

        return self.save_plot(f'population_dynamics_{name}.png')

    def plot_run_comparison(self, runs: Dict[str, List[Generation]]) -> Path:
        """Plot the all-time best fitness curve of every run, one panel per experiment"""
        fig, axes = plt.subplots(1, max(len(runs), 1), figsize=(6 * max(len(runs), 1), 5), squeeze=False)
        fig.suptitle('Best Fitness vs Generation')

        for ax, (name, generations) in zip(axes[0], runs.items()):
            for run_id, generation in enumerate(generations):
                history = generation.history_frame()
                ax.plot(history['generation'], history['best_fitness'], alpha=0.6, label=f"Run {run_id + 1}")
            ax.set_title(name)
            ax.set_xlabel('Generation')
            ax.set_ylabel('Best Fitness')
            self.setup_grid(ax)

        return self.save_plot('run_comparison.png')

    def generate_all_plots(self, name: str, generation: Generation) -> List[Path]:
        """Generate all single-run plots for one finished run"""
        history = generation.history_frame()
        return [
            self.plot_evolution_curve(history, name),
            self.plot_population_dynamics(history, name),
        ]
