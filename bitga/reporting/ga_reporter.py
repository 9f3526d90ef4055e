#!/usr/bin/env python3
"""
GA Reporter Module

Reporting functions for Genetic Algorithm run results: JSON summaries,
CSV generation histories and a plain-text analysis report.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from ..algorithms import Generation
from ..config import RunConfig


class NumpyEncoder(json.JSONEncoder):
    """Custom JSON encoder for numpy types"""
    def default(self, obj):
        if isinstance(obj, np.integer):
            return int(obj)
        elif isinstance(obj, np.floating):
            return float(obj)
        elif isinstance(obj, np.ndarray):
            return obj.tolist()
        return super(NumpyEncoder, self).default(obj)


class GAReporter:
    """
    Reporter for Genetic Algorithm run results
    """

    def __init__(self, results_dir: Path):
        """
        Initialize GA reporter

        Args:
            results_dir: Directory to save reports and results
        """
        self.results_dir = Path(results_dir)
        self.results_dir.mkdir(parents=True, exist_ok=True)

    def write_section_header(self, f, title: str, level: int = 1):
        """Write a formatted section header"""
        if level == 1:
            f.write(f"\n{title}\n")
            f.write("=" * len(title) + "\n\n")
        else:
            f.write(f"\n{title}\n")
            f.write("-" * len(title) + "\n")

    def _stamp(self, filename: str, suffix: str, timestamp: bool) -> Path:
        if timestamp:
            ts = datetime.now().strftime("%Y%m%d_%H%M%S")
            filename = f"{filename}_{ts}"
        return self.results_dir / f"{filename}{suffix}"

    def save_json_results(self, data: Dict[str, Any], filename: str,
                          timestamp: bool = True) -> Path:
        """Save results as JSON file"""
        filepath = self._stamp(filename, '.json', timestamp)
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, cls=NumpyEncoder)
        return filepath

    def save_csv_summary(self, df: pd.DataFrame, filename: str,
                         timestamp: bool = True) -> Path:
        """Save DataFrame as CSV file"""
        filepath = self._stamp(filename, '.csv', timestamp)
        df.to_csv(filepath, index=False)
        return filepath

    def save_results(self, name: str, generation: Generation, config: RunConfig,
                     timestamp: bool = True) -> List[Path]:
        """
        Save one run's summary and generation history

        Args:
            name: Run name used as the file prefix
            generation: Final Generation record of the run
            config: Configuration the run used
            timestamp: Whether to add timestamp to filenames

        Returns:
            Paths of the JSON summary and the CSV history
        """
        summary = {
            'name': name,
            'config': config.to_dict(),
            'results': generation.to_dict(),
        }
        json_path = self.save_json_results(summary, f"{name}_summary", timestamp)
        csv_path = self.save_csv_summary(generation.history_frame(), f"{name}_history", timestamp)
        return [json_path, csv_path]

    def summarize_runs(self, runs: Dict[str, List[Generation]]) -> pd.DataFrame:
        """
        Aggregate repeated runs per experiment

        Args:
            runs: Experiment name -> final Generation record of each run

        Returns:
            One row per experiment with mean/std best fitness, generations and length
        """
        rows = []
        for name, generations in runs.items():
            best_fitness = [g.best_fitness for g in generations]
            rows.append({
                'experiment': name,
                'runs': len(generations),
                'mean_best_fitness': float(np.mean(best_fitness)) if best_fitness else np.nan,
                'std_best_fitness': float(np.std(best_fitness)) if best_fitness else np.nan,
                'max_best_fitness': max(best_fitness) if best_fitness else np.nan,
                'mean_generations': float(np.mean([g.count for g in generations])) if generations else np.nan,
                'mean_best_length': float(np.mean([len(g.best_individual) for g in generations
                                                   if g.best_individual is not None] or [np.nan])),
            })
        return pd.DataFrame(rows)

    def generate_report(self, summary: pd.DataFrame, configs: Optional[Dict[str, RunConfig]] = None) -> Path:
        """
        Generate the text analysis report

        Args:
            summary: Output of summarize_runs
            configs: Optional experiment name -> configuration used

        Returns:
            Path to generated report
        """
        report_path = self.results_dir / 'analysis_report.txt'

        with open(report_path, 'w', encoding='utf-8') as f:
            f.write("GENETIC ALGORITHM ANALYSIS REPORT\n")
            f.write("=" * 80 + "\n\n")

            self.write_section_header(f, "EXECUTIVE SUMMARY", level=2)
            f.write(f"Experiments conducted: {len(summary)}\n")
            if not summary.empty and summary['mean_best_fitness'].notna().any():
                f.write(f"Total runs: {int(summary['runs'].sum())}\n")
                best = summary.loc[summary['mean_best_fitness'].idxmax()]
                f.write(f"Best experiment: {best['experiment']} "
                        f"(mean best fitness {best['mean_best_fitness']:.4f})\n")

            self.write_section_header(f, "RESULTS BY EXPERIMENT", level=2)
            f.write(summary.to_string(index=False, float_format=lambda v: f"{v:.4f}"))
            f.write("\n")

            if configs:
                self.write_section_header(f, "CONFIGURATIONS", level=2)
                for name, config in configs.items():
                    f.write(f"{name}:\n")
                    for key, value in config.to_dict().items():
                        f.write(f"  - {key}: {value}\n")

        return report_path
