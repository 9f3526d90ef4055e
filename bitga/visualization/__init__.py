"""
Visualization package for GA run results
"""

from .ga_visualizer import GAVisualizer

__all__ = ['GAVisualizer']
