"""
Reporting package for GA run results
"""

from .ga_reporter import GAReporter, NumpyEncoder

__all__ = ['GAReporter', 'NumpyEncoder']
