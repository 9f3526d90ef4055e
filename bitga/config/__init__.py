"""Run configuration module"""

from .ga_config import RunConfig, Encoding, ConvergenceType

__all__ = ['RunConfig', 'Encoding', 'ConvergenceType']
