"""
Random utilities for reproducibility

This module creates the per-run random number generators used by the genetic operators.
"""

from typing import Optional

import numpy as np


def create_rng(seed: Optional[int] = None) -> np.random.Generator:
    """
    Create an independent random generator for one run

    Args:
        seed: Random seed value. If None, fresh OS entropy is used

    Returns:
        numpy random Generator owned by the caller
    """
    return np.random.default_rng(seed)
