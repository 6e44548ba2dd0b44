"""
Content-aware image shrinking by seam carving.

Based on "Seam Carving for Content-Aware Image Resizing"
by Avidan & Shamir, 2007.
"""

__version__ = "0.1.0"

from .energy import gradient_magnitude_energy, luminance
from .errors import (SeamCarvingError, DimensionError, UnsupportedOperationError,
                     InvalidTargetError, LoadError)
from .seam import (SeamMethod, find_seam, dp_seam, greedy_seam, shortest_path_seam,
                   cumulative_energy, seam_cost, validate_seam, remove_seam)
from .carving import CarverState, SeamCarver, carve_image

__all__ = [
    'gradient_magnitude_energy',
    'luminance',
    'SeamCarvingError',
    'DimensionError',
    'UnsupportedOperationError',
    'InvalidTargetError',
    'LoadError',
    'SeamMethod',
    'find_seam',
    'dp_seam',
    'greedy_seam',
    'shortest_path_seam',
    'cumulative_energy',
    'seam_cost',
    'validate_seam',
    'remove_seam',
    'CarverState',
    'SeamCarver',
    'carve_image',
]
