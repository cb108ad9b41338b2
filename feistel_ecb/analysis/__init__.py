"""
Analysis Package

This package implements measurements used to demonstrate diffusion
(avalanche effect) and ECB pattern leakage.
"""

from .diffusion import (
    avalanche_percentage,
    ecb_block_repetitions,
    hamming_distance,
    is_bijective,
    round_function_image_size,
)

__all__ = [
    'hamming_distance', 'avalanche_percentage', 'is_bijective',
    'round_function_image_size', 'ecb_block_repetitions',
]
