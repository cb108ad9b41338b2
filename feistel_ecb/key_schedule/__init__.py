"""
Key Schedule Package

This package implements the strategies that transform a master key
into the ordered sequence of per-round subkeys used by the Feistel cipher.
"""

from .schedules import (
    ArithmeticMixingSchedule,
    ArxSchedule,
    TableCyclingSchedule,
    derive_master_key_from_password,
    derive_subkeys,
    generate_master_key,
    get_key_schedule,
    rotate_left,
)

__all__ = [
    'ArithmeticMixingSchedule', 'ArxSchedule', 'TableCyclingSchedule',
    'derive_subkeys', 'get_key_schedule', 'generate_master_key',
    'derive_master_key_from_password', 'rotate_left',
]
