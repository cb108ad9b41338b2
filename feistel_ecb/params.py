"""
Cipher Parameters

Construction-time configuration for the cipher engine. Parameter sets
are immutable; environment variables can override the defaults.
"""

import logging
import os
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Mapping, Optional

from .bit_packing.packer import PADDING_POLICIES, BitPacker, check_encoding
from .cipher_core.block_cipher import FeistelBlockCipher
from .ecb_mode.ecb import FeistelECB
from .errors import InvalidBlockWidthError
from .key_schedule.schedules import KEY_SCHEDULES
from .round_function.functions import ROUND_FUNCTIONS

logger = logging.getLogger(__name__)

# Default parameters: 64-bit blocks with 32-bit halves
CIPHER_DEFAULT_PARAMS = {
    'block_size': 64,
    'num_rounds': 4,
    'round_function': 'and',
    'key_schedule': 'arithmetic',
    'padding': 'filler',
    'encoding': 'utf-8',
}

# 8-bit teaching variant: 4-bit halves, static key table, zero-bit padding
TOY_PARAMS = {
    'block_size': 8,
    'num_rounds': 4,
    'round_function': 'and',
    'key_schedule': 'table',
    'padding': 'zero',
    'encoding': 'ascii',
}

_ENV_FIELDS = {
    'BLOCK_SIZE': ('block_size', int),
    'ROUNDS': ('num_rounds', int),
    'ROUND_FUNCTION': ('round_function', str),
    'KEY_SCHEDULE': ('key_schedule', str),
    'PADDING': ('padding', str),
    'ENCODING': ('encoding', str),
}


@dataclass(frozen=True)
class FeistelParams:
    """Immutable parameter set for building a cipher, packer and ECB processor."""
    block_size: int = CIPHER_DEFAULT_PARAMS['block_size']
    num_rounds: int = CIPHER_DEFAULT_PARAMS['num_rounds']
    round_function: str = CIPHER_DEFAULT_PARAMS['round_function']
    key_schedule: str = CIPHER_DEFAULT_PARAMS['key_schedule']
    padding: str = CIPHER_DEFAULT_PARAMS['padding']
    encoding: str = CIPHER_DEFAULT_PARAMS['encoding']

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> 'FeistelParams':
        unknown = set(values) - set(CIPHER_DEFAULT_PARAMS)
        if unknown:
            raise ValueError(f"Unknown parameters: {sorted(unknown)}")
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def validate(self) -> 'FeistelParams':
        """
        Check the parameter set, raising on the first problem found.

        Returns:
            self, to allow chaining
        """
        if self.block_size <= 0 or self.block_size % 8:
            raise InvalidBlockWidthError(
                f"Block size must be a positive multiple of 8 bits, got {self.block_size}"
            )
        if self.num_rounds <= 0:
            raise ValueError(f"Number of rounds must be positive, got {self.num_rounds}")
        if self.round_function not in ROUND_FUNCTIONS:
            raise ValueError(f"Unknown round function '{self.round_function}'")
        if self.key_schedule not in KEY_SCHEDULES:
            raise ValueError(f"Unknown key schedule '{self.key_schedule}'")
        if self.padding not in PADDING_POLICIES:
            raise ValueError(f"Unknown padding policy '{self.padding}'")
        check_encoding(self.encoding)
        return self

    def build_cipher(self) -> FeistelBlockCipher:
        self.validate()
        return FeistelBlockCipher(block_size=self.block_size,
                                  num_rounds=self.num_rounds,
                                  round_function=self.round_function,
                                  key_schedule=self.key_schedule)

    def build_packer(self) -> BitPacker:
        self.validate()
        return BitPacker(block_size=self.block_size, padding=self.padding, encoding=self.encoding)

    def build_ecb(self, master_key: int, max_workers: Optional[int] = None) -> FeistelECB:
        return FeistelECB(master_key,
                          cipher=self.build_cipher(),
                          packer=self.build_packer(),
                          max_workers=max_workers)


def params_from_env(prefix: str = 'FEISTEL_',
                    base: Optional[FeistelParams] = None,
                    environ: Optional[Mapping[str, str]] = None) -> FeistelParams:
    """
    Build a parameter set from environment variables.

    Reads ``<prefix>BLOCK_SIZE``, ``<prefix>ROUNDS``, ``<prefix>ROUND_FUNCTION``,
    ``<prefix>KEY_SCHEDULE``, ``<prefix>PADDING`` and ``<prefix>ENCODING``;
    unset variables keep the value from ``base`` (default parameters if None).

    Args:
        prefix: Environment variable prefix
        base: Parameters to start from
        environ: Mapping to read instead of os.environ

    Returns:
        The validated parameter set
    """
    if environ is None:
        environ = os.environ
    params = base if base is not None else FeistelParams()

    overrides = {}
    for suffix, (field, convert) in _ENV_FIELDS.items():
        raw = environ.get(prefix + suffix)
        if raw is None:
            continue
        try:
            overrides[field] = convert(raw.strip())
        except ValueError:
            raise ValueError(f"Invalid value for {prefix + suffix}: {raw!r}") from None

    if overrides:
        logger.debug("Parameter overrides from environment: %s", overrides)
    return replace(params, **overrides).validate()
