"""
TokenHash — validation and the parameters an artwork is drawn from.

A token hash is a bytes32 value rendered as hex: "0x" + 64 digits.
"""

import string
from dataclasses import dataclass
from typing import Tuple

HASH_PREFIX = "0x"
HASH_BYTES = 32
HASH_DIGITS = HASH_BYTES * 2

LINE_THICKNESS_PAIR = 1
COLOR_PAIRS = (28, 29, 30)
MAX_STROKE_WEIGHT = 5.0

_HEX = frozenset(string.hexdigits)


class InvalidHashError(ValueError):
    pass


def map_range(value: float, start1: float, stop1: float, start2: float, stop2: float) -> float:
    return start2 + (stop2 - start2) * ((value - start1) / (stop1 - start1))


def hash_digits(token_hash: str) -> str:
    """Return the 64 significant hex digits of a token hash, prefix removed."""
    if not isinstance(token_hash, str):
        raise InvalidHashError(f"token hash must be a string, got {type(token_hash).__name__}")
    digits = token_hash[2:] if token_hash[:2].lower() == HASH_PREFIX else token_hash
    if len(digits) != HASH_DIGITS:
        raise InvalidHashError(
            f"token hash must have {HASH_DIGITS} hex digits, got {len(digits)}: {token_hash!r}"
        )
    bad = [c for c in digits if c not in _HEX]
    if bad:
        raise InvalidHashError(f"token hash has non-hex characters {''.join(bad)!r}")
    return digits


def byte_pairs(token_hash: str) -> Tuple[int, ...]:
    digits = hash_digits(token_hash)
    return tuple(int(digits[i:i + 2], 16) for i in range(0, HASH_DIGITS, 2))


def noise_seed(token_hash: str) -> int:
    """
    Seed from the first 16 characters of the hash string as given.
    For the canonical "0x..." form that is the prefix plus 14 digits,
    which int(..., 16) reads the same way as an unprefixed value.
    """
    hash_digits(token_hash)
    return int(token_hash[:16], 16)


@dataclass(frozen=True)
class DerivedParameters:
    seed: int
    byte_pairs: Tuple[int, ...]
    line_thickness: int
    fill: Tuple[int, int, int]

    @property
    def stroke_weight(self) -> float:
        return map_range(self.line_thickness, 0, 255, 0, MAX_STROKE_WEIGHT)

    @staticmethod
    def from_hash(token_hash: str) -> "DerivedParameters":
        pairs = byte_pairs(token_hash)
        r, g, b = (pairs[i] for i in COLOR_PAIRS)
        return DerivedParameters(
            seed=noise_seed(token_hash),
            byte_pairs=pairs,
            line_thickness=pairs[LINE_THICKNESS_PAIR],
            fill=(r, g, b),
        )
