"""
Threefish MIX Function

The MIX function is the only non-linear step of Threefish. It combines
two words with an addition, a rotation and an XOR:

    y0 = x0 + x1
    y1 = (x1 <<< R) ^ y0

and is undone exactly by:

    x1 = (y1 ^ y0) <<< (64 - R)
    x0 = y0 - x1
"""

from typing import Tuple

from .word_arith import WORD_BITS, add64, rotl64, sub64, xor64


# Rotation constants for Threefish-256, indexed by [round % 8][pair]
ROTATION_CONSTANTS = (
    (14, 16),
    (52, 57),
    (23, 40),
    (5, 37),
    (25, 33),
    (46, 12),
    (58, 22),
    (32, 32),
)


def get_rotation_constant(round_num: int, pair_index: int) -> int:
    """
    Look up the rotation amount for a round and word pair.

    Args:
        round_num: Round number (any non-negative int, taken mod 8)
        pair_index: 0 for words (0, 1), 1 for words (2, 3)

    Returns:
        Rotation amount in [0, 63]
    """
    return ROTATION_CONSTANTS[round_num % 8][pair_index]


def mix(a: int, b: int, rotation: int) -> Tuple[int, int]:
    """
    Forward MIX.

    Args:
        a: First word
        b: Second word
        rotation: Rotation amount (0-63)

    Returns:
        Tuple (y0, y1)

    Example:
        >>> mix(1, 1, 1)
        (2, 0)
    """
    y0 = add64(a, b)
    y1 = xor64(rotl64(b, rotation), y0)
    return y0, y1


def invert_mix(y0: int, y1: int, rotation: int) -> Tuple[int, int]:
    """
    Inverse MIX: recovers (a, b) from mix(a, b, rotation).

    A rotation of 0 works through the same formula since the
    rotation amount 64 reduces to 0.
    """
    b = rotl64(xor64(y1, y0), WORD_BITS - rotation)
    a = sub64(y0, b)
    return a, b
