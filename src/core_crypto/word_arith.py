"""
64-bit Word Arithmetic

Helpers for the unsigned 64-bit words Threefish operates on. Every
operation wraps modulo 2^64, so overflow is never an error.

Components:
- Modular addition and subtraction
- XOR
- Left rotation (amount reduced mod 64)
- Shape checks for word arrays
"""

from typing import Sequence, Tuple


# Word size in bits
WORD_BITS = 64

# Mask for 64-bit arithmetic
MASK_64 = (1 << WORD_BITS) - 1


def add64(a: int, b: int) -> int:
    """Add two words modulo 2^64."""
    return (a + b) & MASK_64


def sub64(a: int, b: int) -> int:
    """Subtract b from a modulo 2^64."""
    return (a - b) & MASK_64


def xor64(a: int, b: int) -> int:
    """XOR two words."""
    return (a ^ b) & MASK_64


def rotl64(value: int, amount: int) -> int:
    """
    Rotate a 64-bit word left.

    The amount is reduced mod 64 first, so rotating by 64 is the same
    as rotating by 0 and returns the word unchanged.

    Args:
        value: 64-bit word
        amount: Number of bit positions (any non-negative int)

    Returns:
        Rotated word

    Example:
        >>> hex(rotl64(0x8000000000000000, 1))
        '0x1'
    """
    amount %= WORD_BITS
    value &= MASK_64
    return ((value << amount) | (value >> (WORD_BITS - amount))) & MASK_64


def add_words(state: Sequence[int], other: Sequence[int]) -> Tuple[int, ...]:
    """Add two equal-length word arrays element by element."""
    return tuple(add64(a, b) for a, b in zip(state, other))


def sub_words(state: Sequence[int], other: Sequence[int]) -> Tuple[int, ...]:
    """Subtract two equal-length word arrays element by element."""
    return tuple(sub64(a, b) for a, b in zip(state, other))


def is_word(value) -> bool:
    """Check that a value is an int in [0, 2^64)."""
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= MASK_64


class InvalidInputShape(ValueError):
    """Raised when a word array has the wrong length or holds non-words."""
    pass


def require_words(words: Sequence[int], count: int, label: str) -> Tuple[int, ...]:
    """
    Check that an argument is exactly `count` 64-bit words.

    Args:
        words: Candidate word array
        count: Required number of words
        label: Name used in the error message

    Returns:
        The words as a tuple

    Raises:
        InvalidInputShape: On wrong length, non-int entries, or out-of-range values
    """
    if isinstance(words, (str, bytes, bytearray)):
        raise InvalidInputShape(f"{label} must be a sequence of {count} words, got {type(words).__name__}")
    try:
        words = tuple(words)
    except TypeError:
        raise InvalidInputShape(f"{label} must be a sequence of {count} words") from None
    if len(words) != count:
        raise InvalidInputShape(f"{label} requires {count} words, got {len(words)}")
    for i, word in enumerate(words):
        if not is_word(word):
            raise InvalidInputShape(f"{label} word {i} is not a 64-bit unsigned integer: {word!r}")
    return words
