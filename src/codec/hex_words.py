"""
Hex / Word Codec

Converts between hexadecimal text and the 64-bit word arrays used by the
Threefish core. Each word is exactly 16 hex digits, most significant
nibble first:

- Key:   4 words = 64 hex digits
- Tweak: 2 words = 32 hex digits
- Block: 4 words = 64 hex digits

The byte helpers follow the Threefish reference convention instead,
where each word is read from 8 bytes in little-endian order.
"""

import re
from typing import List, Sequence, Tuple

from ..core_crypto.word_arith import MASK_64, InvalidInputShape


# ============================================================================
# Constants
# ============================================================================

HEX_DIGITS_PER_WORD = 16
BYTES_PER_WORD = 8

KEY_HEX_LENGTH = 64
TWEAK_HEX_LENGTH = 32
BLOCK_HEX_LENGTH = 64

_HEX_PATTERN = re.compile(r'[0-9a-fA-F]+')


class InvalidHexInput(ValueError):
    """Raised when hex text has the wrong length or non-hex characters."""
    pass


# ============================================================================
# Validation
# ============================================================================

def validate_hex(value: str, expected_length: int, label: str) -> str:
    """
    Check that a string is exactly `expected_length` hex digits.

    Args:
        value: Text to check
        expected_length: Required number of hex digits
        label: Field name for the error message (e.g. "Key")

    Returns:
        The value unchanged

    Raises:
        InvalidHexInput: If the length or character set is wrong
    """
    if not isinstance(value, str) or len(value) != expected_length or not _HEX_PATTERN.fullmatch(value):
        raise InvalidHexInput(f"{label} must be {expected_length} hex digits")
    return value


# ============================================================================
# Hex <-> Words
# ============================================================================

def hex_to_words(hex_str: str, num_words: int) -> Tuple[int, ...]:
    """
    Split fixed-width hex text into 64-bit words.

    Args:
        hex_str: Exactly 16 * num_words hex digits
        num_words: Number of words to decode

    Returns:
        Tuple of words

    Example:
        >>> hex_to_words("00000000000000ff" + "0" * 16, 2)
        (255, 0)
    """
    if len(hex_str) != num_words * HEX_DIGITS_PER_WORD:
        raise InvalidHexInput(
            f"Expected {num_words * HEX_DIGITS_PER_WORD} hex digits, got {len(hex_str)}"
        )
    return tuple(
        int(hex_str[i * HEX_DIGITS_PER_WORD:(i + 1) * HEX_DIGITS_PER_WORD], 16)
        for i in range(num_words)
    )


def words_to_hex(words: Sequence[int]) -> str:
    """Encode words as lowercase hex, zero-padded to 16 digits each."""
    return ''.join(f"{word & MASK_64:016x}" for word in words)


def parse_key(hex_str: str) -> Tuple[int, ...]:
    """Validate and decode a 64-digit key."""
    return hex_to_words(validate_hex(hex_str, KEY_HEX_LENGTH, "Key"), 4)


def parse_tweak(hex_str: str) -> Tuple[int, ...]:
    """Validate and decode a 32-digit tweak."""
    return hex_to_words(validate_hex(hex_str, TWEAK_HEX_LENGTH, "Tweak"), 2)


def parse_block(hex_str: str, label: str = "Input") -> Tuple[int, ...]:
    """Validate and decode a 64-digit plaintext or ciphertext block."""
    return hex_to_words(validate_hex(hex_str, BLOCK_HEX_LENGTH, label), 4)


# ============================================================================
# Display Formatting
# ============================================================================

def format_word(word: int, group_size: int = 4) -> str:
    """
    Format a word as space-separated groups of hex digits.

    Example:
        >>> format_word(0x0123456789abcdef)
        '0123 4567 89ab cdef'
    """
    hex_str = f"{word & MASK_64:016x}"
    groups = [hex_str[i:i + group_size] for i in range(0, len(hex_str), group_size)]
    return ' '.join(groups)


def format_state(state: Sequence[int]) -> str:
    """Format a state as grouped words separated by ' | '."""
    return ' | '.join(format_word(word) for word in state)


# ============================================================================
# Bytes <-> Words (little-endian)
# ============================================================================

def words_from_bytes(data: bytes, num_words: int) -> Tuple[int, ...]:
    """
    Read words from bytes in little-endian order.

    Args:
        data: Exactly 8 * num_words bytes
        num_words: Number of words

    Returns:
        Tuple of words

    Raises:
        InvalidInputShape: If the byte length does not match
    """
    if len(data) != num_words * BYTES_PER_WORD:
        raise InvalidInputShape(
            f"Expected {num_words * BYTES_PER_WORD} bytes, got {len(data)}"
        )
    return tuple(
        int.from_bytes(data[i:i + BYTES_PER_WORD], byteorder='little')
        for i in range(0, len(data), BYTES_PER_WORD)
    )


def words_to_bytes(words: Sequence[int]) -> bytes:
    """Write words as little-endian bytes."""
    result: List[bytes] = [
        (word & MASK_64).to_bytes(BYTES_PER_WORD, byteorder='little') for word in words
    ]
    return b''.join(result)
