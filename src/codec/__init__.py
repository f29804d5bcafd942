# Codec Module
"""
Boundary conversions between hex text and 64-bit word arrays:
- Fixed-width hex encoding (16 hex digits per word)
- Hex input validation
- State formatting for display
- Little-endian byte conversion (reference test vector layout)
"""

# Lazy imports to avoid RuntimeWarning when running module directly
def __getattr__(name):
    """Lazy import to avoid circular import issues when running module directly."""
    from . import hex_words
    return getattr(hex_words, name)

__all__ = [
    'InvalidHexInput',
    'validate_hex',
    'hex_to_words',
    'words_to_hex',
    'parse_key',
    'parse_tweak',
    'parse_block',
    'format_word',
    'format_state',
    'words_from_bytes',
    'words_to_bytes',
    'HEX_DIGITS_PER_WORD',
    'KEY_HEX_LENGTH',
    'TWEAK_HEX_LENGTH',
    'BLOCK_HEX_LENGTH',
]
