"""
Threefish-256 Key Schedule

Expands a 256-bit key (4 words) and a 128-bit tweak (2 words) into the
19 subkeys injected every 4 rounds of Threefish-256.

Components:
- Key extension: k4 = k0 ^ k1 ^ k2 ^ k3 ^ C240
- Tweak extension: t2 = t0 ^ t1
- Subkey derivation for s = 0..18

Subkey s is:
    [ k[s%5],
      k[(s+1)%5] + t[s%3],
      k[(s+2)%5] + t[(s+1)%3],
      k[(s+3)%5] + s ]
with all additions modulo 2^64.
"""

from typing import List, Sequence, Tuple

from .word_arith import add64, require_words


# Key schedule parity constant (C240 in the Threefish paper)
KEY_SCHEDULE_PARITY = 0x1BD11BDAA9FC1A22

KEY_WORDS = 4
TWEAK_WORDS = 2

# 72 rounds with an injection every 4 rounds, plus the final one
NUM_SUBKEYS = 19


def extend_key(key: Sequence[int]) -> Tuple[int, ...]:
    """
    Append the parity word to a 4-word key.

    Args:
        key: 4 key words

    Returns:
        5-word extended key k[0..4]
    """
    k4 = KEY_SCHEDULE_PARITY
    for word in key:
        k4 ^= word
    return tuple(key) + (k4,)


def extend_tweak(tweak: Sequence[int]) -> Tuple[int, ...]:
    """Append t2 = t0 ^ t1 to a 2-word tweak."""
    return (tweak[0], tweak[1], tweak[0] ^ tweak[1])


def compute_subkeys(key: Sequence[int], tweak: Sequence[int]) -> List[Tuple[int, ...]]:
    """
    Derive all 19 Threefish-256 subkeys.

    Args:
        key: 4 key words
        tweak: 2 tweak words

    Returns:
        List of 19 subkeys, each a tuple of 4 words

    Example:
        >>> subkeys = compute_subkeys([0, 0, 0, 0], [0, 0])
        >>> subkeys[0]
        (0, 0, 0, 0)
        >>> len(subkeys)
        19
    """
    k = extend_key(key)
    t = extend_tweak(tweak)

    subkeys = []
    for s in range(NUM_SUBKEYS):
        subkeys.append((
            k[s % 5],
            add64(k[(s + 1) % 5], t[s % 3]),
            add64(k[(s + 2) % 5], t[(s + 1) % 3]),
            add64(k[(s + 3) % 5], s),
        ))
    return subkeys


class ThreefishKeySchedule:
    """
    Class-based interface for the Threefish-256 key schedule.

    Example:
        >>> schedule = ThreefishKeySchedule([1, 2, 3, 4], [5, 6])
        >>> schedule.extended_tweak
        (5, 6, 3)
        >>> len(schedule.subkeys)
        19
    """

    def __init__(self, key: Sequence[int], tweak: Sequence[int]):
        """
        Initialize with a key and tweak.

        Args:
            key: 4 key words
            tweak: 2 tweak words

        Raises:
            InvalidInputShape: If key or tweak have the wrong shape
        """
        self._key = require_words(key, KEY_WORDS, "Key")
        self._tweak = require_words(tweak, TWEAK_WORDS, "Tweak")
        self._subkeys = compute_subkeys(self._key, self._tweak)

    @property
    def key(self) -> Tuple[int, ...]:
        """Original 4 key words."""
        return self._key

    @property
    def tweak(self) -> Tuple[int, ...]:
        """Original 2 tweak words."""
        return self._tweak

    @property
    def extended_key(self) -> Tuple[int, ...]:
        """Key with its parity word, k[0..4]."""
        return extend_key(self._key)

    @property
    def extended_tweak(self) -> Tuple[int, ...]:
        """Tweak with t2 appended, t[0..2]."""
        return extend_tweak(self._tweak)

    @property
    def subkeys(self) -> List[Tuple[int, ...]]:
        """All 19 subkeys."""
        return self._subkeys.copy()

    def get_subkey(self, index: int) -> Tuple[int, ...]:
        """
        Get one subkey.

        Args:
            index: Subkey number (0-18)

        Returns:
            4-word subkey
        """
        if index < 0 or index >= NUM_SUBKEYS:
            raise ValueError(f"Subkey index must be 0-{NUM_SUBKEYS - 1}, got {index}")
        return self._subkeys[index]

    def __len__(self) -> int:
        return NUM_SUBKEYS

    def __repr__(self) -> str:
        return f"ThreefishKeySchedule(key={self._key[0]:016x}..., tweak={self._tweak[0]:016x}...)"
