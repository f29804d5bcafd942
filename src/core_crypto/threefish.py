"""
Threefish-256 Block Cipher (Traced)

Implements Threefish-256 encryption and decryption, recording every
micro-step (subkey addition, MIX, permutation) with a snapshot of the
4-word state so that callers can replay the algorithm step by step.

Structure of one encryption:
- 72 rounds d = 0..71
    - every 4th round: add subkey d/4
    - MIX words (0, 1) and (2, 3)
    - permute words to [0, 3, 2, 1]
- add the final subkey 18

Each call computes its subkeys from scratch; nothing is cached and
there is no module-level state.

Note: This is an educational implementation with no constant-time
      guarantees.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .word_arith import add_words, sub_words, require_words, InvalidInputShape
from .threefish_key_schedule import compute_subkeys, KEY_WORDS, TWEAK_WORDS, NUM_SUBKEYS
from .threefish_mix import mix, invert_mix, get_rotation_constant


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

NUM_ROUNDS = 72
BLOCK_WORDS = 4
SUBKEY_INTERVAL = 4

# Word permutation applied after each round; it is its own inverse
PERMUTATION = (0, 3, 2, 1)

# 18 interior subkey additions + 144 MIX + 72 permutations + final subkey
STEPS_PER_BLOCK = NUM_ROUNDS // SUBKEY_INTERVAL + 2 * NUM_ROUNDS + NUM_ROUNDS + 1

FINAL_SUBKEY = NUM_SUBKEYS - 1


# ============================================================================
# Trace Records
# ============================================================================

class StepKind(Enum):
    """Kinds of traced micro-operations."""
    SUBKEY_ADD = "subkey"
    MIX = "mix"
    PERMUTE = "permute"


@dataclass(frozen=True)
class Step:
    """
    One recorded micro-operation and the state right after it.

    The state is a tuple owned by this step, so later rounds can
    never change an earlier snapshot.
    """
    round: int
    kind: StepKind
    state: Tuple[int, ...]
    description: str
    subkey_index: Optional[int] = None
    pair_index: Optional[int] = None
    rotation: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dict with hex state words."""
        data = {
            'round': self.round,
            'step': self.kind.value,
            'state': [f"{word:016x}" for word in self.state],
            'description': self.description,
        }
        if self.subkey_index is not None:
            data['subkey'] = self.subkey_index
        if self.pair_index is not None:
            data['pair'] = self.pair_index
        if self.rotation is not None:
            data['rotation'] = self.rotation
        return data

    def __str__(self) -> str:
        return f"R{self.round:<2} {self.kind.value:<7} {self.description}"


@dataclass(frozen=True)
class EncryptionResult:
    """Ciphertext words plus the forward trace."""
    ciphertext: Tuple[int, ...]
    steps: Tuple[Step, ...]


@dataclass(frozen=True)
class DecryptionResult:
    """Plaintext words plus the trace, ordered round 0 to round 72."""
    plaintext: Tuple[int, ...]
    steps: Tuple[Step, ...]


# ============================================================================
# Round Helpers
# ============================================================================

def permute(state: Sequence[int]) -> Tuple[int, ...]:
    """Apply the fixed word permutation [0, 3, 2, 1]."""
    return tuple(state[i] for i in PERMUTATION)


def _mix_pair(state: Tuple[int, ...], pair_index: int, rotation: int, inverse: bool = False) -> Tuple[int, ...]:
    """MIX (or un-MIX) one word pair of the state."""
    i = 2 * pair_index
    func = invert_mix if inverse else mix
    y0, y1 = func(state[i], state[i + 1], rotation)
    words = list(state)
    words[i], words[i + 1] = y0, y1
    return tuple(words)


def _check_inputs(key, tweak, block, block_label: str):
    """Validate argument shapes before touching the cipher."""
    return (
        require_words(key, KEY_WORDS, "Key"),
        require_words(tweak, TWEAK_WORDS, "Tweak"),
        require_words(block, BLOCK_WORDS, block_label),
    )


def _forward_order(steps: List[Step]) -> Tuple[Step, ...]:
    """
    Present a decryption trace forward by round number.

    Decryption records steps as it executes them, from round 72 down
    to round 0; reversing the list gives the same round 0 to round 72
    layout as an encryption trace.
    """
    return tuple(reversed(steps))


# ============================================================================
# Encryption / Decryption
# ============================================================================

def encrypt_block(key: Sequence[int], tweak: Sequence[int], plaintext: Sequence[int]) -> EncryptionResult:
    """
    Encrypt one 256-bit block, recording every step.

    Args:
        key: 4 key words
        tweak: 2 tweak words
        plaintext: 4 plaintext words

    Returns:
        EncryptionResult with the ciphertext words and 235 steps

    Raises:
        InvalidInputShape: If any argument has the wrong shape

    Example:
        >>> result = encrypt_block([0] * 4, [0] * 2, [0] * 4)
        >>> hex(result.ciphertext[0])
        '0x94eeea8b1f2ada84'
        >>> len(result.steps)
        235
    """
    key, tweak, state = _check_inputs(key, tweak, plaintext, "Plaintext")
    subkeys = compute_subkeys(key, tweak)
    steps: List[Step] = []

    for d in range(NUM_ROUNDS):
        if d % SUBKEY_INTERVAL == 0:
            s = d // SUBKEY_INTERVAL
            state = add_words(state, subkeys[s])
            steps.append(Step(
                round=d,
                kind=StepKind.SUBKEY_ADD,
                subkey_index=s,
                state=state,
                description=f"Added subkey {s}",
            ))

        for pair in (0, 1):
            r = get_rotation_constant(d, pair)
            state = _mix_pair(state, pair, r)
            steps.append(Step(
                round=d,
                kind=StepKind.MIX,
                pair_index=pair,
                rotation=r,
                state=state,
                description=f"Mixed pair {pair} with rotation {r}",
            ))

        state = permute(state)
        steps.append(Step(
            round=d,
            kind=StepKind.PERMUTE,
            state=state,
            description="Permuted words: [0,3,2,1]",
        ))

    state = add_words(state, subkeys[FINAL_SUBKEY])
    steps.append(Step(
        round=NUM_ROUNDS,
        kind=StepKind.SUBKEY_ADD,
        subkey_index=FINAL_SUBKEY,
        state=state,
        description=f"Added final subkey {FINAL_SUBKEY}",
    ))

    logger.debug("Encrypted block %016x... in %d steps", state[0], len(steps))
    return EncryptionResult(ciphertext=state, steps=tuple(steps))


def decrypt_block(key: Sequence[int], tweak: Sequence[int], ciphertext: Sequence[int]) -> DecryptionResult:
    """
    Decrypt one 256-bit block, recording every step.

    Runs the exact inverse of encrypt_block: subtract the final subkey,
    then for rounds 71 down to 0 undo the permutation, un-MIX pair 1,
    un-MIX pair 0 and subtract the subkey on every 4th round.

    The trace is returned round 0 first, like an encryption trace.

    Args:
        key: 4 key words
        tweak: 2 tweak words
        ciphertext: 4 ciphertext words

    Returns:
        DecryptionResult with the plaintext words and 235 steps

    Raises:
        InvalidInputShape: If any argument has the wrong shape
    """
    key, tweak, state = _check_inputs(key, tweak, ciphertext, "Ciphertext")
    subkeys = compute_subkeys(key, tweak)
    steps: List[Step] = []

    state = sub_words(state, subkeys[FINAL_SUBKEY])
    steps.append(Step(
        round=NUM_ROUNDS,
        kind=StepKind.SUBKEY_ADD,
        subkey_index=FINAL_SUBKEY,
        state=state,
        description=f"Subtracted final subkey {FINAL_SUBKEY}",
    ))

    for d in range(NUM_ROUNDS - 1, -1, -1):
        state = permute(state)
        steps.append(Step(
            round=d,
            kind=StepKind.PERMUTE,
            state=state,
            description="Inverse permutation: [0,3,2,1]",
        ))

        for pair in (1, 0):
            r = get_rotation_constant(d, pair)
            state = _mix_pair(state, pair, r, inverse=True)
            steps.append(Step(
                round=d,
                kind=StepKind.MIX,
                pair_index=pair,
                rotation=r,
                state=state,
                description=f"Inverse mixed pair {pair} with rotation {r}",
            ))

        if d % SUBKEY_INTERVAL == 0:
            s = d // SUBKEY_INTERVAL
            state = sub_words(state, subkeys[s])
            steps.append(Step(
                round=d,
                kind=StepKind.SUBKEY_ADD,
                subkey_index=s,
                state=state,
                description=f"Subtracted subkey {s}",
            ))

    logger.debug("Decrypted block %016x... in %d steps", state[0], len(steps))
    return DecryptionResult(plaintext=state, steps=_forward_order(steps))


def encrypt(key: Sequence[int], tweak: Sequence[int], plaintext: Sequence[int]) -> Tuple[Tuple[int, ...], Tuple[Step, ...]]:
    """Encrypt one block, returning (ciphertext, trace)."""
    result = encrypt_block(key, tweak, plaintext)
    return result.ciphertext, result.steps


def decrypt(key: Sequence[int], tweak: Sequence[int], ciphertext: Sequence[int]) -> Tuple[Tuple[int, ...], Tuple[Step, ...]]:
    """Decrypt one block, returning (plaintext, trace)."""
    result = decrypt_block(key, tweak, ciphertext)
    return result.plaintext, result.steps


__all__ = [
    'NUM_ROUNDS',
    'BLOCK_WORDS',
    'PERMUTATION',
    'STEPS_PER_BLOCK',
    'StepKind',
    'Step',
    'EncryptionResult',
    'DecryptionResult',
    'InvalidInputShape',
    'permute',
    'encrypt_block',
    'decrypt_block',
    'encrypt',
    'decrypt',
]
