"""
Theory and worked-example content for the Threefish explorer.

The example ciphertext is computed by running the cipher, never typed in
by hand.
"""

from dataclasses import dataclass
from typing import List, Tuple

from ..codec.hex_words import words_to_hex
from ..core_crypto.threefish import encrypt_block, StepKind, NUM_ROUNDS, PERMUTATION


THEORY_TITLE = "Threefish Cipher Overview"

THEORY_INTRO = (
    "Threefish is a symmetric-key tweakable block cipher designed as part of "
    "the Skein hash function, a finalist in the NIST SHA-3 competition. It is "
    "built only from addition, rotation and XOR on 64-bit words."
)

KEY_FEATURES = [
    ("Block Size", "256, 512, or 1024 bits (this explorer implements 256)"),
    ("Key Size", "Matches block size"),
    ("Tweak", "128-bit additional parameter"),
    ("Rounds", f"{NUM_ROUNDS} for the 256-bit version"),
    ("Operations", "Addition, rotation, and XOR"),
]

ALGORITHM_STRUCTURE = [
    ("Key Schedule", "Expands key and tweak into 19 subkeys"),
    ("Subkey Addition", "Every 4 rounds"),
    ("MIX Function", "Combines two words with rotation"),
    ("Permutation", "Rearranges words between rounds"),
]

MIX_FORMULA = [
    "y0 = x0 + x1",
    "y1 = (x1 <<< R) XOR y0",
]


def theory_text() -> str:
    """Render the theory section as plain text."""
    lines = [THEORY_TITLE, "", THEORY_INTRO, "", "Key Features:"]
    lines += [f"  - {name}: {value}" for name, value in KEY_FEATURES]
    lines += ["", "Algorithm Structure:"]
    lines += [f"  {i}. {name}: {value}" for i, (name, value) in enumerate(ALGORITHM_STRUCTURE, 1)]
    lines += ["", "MIX Function:"]
    lines += [f"  {line}" for line in MIX_FORMULA]
    return "\n".join(lines)


@dataclass(frozen=True)
class WorkedExample:
    """All-zero example: inputs, real ciphertext and round 0 walkthrough."""
    key_hex: str
    tweak_hex: str
    plaintext_hex: str
    ciphertext_hex: str
    round0: Tuple[Tuple[str, List[str]], ...]


def build_zero_example() -> WorkedExample:
    """
    Encrypt the all-zero block under the all-zero key and tweak.

    Returns:
        WorkedExample whose round0 entries are (heading, lines) pairs
        describing the first subkey addition, both MIX pairs and the
        permutation, taken from the trace.
    """
    key, tweak, plaintext = (0,) * 4, (0,) * 2, (0,) * 4
    result = encrypt_block(key, tweak, plaintext)

    round0 = []
    for step in result.steps:
        if step.round != 0:
            break
        state = list(step.state)
        if step.kind is StepKind.SUBKEY_ADD:
            round0.append(("Subkey Addition", [
                f"Add subkey {step.subkey_index}",
                f"State: {state}",
            ]))
        elif step.kind is StepKind.MIX:
            i = 2 * step.pair_index
            round0.append((f"MIX Pair {step.pair_index}", [
                f"Rotation: {step.rotation}",
                f"y0 = {state[i]:#x}",
                f"y1 = {state[i + 1]:#x}",
            ]))
        else:
            round0.append(("Permutation", [
                f"Word order: {list(PERMUTATION)} -> {state}",
            ]))

    return WorkedExample(
        key_hex=words_to_hex(key),
        tweak_hex=words_to_hex(tweak),
        plaintext_hex=words_to_hex(plaintext),
        ciphertext_hex=words_to_hex(result.ciphertext),
        round0=tuple(round0),
    )
