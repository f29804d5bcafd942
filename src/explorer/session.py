"""
Explorer Session

Holds everything the Threefish explorer needs between user actions: the
chosen operation, the hex inputs, the output and a cursor into the step
trace. The session validates hex input before calling the cipher and
never re-runs the algorithm to move between steps.

Example:
    >>> session = ExplorerSession()
    >>> session.process()
    '94eeea8b1f2ada84adf103313eae6670952419a1f4b16d53d83f13e63c9f6b11'
    >>> session.progress_label()
    'Step 1 of 235'
"""

import logging
from enum import Enum
from typing import List, Optional, Tuple

from ..codec.hex_words import (
    InvalidHexInput, parse_key, parse_tweak, parse_block, words_to_hex,
    format_state, KEY_HEX_LENGTH, TWEAK_HEX_LENGTH, BLOCK_HEX_LENGTH,
)
from ..core_crypto.threefish import encrypt_block, decrypt_block, Step
from ..integration.event_logger import EventLogger


logger = logging.getLogger(__name__)


# ============================================================================
# Defaults
# ============================================================================

DEFAULT_KEY_HEX = "0" * KEY_HEX_LENGTH
DEFAULT_TWEAK_HEX = "0" * TWEAK_HEX_LENGTH
DEFAULT_INPUT_HEX = "0" * BLOCK_HEX_LENGTH


class Operation(Enum):
    """Direction of the cipher run."""
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"


class ExplorerSession:
    """
    Interactive state for one explorer user.

    Attributes set by the caller between runs: key_hex, tweak_hex,
    input_hex, operation (an Operation or its string value). process()
    fills output_hex and the trace.
    """

    def __init__(
        self,
        key_hex: str = DEFAULT_KEY_HEX,
        tweak_hex: str = DEFAULT_TWEAK_HEX,
        input_hex: str = DEFAULT_INPUT_HEX,
        operation: Operation = Operation.ENCRYPT,
        event_logger: Optional[EventLogger] = None
    ):
        """
        Initialize the session.

        Args:
            key_hex: 64 hex digits
            tweak_hex: 32 hex digits
            input_hex: 64 hex digits (plaintext or ciphertext)
            operation: Operation.ENCRYPT or Operation.DECRYPT
            event_logger: Optional audit log to record runs in
        """
        self.key_hex = key_hex
        self.tweak_hex = tweak_hex
        self.input_hex = input_hex
        self._operation = Operation(operation)
        self._event_logger = event_logger
        self._output_hex = ""
        self._steps: Tuple[Step, ...] = ()
        self._current = 0

    @property
    def operation(self) -> Operation:
        """Selected direction for the next process() call."""
        return self._operation

    @operation.setter
    def operation(self, value) -> None:
        # Accepts an Operation or its string value ("encrypt" / "decrypt")
        self._operation = Operation(value)

    # ========================================================================
    # Running
    # ========================================================================

    def process(self) -> str:
        """
        Validate the inputs and run the selected operation.

        Returns:
            Output block as 64 hex digits

        Raises:
            InvalidHexInput: If any input is malformed (the previous
                output and trace are kept)
        """
        try:
            key = parse_key(self.key_hex)
            tweak = parse_tweak(self.tweak_hex)
            block = parse_block(self.input_hex)
        except InvalidHexInput as e:
            logger.debug("Rejected %s input: %s", self.operation.value, e)
            if self._event_logger is not None:
                self._event_logger.log_validation_failure(self.operation.value, str(e))
            raise

        if self.operation is Operation.ENCRYPT:
            result = encrypt_block(key, tweak, block)
            output = result.ciphertext
        else:
            result = decrypt_block(key, tweak, block)
            output = result.plaintext

        self._output_hex = words_to_hex(output)
        self._steps = result.steps
        self._current = 0

        if self._event_logger is not None:
            if self.operation is Operation.ENCRYPT:
                self._event_logger.log_encrypt(key, self.tweak_hex, len(self._steps))
            else:
                self._event_logger.log_decrypt(key, self.tweak_hex, len(self._steps))

        return self._output_hex

    @property
    def output_hex(self) -> str:
        """Output of the last successful run ('' before any run)."""
        return self._output_hex

    @property
    def steps(self) -> Tuple[Step, ...]:
        """Trace of the last successful run."""
        return self._steps

    # ========================================================================
    # Step Navigation
    # ========================================================================

    @property
    def has_steps(self) -> bool:
        return len(self._steps) > 0

    @property
    def step_count(self) -> int:
        return len(self._steps)

    @property
    def current_index(self) -> int:
        return self._current

    @property
    def current_step(self) -> Optional[Step]:
        """Step under the cursor, or None before the first run."""
        if not self._steps:
            return None
        return self._steps[self._current]

    def next_step(self) -> bool:
        """Advance the cursor; returns False if already at the last step."""
        if self._current < len(self._steps) - 1:
            self._current += 1
            return True
        return False

    def prev_step(self) -> bool:
        """Move the cursor back; returns False if already at the first step."""
        if self._current > 0:
            self._current -= 1
            return True
        return False

    def go_to(self, index: int) -> Step:
        """
        Jump to a step.

        Args:
            index: Step position (0-based)

        Returns:
            The selected step

        Raises:
            IndexError: If index is outside the trace
        """
        if index < 0 or index >= len(self._steps):
            raise IndexError(f"Step index {index} out of range [0, {len(self._steps) - 1}]")
        self._current = index
        return self._steps[index]

    def progress_label(self) -> str:
        """Human-readable cursor position, e.g. 'Step 1 of 235'."""
        return f"Step {self._current + 1} of {len(self._steps)}"

    def current_state_text(self) -> str:
        """Formatted state of the current step ('' before any run)."""
        step = self.current_step
        return format_state(step.state) if step else ""

    def step_indicators(self) -> List[Tuple[str, str]]:
        """Short (round, kind initial) labels for every step, e.g. ('R0', 's')."""
        return [(f"R{step.round}", step.kind.value[0]) for step in self._steps]

    def __repr__(self) -> str:
        return (
            f"ExplorerSession(operation={self.operation.value}, "
            f"steps={len(self._steps)}, current={self._current})"
        )
