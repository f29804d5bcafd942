# Explorer Module
"""
Step-by-step Threefish explorer:
- Session state (operation, hex inputs, output, step cursor)
- Theory text and the computed all-zero example
"""

from .session import ExplorerSession, Operation, DEFAULT_KEY_HEX, DEFAULT_TWEAK_HEX, DEFAULT_INPUT_HEX
from .content import theory_text, build_zero_example, WorkedExample

__all__ = [
    'ExplorerSession',
    'Operation',
    'DEFAULT_KEY_HEX',
    'DEFAULT_TWEAK_HEX',
    'DEFAULT_INPUT_HEX',
    'theory_text',
    'build_zero_example',
    'WorkedExample',
]
