"""
Unit tests for the explorer session and content.
"""

import pytest

from src.explorer import (
    ExplorerSession, Operation, theory_text, build_zero_example,
    DEFAULT_KEY_HEX, DEFAULT_TWEAK_HEX, DEFAULT_INPUT_HEX
)
from src.core_crypto.threefish import StepKind


class TestSessionDefaults:
    """State before the first run."""

    def test_defaults(self):
        session = ExplorerSession()
        assert session.key_hex == DEFAULT_KEY_HEX == "0" * 64
        assert session.tweak_hex == DEFAULT_TWEAK_HEX == "0" * 32
        assert session.input_hex == DEFAULT_INPUT_HEX == "0" * 64
        assert session.operation is Operation.ENCRYPT

    def test_no_steps_before_process(self):
        session = ExplorerSession()
        assert not session.has_steps
        assert session.step_count == 0
        assert session.current_step is None
        assert session.output_hex == ""
        assert session.current_state_text() == ""
        assert not session.next_step()
        assert not session.prev_step()


class TestStepNavigation:
    """Moving the cursor through a trace."""

    @pytest.fixture
    def session(self):
        session = ExplorerSession()
        session.process()
        return session

    def test_process_resets_cursor(self, session):
        session.go_to(100)
        session.process()
        assert session.current_index == 0

    def test_first_step(self, session):
        assert session.has_steps
        assert session.step_count == 235
        assert session.current_step.description == "Added subkey 0"
        assert session.progress_label() == "Step 1 of 235"

    def test_next_and_prev(self, session):
        assert session.next_step()
        assert session.current_index == 1
        assert session.current_step.kind == StepKind.MIX
        assert session.prev_step()
        assert session.current_index == 0

    def test_prev_clamped_at_start(self, session):
        assert not session.prev_step()
        assert session.current_index == 0

    def test_next_clamped_at_end(self, session):
        session.go_to(234)
        assert not session.next_step()
        assert session.progress_label() == "Step 235 of 235"
        assert session.current_step.description == "Added final subkey 18"

    def test_go_to_out_of_range(self, session):
        with pytest.raises(IndexError):
            session.go_to(235)
        with pytest.raises(IndexError):
            session.go_to(-1)

    def test_current_state_text(self, session):
        assert session.current_state_text() == " | ".join(["0000 0000 0000 0000"] * 4)

    def test_step_indicators(self, session):
        indicators = session.step_indicators()
        assert len(indicators) == 235
        assert indicators[0] == ("R0", "s")
        assert indicators[1] == ("R0", "m")
        assert indicators[3] == ("R0", "p")
        assert indicators[-1] == ("R72", "s")

    def test_decrypt_trace_navigates_forward(self):
        session = ExplorerSession(
            input_hex="94eeea8b1f2ada84adf103313eae6670952419a1f4b16d53d83f13e63c9f6b11",
            operation=Operation.DECRYPT,
        )
        assert session.process() == "0" * 64
        assert session.current_step.round == 0
        assert session.current_step.description == "Subtracted subkey 0"


class TestContent:
    """Theory text and the computed example."""

    def test_theory_mentions_structure(self):
        text = theory_text()
        assert "Threefish Cipher Overview" in text
        assert "72" in text
        assert "y0 = x0 + x1" in text

    def test_example_ciphertext_is_computed(self):
        example = build_zero_example()
        assert example.key_hex == "0" * 64
        assert example.tweak_hex == "0" * 32
        assert example.plaintext_hex == "0" * 64
        assert example.ciphertext_hex == (
            "94eeea8b1f2ada84adf103313eae6670952419a1f4b16d53d83f13e63c9f6b11"
        )

    def test_example_round_0(self):
        round0 = build_zero_example().round0
        headings = [heading for heading, _ in round0]
        assert headings == ["Subkey Addition", "MIX Pair 0", "MIX Pair 1", "Permutation"]
        assert "Rotation: 14" in round0[1][1]
        assert "Rotation: 16" in round0[2][1]
        assert round0[3][1] == ["Word order: [0, 3, 2, 1] -> [0, 0, 0, 0]"]
