"""
Integration tests for the Threefish explorer.

Tests end-to-end workflows combining the codec, the cipher, the
explorer session, the audit log and the CLI.
"""

import json
import logging
from pathlib import Path

import pytest

from src.explorer.session import ExplorerSession, Operation
from src.integration.event_logger import (
    EventLogger, EventType, CipherEvent, get_key_fingerprint, create_event_logger
)
from src.codec.hex_words import InvalidHexInput, parse_key
from src.main import main


KEY_HEX = "1716151413121110" "1f1e1d1c1b1a1918" "2726252423222120" "2f2e2d2c2b2a2928"
TWEAK_HEX = "0706050403020100" "0f0e0d0c0b0a0908"
PLAINTEXT_HEX = "f8f9fafbfcfdfeff" "f0f1f2f3f4f5f6f7" "e8e9eaebecedeeef" "e0e1e2e3e4e5e6e7"
CIPHERTEXT_HEX = "df8fea0eff91d0e0" "d50ad82ee69281c9" "76f48d58085d869d" "df975e95b5567065"
ZERO_CIPHERTEXT_HEX = "94eeea8b1f2ada84" "adf103313eae6670" "952419a1f4b16d53" "d83f13e63c9f6b11"


class TestCipherWorkflow:
    """Hex in, hex out through the explorer session."""

    def test_encrypt_then_decrypt(self):
        session = ExplorerSession(KEY_HEX, TWEAK_HEX, PLAINTEXT_HEX)
        assert session.process() == CIPHERTEXT_HEX

        session.operation = Operation.DECRYPT
        session.input_hex = CIPHERTEXT_HEX
        assert session.process() == PLAINTEXT_HEX

    def test_default_session_is_zero_vector(self):
        assert ExplorerSession().process() == ZERO_CIPHERTEXT_HEX

    def test_operation_from_string(self):
        session = ExplorerSession(KEY_HEX, TWEAK_HEX, CIPHERTEXT_HEX, operation="decrypt")
        assert session.operation is Operation.DECRYPT
        assert session.process() == PLAINTEXT_HEX

    def test_operation_reassigned_from_string(self):
        """A string assigned after construction selects the same direction."""
        session = ExplorerSession(operation="decrypt")
        session.operation = "encrypt"
        assert session.operation is Operation.ENCRYPT
        assert session.process() == ZERO_CIPHERTEXT_HEX

        session.operation = "decrypt"
        session.input_hex = ZERO_CIPHERTEXT_HEX
        assert session.process() == "0" * 64

    def test_unknown_operation_rejected(self):
        session = ExplorerSession()
        with pytest.raises(ValueError):
            session.operation = "scramble"
        assert session.operation is Operation.ENCRYPT

    def test_invalid_input_keeps_previous_result(self):
        session = ExplorerSession(KEY_HEX, TWEAK_HEX, PLAINTEXT_HEX)
        session.process()
        session.go_to(10)
        session.tweak_hex = "zz"
        with pytest.raises(InvalidHexInput, match="Tweak must be 32 hex digits"):
            session.process()
        assert session.output_hex == CIPHERTEXT_HEX
        assert session.current_index == 10


class TestAuditWorkflow:
    """Session runs are recorded in the audit log."""

    def test_runs_are_logged(self):
        audit = EventLogger()
        session = ExplorerSession(KEY_HEX, TWEAK_HEX, PLAINTEXT_HEX, event_logger=audit)
        session.process()
        session.operation = Operation.DECRYPT
        session.input_hex = CIPHERTEXT_HEX
        session.process()

        assert len(audit.get_events_by_type(EventType.SESSION_START)) == 1
        encrypts = audit.get_events_by_type(EventType.ENCRYPT)
        decrypts = audit.get_events_by_type(EventType.DECRYPT)
        assert len(encrypts) == 1 and len(decrypts) == 1
        assert encrypts[0].details['steps'] == 235
        assert encrypts[0].details['tweak'] == TWEAK_HEX
        assert len(audit.get_key_events(parse_key(KEY_HEX))) == 2

    def test_validation_failure_logged(self):
        audit = EventLogger()
        session = ExplorerSession(key_hex="abc", event_logger=audit)
        with pytest.raises(InvalidHexInput):
            session.process()
        failures = audit.get_events_by_type(EventType.VALIDATION_FAILED)
        assert len(failures) == 1
        assert failures[0].details['operation'] == "encrypt"
        assert "Key must be 64 hex digits" in failures[0].details['reason']

    def test_key_never_in_log(self):
        """Only the key fingerprint is stored."""
        audit = EventLogger()
        ExplorerSession(KEY_HEX, TWEAK_HEX, PLAINTEXT_HEX, event_logger=audit).process()
        exported = audit.export_log()
        assert KEY_HEX not in exported
        assert get_key_fingerprint(parse_key(KEY_HEX)) in exported

    def test_fingerprint_deterministic(self):
        key = parse_key(KEY_HEX)
        assert get_key_fingerprint(key) == get_key_fingerprint(list(key))
        assert len(get_key_fingerprint(key)) == 16
        assert get_key_fingerprint(key) != get_key_fingerprint((0, 0, 0, 0))

    def test_export_import(self):
        audit = EventLogger()
        ExplorerSession(KEY_HEX, TWEAK_HEX, PLAINTEXT_HEX, event_logger=audit).process()
        exported = audit.export_log()
        records = json.loads(exported)
        assert [r['type'] for r in records] == ["session_start", "encrypt"]

        imported = EventLogger.import_log(exported)
        assert imported.event_count == audit.event_count
        assert imported.get_all_events()[1].event_type == EventType.ENCRYPT

    def test_event_record_round_trip(self):
        event = CipherEvent(EventType.DECRYPT, "abcd", 1700000000, {'steps': 235})
        assert CipherEvent.from_record(event.to_record()) == event

    def test_callbacks(self):
        audit = EventLogger(log_start=False)
        seen = []
        audit.add_callback(seen.append)
        audit.log_validation_failure("encrypt", "bad")
        audit.remove_callback(seen.append)
        audit.log_validation_failure("encrypt", "bad again")
        assert len(seen) == 1

    def test_failing_callback_is_logged_not_raised(self, caplog):
        audit = EventLogger(log_start=False)

        def broken(event):
            raise RuntimeError("observer down")

        audit.add_callback(broken)
        with caplog.at_level(logging.ERROR):
            audit.log_validation_failure("decrypt", "bad")
        assert audit.event_count == 1
        assert "Event callback failed" in caplog.text

    def test_recent_events(self):
        audit = EventLogger(log_start=False)
        for i in range(5):
            audit.log_validation_failure("encrypt", f"reason {i}")
        recent = audit.get_recent_events(2)
        assert [e.details['reason'] for e in recent] == ["reason 3", "reason 4"]

    def test_recent_events_non_positive_count(self):
        audit = EventLogger()
        audit.log_validation_failure("encrypt", "bad")
        assert audit.get_recent_events(0) == []
        assert audit.get_recent_events(-3) == []
        assert len(audit.get_recent_events(50)) == 2

    def test_print_audit_log_last_zero(self, capsys):
        audit = EventLogger()
        audit.print_audit_log(last_n=0)
        out = capsys.readouterr().out
        assert "CIPHER AUDIT LOG" in out
        assert "session_start" not in out
        assert "Total events: 1" in out

    def test_print_audit_log_last_n(self, capsys):
        audit = EventLogger()
        audit.log_validation_failure("decrypt", "bad")
        audit.print_audit_log(last_n=1)
        out = capsys.readouterr().out
        assert "validation_failed" in out
        assert "session_start" not in out

    def test_tweak_stored_lowercase(self):
        audit = EventLogger()
        session = ExplorerSession(KEY_HEX, TWEAK_HEX.upper(), PLAINTEXT_HEX, event_logger=audit)
        session.process()
        session.operation = Operation.DECRYPT
        session.input_hex = CIPHERTEXT_HEX.upper()
        session.process()
        runs = audit.get_events_by_type(EventType.ENCRYPT) + audit.get_events_by_type(EventType.DECRYPT)
        assert [e.details['tweak'] for e in runs] == [TWEAK_HEX, TWEAK_HEX]
        assert all(e.details['algo'] == "Threefish-256" for e in runs)

    def test_create_event_logger(self):
        audit = create_event_logger()
        assert isinstance(audit, EventLogger)
        assert [e.event_type for e in audit.get_all_events()] == [EventType.SESSION_START]

    def test_print_audit_log(self, capsys):
        audit = EventLogger()
        audit.print_audit_log()
        out = capsys.readouterr().out
        assert "CIPHER AUDIT LOG" in out
        assert "session_start" in out


class TestCommandLine:
    """The CLI entry point."""

    def test_encrypt(self, capsys):
        code = main(["encrypt", "--key", KEY_HEX, "--tweak", TWEAK_HEX, "--input", PLAINTEXT_HEX])
        assert code == 0
        assert capsys.readouterr().out.strip() == CIPHERTEXT_HEX

    def test_decrypt(self, capsys):
        code = main(["decrypt", "--key", KEY_HEX, "--tweak", TWEAK_HEX, "--input", CIPHERTEXT_HEX])
        assert code == 0
        assert capsys.readouterr().out.strip() == PLAINTEXT_HEX

    def test_defaults(self, capsys):
        assert main(["encrypt"]) == 0
        assert capsys.readouterr().out.strip() == ZERO_CIPHERTEXT_HEX

    def test_trace(self, capsys):
        assert main(["encrypt", "--trace"]) == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert lines[-1] == ZERO_CIPHERTEXT_HEX
        assert "Added subkey 0" in lines[0]
        assert sum("Mixed pair" in line for line in lines) == 144

    def test_invalid_input(self, capsys):
        assert main(["encrypt", "--key", "1234"]) == 2
        assert "Key must be 64 hex digits" in capsys.readouterr().err

    def test_unknown_operation(self):
        with pytest.raises(SystemExit):
            main(["scramble"])


class TestPackaging:
    """Tooling configuration shipped with the project."""

    def test_coverage_configured(self):
        tomllib = pytest.importorskip("tomllib")
        pyproject = Path(__file__).resolve().parent.parent / "pyproject.toml"
        with open(pyproject, "rb") as f:
            config = tomllib.load(f)

        coverage = config['tool']['coverage']
        assert coverage['run']['source'] == ["src"]
        assert coverage['run']['branch'] is True
        assert any(dep.startswith("coverage") for dep in config['project']['optional-dependencies']['test'])
