"""
Event Logger Module

Audit trail for the Threefish explorer. Every encryption, decryption and
rejected input is recorded as an event.

Features:
- Encrypt / decrypt events
- Validation failure events
- Privacy-preserving key fingerprints (SHA-256), keys are never stored
- JSON export/import of the log
- Callbacks for live observers

Author: Threefish Explorer Project
"""

import hashlib
import json
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, List, Dict, Any, Callable, Sequence

from ..codec.hex_words import words_to_hex


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

EVENT_VERSION = "1.0"
FINGERPRINT_LENGTH = 16


# ============================================================================
# Privacy Functions
# ============================================================================

def get_key_fingerprint(key: Sequence[int]) -> str:
    """
    Compute a privacy-preserving fingerprint of a key.

    Uses SHA-256 so the key itself never appears in the log, while
    operations under the same key can still be correlated.

    Args:
        key: 4 key words

    Returns:
        First 16 hex characters of SHA-256 over the key's hex encoding
    """
    digest = hashlib.sha256(words_to_hex(key).encode()).hexdigest()
    return digest[:FINGERPRINT_LENGTH]


# ============================================================================
# Event Types
# ============================================================================

class EventType(Enum):
    """Types of events that can be logged."""

    SESSION_START = "session_start"
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"
    VALIDATION_FAILED = "validation_failed"


# ============================================================================
# Event Structure
# ============================================================================

@dataclass
class CipherEvent:
    """
    Represents one logged cipher operation.

    Keys appear only as fingerprints.
    """
    event_type: EventType
    key_fingerprint: str
    timestamp: int  # Unix timestamp
    details: Dict[str, Any] = field(default_factory=dict)

    def to_record(self) -> Dict[str, Any]:
        """Convert event to a JSON-compatible dict."""
        return {
            'version': EVENT_VERSION,
            'type': self.event_type.value,
            'key': self.key_fingerprint,
            'time': self.timestamp,
            'iso_time': datetime.fromtimestamp(self.timestamp).isoformat(),
            'details': self.details,
        }

    @classmethod
    def from_record(cls, data: Dict[str, Any]) -> 'CipherEvent':
        """Rebuild an event from its dict form."""
        return cls(
            event_type=EventType(data['type']),
            key_fingerprint=data['key'],
            timestamp=data['time'],
            details=data.get('details', {}),
        )

    def __str__(self) -> str:
        dt = datetime.fromtimestamp(self.timestamp)
        return (
            f"[{dt.strftime('%Y-%m-%d %H:%M:%S')}] "
            f"{self.event_type.value} | "
            f"key:{self.key_fingerprint[:8]}..."
        )


# ============================================================================
# Event Logger
# ============================================================================

class EventLogger:
    """
    In-memory, append-only audit log of cipher operations.
    """

    def __init__(self, events: Optional[List[CipherEvent]] = None, log_start: bool = True):
        """
        Initialize the event logger.

        Args:
            events: Optional existing events (e.g. from import_log)
            log_start: If True, record a SESSION_START event
        """
        self._events: List[CipherEvent] = list(events or [])
        self._callbacks: List[Callable[[CipherEvent], None]] = []

        if log_start:
            self._add_event(CipherEvent(
                event_type=EventType.SESSION_START,
                key_fingerprint="system",
                timestamp=int(time.time()),
                details={'node': 'threefish-explorer'},
            ))

    def _add_event(self, event: CipherEvent) -> None:
        """Append an event and notify callbacks."""
        self._events.append(event)

        for callback in self._callbacks:
            try:
                callback(event)
            except Exception:
                logger.exception("Event callback failed for %s", event.event_type.value)

    def add_callback(self, callback: Callable[[CipherEvent], None]) -> None:
        """Add a callback to be notified of new events."""
        self._callbacks.append(callback)

    def remove_callback(self, callback: Callable[[CipherEvent], None]) -> None:
        """Remove a callback."""
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    # ========================================================================
    # Cipher Events
    # ========================================================================

    def _log_cipher(
        self,
        event_type: EventType,
        key: Sequence[int],
        tweak_hex: str,
        step_count: int
    ) -> CipherEvent:
        """
        Log one block run.

        Args:
            event_type: EventType.ENCRYPT or EventType.DECRYPT
            key: Key words (only the fingerprint is stored)
            tweak_hex: Tweak as hex (public parameter, stored lowercase)
            step_count: Number of trace steps produced

        Returns:
            The logged event
        """
        event = CipherEvent(
            event_type=event_type,
            key_fingerprint=get_key_fingerprint(key),
            timestamp=int(time.time()),
            details={
                'tweak': tweak_hex.lower(),
                'steps': step_count,
                'algo': "Threefish-256",
            }
        )
        self._add_event(event)
        return event

    def log_encrypt(self, key: Sequence[int], tweak_hex: str, step_count: int) -> CipherEvent:
        """Log a block encryption."""
        return self._log_cipher(EventType.ENCRYPT, key, tweak_hex, step_count)

    def log_decrypt(self, key: Sequence[int], tweak_hex: str, step_count: int) -> CipherEvent:
        """Log a block decryption."""
        return self._log_cipher(EventType.DECRYPT, key, tweak_hex, step_count)

    def log_validation_failure(self, operation: str, reason: str) -> CipherEvent:
        """Log input rejected before reaching the cipher."""
        event = CipherEvent(
            event_type=EventType.VALIDATION_FAILED,
            key_fingerprint="unknown",
            timestamp=int(time.time()),
            details={
                'operation': operation,
                'reason': reason,
            }
        )
        self._add_event(event)
        return event

    # ========================================================================
    # Query Methods
    # ========================================================================

    @property
    def event_count(self) -> int:
        """Number of logged events."""
        return len(self._events)

    def get_all_events(self) -> List[CipherEvent]:
        """Get all events in logging order."""
        return self._events.copy()

    def get_events_by_type(self, event_type: EventType) -> List[CipherEvent]:
        """Get all events of a specific type."""
        return [e for e in self._events if e.event_type == event_type]

    def get_key_events(self, key: Sequence[int]) -> List[CipherEvent]:
        """Get all events recorded under a key."""
        fingerprint = get_key_fingerprint(key)
        return [e for e in self._events if e.key_fingerprint == fingerprint]

    def get_recent_events(self, count: int = 10) -> List[CipherEvent]:
        """Get the most recent events (none for count <= 0)."""
        if count <= 0:
            return []
        return self._events[-count:]

    def print_audit_log(self, last_n: Optional[int] = None) -> None:
        """Print the audit log in a readable format (all events if last_n is None)."""
        events = self._events
        if last_n is not None:
            events = self.get_recent_events(last_n)

        print("\n" + "=" * 70)
        print("CIPHER AUDIT LOG")
        print("=" * 70)

        for event in events:
            print(event)
            if event.details:
                for k, v in event.details.items():
                    print(f"    {k}: {v}")

        print("=" * 70)
        print(f"Total events: {len(self._events)}")
        print("=" * 70)

    def export_log(self) -> str:
        """Export the entire audit log as JSON."""
        return json.dumps([e.to_record() for e in self._events], separators=(',', ':'))

    @classmethod
    def import_log(cls, json_str: str) -> 'EventLogger':
        """Import an audit log from JSON."""
        records = json.loads(json_str)
        events = [CipherEvent.from_record(r) for r in records]
        return cls(events=events, log_start=False)


# ============================================================================
# Convenience Functions
# ============================================================================

def create_event_logger() -> EventLogger:
    """Create a new event logger."""
    return EventLogger()
