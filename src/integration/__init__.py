# Integration Module
"""
Audit logging of cipher operations.

Keys are logged only as SHA-256 fingerprints.
"""

# Lazy imports to avoid RuntimeWarning when running module directly
def __getattr__(name):
    """Lazy import to avoid circular import issues."""
    from . import event_logger
    return getattr(event_logger, name)

__all__ = [
    'EventType',
    'CipherEvent',
    'EventLogger',
    'get_key_fingerprint',
    'create_event_logger',
]
