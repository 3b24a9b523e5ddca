"""ID generators (primary store object ids)."""

import os
import secrets
import threading
import time

# Per-process random value and counter, as in a 12-byte document-store ObjectId:
# 4-byte timestamp, 5-byte process value, 3-byte counter.
_PROCESS_UNIQUE = secrets.token_bytes(5)
_counter = secrets.randbelow(0xFFFFFF)
_counter_lock = threading.Lock()
_counter_pid = os.getpid()


def generate_object_id() -> str:
    """Generate a 24-character lowercase hexadecimal identifier.

    Ids sort roughly by creation time and are unique across processes.

    Returns:
        A new id string.
    """
    global _counter, _counter_pid, _PROCESS_UNIQUE
    with _counter_lock:
        if os.getpid() != _counter_pid:
            # Forked child: do not reuse the parent's sequence.
            _PROCESS_UNIQUE = secrets.token_bytes(5)
            _counter_pid = os.getpid()
        _counter = (_counter + 1) % 0x1000000
        counter = _counter
    timestamp = int(time.time()) & 0xFFFFFFFF
    raw = (
        timestamp.to_bytes(4, "big")
        + _PROCESS_UNIQUE
        + counter.to_bytes(3, "big")
    )
    return raw.hex()
