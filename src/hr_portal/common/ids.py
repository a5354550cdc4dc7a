from __future__ import annotations

import itertools
import threading
import time

_lock = threading.Lock()
_last_ms = 0
_seq = itertools.count()


def new_id(prefix: str) -> str:
    """Generate ``{prefix}_{epoch_ms}`` ids; a sequence suffix keeps same-millisecond ids unique."""
    global _last_ms, _seq
    with _lock:
        ms = int(time.time() * 1000)
        if ms != _last_ms:
            _last_ms = ms
            _seq = itertools.count()
        n = next(_seq)
    return f"{prefix}_{ms}" if n == 0 else f"{prefix}_{ms}{n:03d}"
