from __future__ import annotations

import os


def debug_enabled() -> bool:
    """Set BLOCKADE_DEBUG=1 to print rules/AI trace lines."""
    return os.getenv('BLOCKADE_DEBUG', '0').lower() in ('1', 'true', 'yes', 'on')


def trace(msg: str) -> None:
    if debug_enabled():
        print(f"[blockade] {msg}")
