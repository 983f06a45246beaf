from __future__ import annotations

OK = 0
ERR_POLICY = 2
ERR_CONFIG = 3
ERR_IO = 4
ERR_CANCELLED = 5
ERR_VALIDATION = 6
ERR_INTERNAL = 99

__all__ = [
    "ERR_CANCELLED",
    "ERR_CONFIG",
    "ERR_INTERNAL",
    "ERR_IO",
    "ERR_POLICY",
    "ERR_VALIDATION",
    "OK",
]
