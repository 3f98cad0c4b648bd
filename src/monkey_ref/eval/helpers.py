from __future__ import annotations

from ..runtime import FALSE, NULL, MkObject

def is_truthy(val: MkObject) -> bool:
    # Only false and null are falsy; 0 and "" are truthy
    return val is not FALSE and val is not NULL
