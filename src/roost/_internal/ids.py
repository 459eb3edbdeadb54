"""Process-wide unique ids for regions and views.

Ids are a prefix plus a counter (``mnr1``, ``view2``). They identify
objects in error messages and reprs; they are not persisted.
"""

import itertools
import threading

_counter = itertools.count(1)
_lock = threading.Lock()


def unique_id(prefix: str = "") -> str:
    """Return ``prefix`` followed by the next value of a shared counter."""
    with _lock:
        n = next(_counter)
    return f"{prefix}{n}"
