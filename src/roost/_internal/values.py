"""Value helpers — options that may be given as a value or a factory.

Usage::

    from roost._internal.values import result

    parent = result(config.parent_el)
"""

from typing import Any


def result(value: Any) -> Any:
    """Call *value* with no arguments if it is callable, else return it.

    Classes are callable but are returned as-is.
    """
    if callable(value) and not isinstance(value, type):
        return value()
    return value
