"""Roost exception hierarchy.

Shared across Region, the DOM layer, and views so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class RoostError(Exception):
    """Base for all roost-specific errors."""


class ConfigurationError(RoostError):
    """Raised when region configuration is invalid.

    Raised from ``Region.__init__`` and never recovered.
    """


class NoElementError(ConfigurationError):
    """A region was constructed without an ``el``."""

    def __init__(self, detail: str = 'An "el" must be specified for a region.') -> None:
        super().__init__(detail)


@dataclass(frozen=True, slots=True)
class ElementMissingError(RoostError):
    """The region's element cannot be found in the document.

    Raised by ``show()`` unless the region was configured with
    ``allow_missing_el=True``, in which case the call is skipped.
    """

    selector: str | None = None

    def __str__(self) -> str:
        if self.selector:
            return f'An "el" {self.selector} must exist in DOM'
        return 'An "el" must exist in DOM'


class InvalidViewError(RoostError):
    """A view passed to ``show()`` failed validation."""


class ViewNotValidError(InvalidViewError):
    """``show()`` was called without a view, or with something that is not one."""

    def __init__(
        self,
        detail: str = (
            "The view passed is None and therefore invalid. "
            "You must pass a view instance to show."
        ),
    ) -> None:
        super().__init__(detail)


class ViewDestroyedError(InvalidViewError):
    """``show()`` was called with a view that has already been destroyed."""

    def __init__(self, cid: str) -> None:
        self.cid = cid
        super().__init__(f'View (cid: "{cid}") has already been destroyed and cannot be used.')


class DOMError(RoostError):
    """A DOM primitive was used on nodes that do not satisfy its preconditions."""
