"""Region configuration.

RegionConfig and ShowOptions are frozen dataclasses. Callers may also pass
plain keyword options, including the camelCase names used by browser code.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, Any

from roost.errors import ConfigurationError

if TYPE_CHECKING:
    from roost.dom.nodes import Element, Node
    from roost.dom.query import ElementQuery

type ElementRef = str | Element | ElementQuery
type ParentRef = Node | Callable[[], Node | None] | None

# camelCase spellings accepted from mapping-style options
_ALIASES = {
    "parentEl": "parent_el",
    "allowMissingEl": "allow_missing_el",
    "triggerAttach": "trigger_attach",
    "triggerDetach": "trigger_detach",
    "preventDestroy": "prevent_destroy",
    "replaceElement": "replace_element",
}


def _normalize(cls: type, values: Mapping[str, Any], *, strict: bool = True) -> dict[str, Any]:
    known = {f.name for f in fields(cls)}
    out: dict[str, Any] = {}
    for key, value in values.items():
        name = _ALIASES.get(key, key)
        if name not in known:
            if not strict:
                continue
            msg = f"Unknown {cls.__name__} option: {key!r}"
            raise ConfigurationError(msg)
        out[name] = value
    return out


@dataclass(frozen=True, slots=True)
class RegionConfig:
    """Region configuration. Immutable after creation.

    Only ``el`` is required::

        config = RegionConfig(el="#main", allow_missing_el=True)
    """

    el: ElementRef | None = None

    # Scope for selector lookups: an element or a zero-argument callable
    parent_el: ParentRef = None

    # Skip show() silently instead of raising when el is not in the document
    allow_missing_el: bool = False

    trigger_attach: bool = True
    trigger_detach: bool = True

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> RegionConfig:
        """Build a config from keyword or mapping options."""
        return cls(**_normalize(cls, options))


@dataclass(frozen=True, slots=True)
class ShowOptions:
    """Per-call options for ``Region.show()`` and ``Region.empty()``."""

    prevent_destroy: bool = False
    replace_element: bool = False

    # Per-call overrides; only an explicit False disables the notification
    trigger_attach: bool | None = None
    trigger_detach: bool | None = None

    @classmethod
    def coerce(cls, value: ShowOptions | Mapping[str, Any] | None) -> ShowOptions:
        """Accept ``None``, a ``ShowOptions``, or a mapping of option names.

        Unrecognized mapping keys are ignored. They belong to the caller
        and reach ``show`` listeners through the original options value.
        """
        if value is None:
            return _DEFAULT_SHOW_OPTIONS
        if isinstance(value, ShowOptions):
            return value
        return cls(**_normalize(cls, value, strict=False))


_DEFAULT_SHOW_OPTIONS = ShowOptions()
