"""Kida environment setup for view rendering.

Views describe their markup as a kida template (by name, or inline
source) plus a context. The environment is created once and shared by
the views that use it.
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import cache
from pathlib import Path
from typing import TYPE_CHECKING, Any

from kida import ChoiceLoader, DictLoader, Environment, FileSystemLoader

if TYPE_CHECKING:
    from roost.views import View


def create_environment(
    template_dir: str | Path | None = None,
    templates: Mapping[str, str] | None = None,
    *,
    autoescape: bool = True,
    filters: Mapping[str, Any] | None = None,
) -> Environment:
    """Create a kida Environment for views.

    In-memory *templates* take precedence over files in *template_dir*.
    """
    loaders: list[Any] = []
    if templates:
        loaders.append(DictLoader(dict(templates)))
    if template_dir is not None:
        loaders.append(FileSystemLoader(str(template_dir)))
    if not loaders:
        loaders.append(DictLoader({}))

    loader = loaders[0] if len(loaders) == 1 else ChoiceLoader(loaders)
    env = Environment(loader=loader, autoescape=autoescape)

    if filters:
        env.update_filters(dict(filters))

    return env


@cache
def default_environment() -> Environment:
    """Shared environment for views that only use inline source."""
    return create_environment()


def render_view_template(env: Environment, view: View) -> str | None:
    """Render the view's template, or return ``None`` if it has none."""
    context = view.serialize_data()
    if view.template is not None:
        return env.get_template(view.template).render(context)
    if view.template_source is not None:
        return env.from_string(view.template_source).render(context)
    return None
