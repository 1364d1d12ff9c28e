from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

from crudpanel.core.errors import AmbiguousAmbientRegistry

from .panel import CrudPanel

_CURRENT_PANEL: ContextVar[Optional[CrudPanel]] = ContextVar("crudpanel_current_panel", default=None)


@contextmanager
def bind_panel(panel: CrudPanel) -> Iterator[CrudPanel]:
    """
    Make ``panel`` the ambient panel for the current context.

    Nested bindings shadow outer ones; the previous binding is restored on exit.
    """
    token = _CURRENT_PANEL.set(panel)
    try:
        yield panel
    finally:
        _CURRENT_PANEL.reset(token)


def current_panel() -> CrudPanel:
    panel = _CURRENT_PANEL.get()
    if panel is None:
        raise AmbiguousAmbientRegistry(
            "no CrudPanel is bound to the current context; use bind_panel() or pass panel= explicitly"
        )
    return panel
