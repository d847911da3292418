"""Controller logic for the workflow step editing sidebar.

Resolves which editing context the sidebar is in (step, variants list,
variant, or new variant draft) from the navigation path, and orchestrates
conditions editing and step/variant deletion against that context.

Usage:
    python -m step_sidebar form.yaml /workflows/edit/t1/email/s1 --base-path /workflows/edit/t1
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = [
    "SidebarController",
    "InMemoryFormStore",
    "MemoryRouter",
    "EditingContext",
    "classify",
]


def __getattr__(name: str):
    """Lazy import of sidebar components."""
    if name == "SidebarController":
        from step_sidebar.controller import SidebarController
        return SidebarController
    if name == "InMemoryFormStore":
        from step_sidebar.models.form_store import InMemoryFormStore
        return InMemoryFormStore
    if name == "MemoryRouter":
        from step_sidebar.models.router import MemoryRouter
        return MemoryRouter
    if name == "EditingContext":
        from step_sidebar.models.editing_context import EditingContext
        return EditingContext
    if name == "classify":
        from step_sidebar.models.editing_context import classify
        return classify
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
