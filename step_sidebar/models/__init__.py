"""UI-agnostic state for the step sidebar.

This package holds the testable building blocks the controller composes:
the editing context classifier, step and variant records, the pending
deletion state, and the form store and router contracts with their
in-memory implementations.
"""

from step_sidebar.models.editing_context import (
    EditingContext,
    ResolvedContext,
    RouteParams,
    classify,
    parse_route_params,
    resolve,
)
from step_sidebar.models.form_store import FormStore, InMemoryFormStore
from step_sidebar.models.pending_deletion import DeleteTarget, PendingDeletion
from step_sidebar.models.records import Step, Variant
from step_sidebar.models.router import MemoryRouter, Router

__all__ = [
    "EditingContext",
    "ResolvedContext",
    "RouteParams",
    "classify",
    "parse_route_params",
    "resolve",
    "FormStore",
    "InMemoryFormStore",
    "DeleteTarget",
    "PendingDeletion",
    "Step",
    "Variant",
    "MemoryRouter",
    "Router",
]
