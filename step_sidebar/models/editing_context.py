"""Editing context classification from the navigation path.

Everything the sidebar shows hangs off one question: is the user looking at a
step, its variants list, one variant, or a variant that does not exist yet?
The answer is derived from the path alone, on every navigation, with no state.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from step_sidebar.constants import (
    CONDITIONS_SEGMENT,
    CREATE_SEGMENT,
    NEW_VARIANT_SUFFIX,
    VARIANTS_SEGMENT,
)


class EditingContext(str, Enum):
    """Kind of entity the sidebar is currently editing."""

    STEP = "step"
    VARIANTS_LIST = "variants_list"
    VARIANT = "variant"
    NEW_VARIANT_DRAFT = "new_variant_draft"


@dataclass(frozen=True)
class RouteParams:
    """Route parameters of the sidebar routes.

    Missing parameters are empty strings, never None.
    """

    step_id: str = ""
    channel: str = ""
    variant_id: str = ""

    @classmethod
    def from_mapping(cls, params: Mapping[str, Any]) -> "RouteParams":
        """Create from a router's raw parameter mapping."""
        return cls(
            step_id=params.get("step_id") or "",
            channel=params.get("channel") or "",
            variant_id=params.get("variant_id") or "",
        )


@dataclass(frozen=True)
class ResolvedContext:
    """Editing context together with the route it was derived from."""

    kind: EditingContext
    params: RouteParams
    path: str

    @property
    def is_draft(self) -> bool:
        return self.kind is EditingContext.NEW_VARIANT_DRAFT

    @property
    def is_variant(self) -> bool:
        return self.kind is EditingContext.VARIANT

    @property
    def is_variants_list(self) -> bool:
        return self.kind is EditingContext.VARIANTS_LIST

    @property
    def is_step_level(self) -> bool:
        """Step and variants-list views both edit the step record."""
        return self.kind in (EditingContext.STEP, EditingContext.VARIANTS_LIST)


def _segments(path: str) -> list[str]:
    return [segment for segment in path.split("/") if segment]


def _is_variant_view(segments: list[str], variant_id: str) -> bool:
    for index, segment in enumerate(segments[:-1]):
        if segment == VARIANTS_SEGMENT and segments[index + 1] == variant_id:
            return True
    return False


def _is_variants_list_view(segments: list[str]) -> bool:
    if segments[-1:] == [VARIANTS_SEGMENT]:
        return True
    return segments[-2:] == [VARIANTS_SEGMENT, CONDITIONS_SEGMENT]


def classify(path: str, params: RouteParams) -> EditingContext:
    """Classify a navigation path into an editing context.

    Rules are applied in priority order; any path that matches none of them
    is treated as a plain step view.

    Args:
        path: Current navigation path
        params: Route parameters for the same path

    Returns:
        The single active EditingContext
    """
    if path.endswith(NEW_VARIANT_SUFFIX):
        return EditingContext.NEW_VARIANT_DRAFT

    segments = _segments(path)
    if params.variant_id and _is_variant_view(segments, params.variant_id):
        return EditingContext.VARIANT

    if _is_variants_list_view(segments):
        return EditingContext.VARIANTS_LIST

    return EditingContext.STEP


def resolve(path: str, params: RouteParams) -> ResolvedContext:
    """Classify a path and keep the route it came from."""
    return ResolvedContext(kind=classify(path, params), params=params, path=path)


def parse_route_params(path: str, base_path: str) -> RouteParams:
    """Recover route parameters from a sidebar path.

    Sidebar routes hang off the base path as
    ``{channel}/{step_id}[/conditions|/variants[/create|/conditions|/{variant_id}[/conditions]]]``.
    Paths outside the base path yield empty parameters.
    """
    base = base_path.rstrip("/")
    if base and path != base and not path.startswith(base + "/"):
        return RouteParams()

    segments = _segments(path[len(base):])
    channel = segments[0] if len(segments) > 0 else ""
    step_id = segments[1] if len(segments) > 1 else ""

    variant_id = ""
    if len(segments) > 3 and segments[2] == VARIANTS_SEGMENT:
        candidate = segments[3]
        if candidate not in (CREATE_SEGMENT, CONDITIONS_SEGMENT):
            variant_id = candidate

    return RouteParams(step_id=step_id, channel=channel, variant_id=variant_id)
