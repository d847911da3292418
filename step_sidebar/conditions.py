"""Conditions state for the resolved editing context.

A draft variant has no record yet, so it reads as empty and refuses writes;
its conditions are buffered by the caller until the variant exists.
"""

from __future__ import annotations

import logging
from typing import Any

from step_sidebar.models.editing_context import ResolvedContext
from step_sidebar.template_form import TemplateForm

logger = logging.getLogger(__name__)


class ConditionsAdapter:
    """Reads and writes the ConditionSet owned by the current context."""

    def __init__(self, form: TemplateForm) -> None:
        self.form = form

    def get_conditions(self, ctx: ResolvedContext) -> list[dict[str, Any]]:
        """ConditionSet of the context (empty for drafts and unknown records)."""
        if ctx.is_draft:
            return []
        path = self.form.filters_path(ctx)
        if path is None:
            return []
        return list(self.form.store.watch(path) or [])

    def get_filter_children(self, ctx: ResolvedContext) -> list[dict[str, Any]]:
        """Children of the first condition group."""
        if ctx.is_draft:
            return []
        path = self.form.filters_path(ctx)
        if path is None:
            return []
        return list(self.form.store.watch(f"{path}.0.children") or [])

    def has_no_filters(self, ctx: ResolvedContext) -> bool:
        if ctx.is_draft:
            return True
        return not self.get_filter_children(ctx)

    def set_conditions(self, ctx: ResolvedContext, conditions: list[dict[str, Any]]) -> bool:
        """Write the context's ConditionSet.

        Returns:
            True if written; False for drafts and unresolvable records
        """
        if ctx.is_draft:
            logger.debug("Draft variant has no record yet; conditions stay with the caller")
            return False

        path = self.form.filters_path(ctx)
        if path is None:
            logger.debug(
                "No %s record for step '%s' variant '%s'; conditions not written",
                ctx.kind.value,
                ctx.params.step_id,
                ctx.params.variant_id,
            )
            return False

        self.form.store.set_value(path, conditions, should_dirty=True)
        logger.info("Updated %d condition group(s) at %s", len(conditions), path)
        return True
