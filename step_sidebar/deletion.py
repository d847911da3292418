"""Step and variant deletion behind a confirmation dialog."""

from __future__ import annotations

import logging

from step_sidebar.constants import STEPS_KEY
from step_sidebar.models.editing_context import ResolvedContext
from step_sidebar.models.pending_deletion import DeleteTarget, PendingDeletion
from step_sidebar.models.router import Router
from step_sidebar.template_form import TemplateForm

logger = logging.getLogger(__name__)


def delete_target_for(ctx: ResolvedContext) -> DeleteTarget:
    """Only a single-variant view deletes a variant; everything else deletes the step."""
    return DeleteTarget.VARIANT if ctx.is_variant else DeleteTarget.STEP


class DeletionOrchestrator:
    """Owns the pending deletion and applies it on confirmation."""

    def __init__(self, form: TemplateForm, router: Router) -> None:
        self.form = form
        self.router = router
        self.pending = PendingDeletion.closed()

    def request_delete(self, ctx: ResolvedContext) -> PendingDeletion:
        """Open the dialog for the entity the context points at."""
        self.pending = PendingDeletion(
            is_open=True,
            target=delete_target_for(ctx),
            step_id=ctx.params.step_id,
            variant_id=ctx.params.variant_id,
        )
        return self.pending

    def confirm_delete(self) -> None:
        """Delete the pending target, go back to the base path and close."""
        pending = self.pending
        if not pending.is_open:
            logger.debug("Delete confirmed with no pending deletion; ignoring")
            return

        if pending.target is DeleteTarget.VARIANT:
            self.delete_variant(pending.step_id, pending.variant_id)
        else:
            self.delete_step(self.form.step_index(pending.step_id))
        self.router.navigate(self.router.base_path)

        self.pending = PendingDeletion.closed()

    def cancel_delete(self) -> None:
        self.pending = PendingDeletion.closed()

    def delete_variant(self, step_id: str, variant_id: str) -> bool:
        """Remove one variant by id, keeping its siblings in order."""
        step_index = self.form.step_index(step_id)
        if step_index < 0:
            logger.debug("Cannot delete variant '%s': step '%s' not found", variant_id, step_id)
            return False

        variants_path = self.form.variants_path(step_index)
        variants = self.form.store.watch(variants_path) or []
        remaining = [v for v in variants if v.get("uuid") != variant_id]
        if len(remaining) == len(variants):
            logger.debug("Variant '%s' not found on step '%s'", variant_id, step_id)
            return False

        self.form.store.set_value(variants_path, remaining, should_dirty=True)
        logger.info("Deleted variant %s from step '%s'", variant_id, step_id)
        return True

    def delete_step(self, step_index: int) -> bool:
        """Remove the step at ``step_index`` together with its variants."""
        steps = self.form.steps()
        if not 0 <= step_index < len(steps):
            logger.debug("Cannot delete step at index %d", step_index)
            return False

        removed = steps.pop(step_index)
        self.form.store.set_value(STEPS_KEY, steps, should_dirty=True)
        logger.info("Deleted step '%s' at index %d", removed.get("uuid", ""), step_index)
        return True
