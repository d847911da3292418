"""Variant creation and the draft commit path.

Conditions authored on a draft have nowhere to live until the variant exists.
Committing a draft is therefore two-phase: create the variant, then write the
buffered conditions into it and navigate to it.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Callable, Optional

from step_sidebar.constants import FILTERS_KEY, NEW_VARIANT_INDEX, NEW_VARIANT_SUFFIX
from step_sidebar.models.editing_context import RouteParams
from step_sidebar.models.records import Variant
from step_sidebar.models.router import Router
from step_sidebar.template_form import TemplateForm

logger = logging.getLogger(__name__)


def _new_variant_id() -> str:
    return str(uuid.uuid4())


class VariantLifecycle:
    """Creates variants and materializes drafts.

    Args:
        form: Template form lookups
        router: Router used for post-creation navigation
        id_factory: Produces ids for new variants
    """

    def __init__(
        self,
        form: TemplateForm,
        router: Router,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        self.form = form
        self.router = router
        self.id_factory = id_factory or _new_variant_id

    def add_variant(self, step_id: str) -> Optional[Variant]:
        """Insert a new variant at the front of the step's variant list.

        Returns:
            The created variant, or None when the step does not exist
        """
        step_index = self.form.step_index(step_id)
        step = self.form.get_step(step_id)
        if step is None:
            logger.debug("Cannot add a variant: step '%s' not found", step_id)
            return None

        variant = step.make_variant(self.id_factory())
        existing = self.form.store.watch(self.form.variants_path(step_index)) or []
        self.form.store.set_value(
            self.form.variants_path(step_index),
            [variant.to_dict(), *existing],
            should_dirty=True,
        )
        logger.info("Added variant %s (%s) to step '%s'", variant.uuid, variant.name, step_id)
        return variant

    def request_add_variant(self, params: RouteParams) -> str:
        """Navigate to the new-variant draft of the current step."""
        path = f"{self.router.base_path}/{params.channel}/{params.step_id}{NEW_VARIANT_SUFFIX}"
        self.router.navigate(path)
        return path

    def variant_path(self, step_id: str, variant: Variant) -> str:
        return f"{self.router.base_path}/{variant.template_type}/{step_id}/variants/{variant.uuid}"

    def commit_draft(self, step_id: str, conditions: list[dict[str, Any]]) -> Optional[Variant]:
        """Create the drafted variant, seed its conditions and open it.

        Returns:
            The created variant, or None if creation failed; nothing is
            written and no navigation happens in that case
        """
        variant = self.add_variant(step_id)
        if variant is None:
            return None

        step_index = self.form.step_index(step_id)
        self.form.store.set_value(
            f"{self.form.variants_path(step_index)}.{NEW_VARIANT_INDEX}.{FILTERS_KEY}",
            conditions,
            should_dirty=True,
        )
        self.router.navigate(self.variant_path(step_id, variant))
        return variant
