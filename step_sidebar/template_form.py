"""Read helpers over the template form.

Locates steps and variants by id and maps a resolved editing context to the
form key of the record it edits.
"""

from __future__ import annotations

from typing import Any, Optional

from step_sidebar.constants import FILTERS_KEY, STEPS_KEY, VARIANTS_KEY
from step_sidebar.models.editing_context import ResolvedContext
from step_sidebar.models.form_store import FormStore
from step_sidebar.models.records import Step


class TemplateForm:
    """Step and variant lookups against a form store."""

    def __init__(self, store: FormStore) -> None:
        self.store = store

    def steps(self) -> list[dict[str, Any]]:
        return list(self.store.watch(STEPS_KEY) or [])

    def step_index(self, step_id: str) -> int:
        """Index of the step with ``step_id``, or -1."""
        if not step_id:
            return -1
        for index, step in enumerate(self.steps()):
            if step.get("uuid") == step_id:
                return index
        return -1

    def get_step(self, step_id: str) -> Optional[Step]:
        index = self.step_index(step_id)
        if index < 0:
            return None
        return Step.from_dict(self.steps()[index])

    def step_path(self, step_index: int) -> str:
        return f"{STEPS_KEY}.{step_index}"

    def variants_path(self, step_index: int) -> str:
        return f"{STEPS_KEY}.{step_index}.{VARIANTS_KEY}"

    def variant_index(self, step_id: str, variant_id: str) -> int:
        """Index of the variant within its step, or -1."""
        index = self.step_index(step_id)
        if index < 0 or not variant_id:
            return -1
        variants = self.store.watch(self.variants_path(index)) or []
        for variant_index, variant in enumerate(variants):
            if variant.get("uuid") == variant_id:
                return variant_index
        return -1

    def variants_count(self, step_id: str) -> int:
        index = self.step_index(step_id)
        if index < 0:
            return 0
        return len(self.store.watch(self.variants_path(index)) or [])

    def form_path(self, ctx: ResolvedContext) -> Optional[str]:
        """Form key of the record the context edits.

        Step-level contexts and drafts resolve to the step; a variant resolves
        to its own entry. None when the step or variant cannot be found.
        """
        index = self.step_index(ctx.params.step_id)
        if index < 0:
            return None
        if not ctx.is_variant:
            return self.step_path(index)

        variant_index = self.variant_index(ctx.params.step_id, ctx.params.variant_id)
        if variant_index < 0:
            return None
        return f"{self.variants_path(index)}.{variant_index}"

    def filters_path(self, ctx: ResolvedContext) -> Optional[str]:
        record_path = self.form_path(ctx)
        return f"{record_path}.{FILTERS_KEY}" if record_path else None

    def record_name(self, ctx: ResolvedContext) -> str:
        record_path = self.form_path(ctx)
        if not record_path:
            return ""
        return self.store.watch(f"{record_path}.name") or ""
