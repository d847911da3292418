"""Tests for the deletion orchestrator."""

from __future__ import annotations

import pytest

from step_sidebar.deletion import DeletionOrchestrator, delete_target_for
from step_sidebar.models import (
    DeleteTarget,
    InMemoryFormStore,
    MemoryRouter,
    PendingDeletion,
    RouteParams,
    resolve,
)
from step_sidebar.template_form import TemplateForm

BASE = "/workflows/edit/tpl-1"


@pytest.fixture
def router() -> MemoryRouter:
    return MemoryRouter(BASE, initial_path=f"{BASE}/email/step-email")


@pytest.fixture
def deletion(store: InMemoryFormStore, router: MemoryRouter) -> DeletionOrchestrator:
    return DeletionOrchestrator(TemplateForm(store), router)


def variant_ctx(variant_id: str = "var-a"):
    params = RouteParams(step_id="step-email", channel="email", variant_id=variant_id)
    return resolve(f"{BASE}/email/step-email/variants/{variant_id}", params)


def step_ctx(step_id: str = "step-email", suffix: str = ""):
    params = RouteParams(step_id=step_id, channel="email")
    return resolve(f"{BASE}/email/{step_id}{suffix}", params)


class TestRequestDelete:
    """Tests for resolving the delete target."""

    def test_target_per_context(self) -> None:
        """Only a variant view targets a variant."""
        assert delete_target_for(variant_ctx()) is DeleteTarget.VARIANT
        assert delete_target_for(step_ctx()) is DeleteTarget.STEP
        assert delete_target_for(step_ctx(suffix="/variants")) is DeleteTarget.STEP
        assert delete_target_for(step_ctx(suffix="/variants/create")) is DeleteTarget.STEP

    def test_opens_pending_deletion(self, deletion: DeletionOrchestrator) -> None:
        pending = deletion.request_delete(variant_ctx("var-b"))

        assert pending == PendingDeletion(
            is_open=True, target=DeleteTarget.VARIANT, step_id="step-email", variant_id="var-b"
        )
        assert deletion.pending is pending


class TestConfirmDelete:
    """Tests for applying a confirmed deletion."""

    def test_variant_removes_only_that_variant(
        self, deletion: DeletionOrchestrator, store: InMemoryFormStore, router: MemoryRouter
    ) -> None:
        deletion.request_delete(variant_ctx("var-a"))
        deletion.confirm_delete()

        variants = store.watch("steps.0.variants")
        assert [v["uuid"] for v in variants] == ["var-b"]
        assert variants[0]["filters"][0]["children"][1]["field"] == "lang"
        assert len(store.watch("steps")) == 3
        assert router.current_path() == BASE
        assert deletion.pending == PendingDeletion.closed()

    def test_step_removes_only_that_step(
        self, deletion: DeletionOrchestrator, store: InMemoryFormStore, router: MemoryRouter
    ) -> None:
        """Other steps keep their relative order and their variants."""
        deletion.request_delete(step_ctx("step-digest"))
        deletion.confirm_delete()

        steps = store.watch("steps")
        assert [s["uuid"] for s in steps] == ["step-email", "step-sms"]
        assert len(steps[0]["variants"]) == 2
        assert router.current_path() == BASE
        assert deletion.pending.is_open is False

    def test_variants_list_deletes_step_with_variants(
        self, deletion: DeletionOrchestrator, store: InMemoryFormStore
    ) -> None:
        deletion.request_delete(step_ctx(suffix="/variants"))
        deletion.confirm_delete()

        assert [s["uuid"] for s in store.watch("steps")] == ["step-digest", "step-sms"]

    def test_unknown_targets_still_close(
        self, deletion: DeletionOrchestrator, store: InMemoryFormStore, router: MemoryRouter
    ) -> None:
        """Missing entities are no-ops but the dialog still closes."""
        deletion.request_delete(variant_ctx("ghost"))
        deletion.confirm_delete()
        deletion.request_delete(step_ctx("missing"))
        deletion.confirm_delete()

        assert store.is_dirty is False
        assert deletion.pending.is_open is False
        assert router.current_path() == BASE

    def test_nothing_pending(
        self, deletion: DeletionOrchestrator, store: InMemoryFormStore, router: MemoryRouter
    ) -> None:
        deletion.confirm_delete()

        assert store.is_dirty is False
        assert router.history == [f"{BASE}/email/step-email"]


class TestCancelDelete:
    """Tests for cancelling and reopening the dialog."""

    def test_cancel_leaves_form_untouched(
        self, deletion: DeletionOrchestrator, store: InMemoryFormStore
    ) -> None:
        deletion.request_delete(step_ctx())
        deletion.cancel_delete()

        assert deletion.pending == PendingDeletion.closed()
        assert store.is_dirty is False

    def test_reopen_recomputes_target(self, deletion: DeletionOrchestrator) -> None:
        """A cancelled variant deletion does not leak into the next request."""
        deletion.request_delete(variant_ctx("var-b"))
        deletion.cancel_delete()

        assert deletion.pending.is_open is False

        pending = deletion.request_delete(step_ctx("step-sms"))

        assert pending.target is DeleteTarget.STEP
        assert pending.step_id == "step-sms"
        assert pending.variant_id == ""


class TestDirectDeletes:
    """Tests for the delete helpers."""

    def test_delete_step_out_of_range(self, deletion: DeletionOrchestrator) -> None:
        assert deletion.delete_step(-1) is False
        assert deletion.delete_step(3) is False

    def test_delete_variant_unknown_step(self, deletion: DeletionOrchestrator) -> None:
        assert deletion.delete_variant("missing", "var-a") is False
