"""Sidebar controller for the workflow step editor.

Composes the path classifier, the conditions adapter, the variant lifecycle
and the deletion orchestrator into the state and handlers the sidebar header
needs. The controller holds no durable state: the conditions panel flag, the
pending deletion and the proceed flag are all it owns.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from step_sidebar.conditions import ConditionsAdapter
from step_sidebar.constants import (
    CONDITIONS_SUFFIX,
    CREATE_SUFFIX,
    NEW_VARIANT_SUFFIX,
    VARIANTS_CONDITIONS_SUFFIX,
    FilterPart,
    FilterPartType,
    get_filter_parts_list,
)
from step_sidebar.deletion import DeletionOrchestrator, delete_target_for
from step_sidebar.logging_config import get_sidebar_logger
from step_sidebar.models.editing_context import ResolvedContext, resolve
from step_sidebar.models.form_store import FormStore
from step_sidebar.models.pending_deletion import PendingDeletion
from step_sidebar.models.records import Variant
from step_sidebar.models.router import Router
from step_sidebar.settings import SidebarSettings, get_settings
from step_sidebar.template_form import TemplateForm
from step_sidebar.variant_lifecycle import VariantLifecycle

Conditions = list[dict[str, Any]]


@dataclass(frozen=True)
class ActionButton:
    """One header action of the sidebar."""

    key: str
    tooltip: str
    icon: str
    text: str = ""
    test_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "tooltip": self.tooltip,
            "icon": self.icon,
            "text": self.text,
            "test_id": self.test_id,
        }


@dataclass(frozen=True)
class ConditionsPanelProps:
    """Everything the conditions editor panel is rendered with."""

    is_open: bool
    is_readonly: bool
    name: str
    conditions: Conditions
    filter_parts_list: list[FilterPart]
    default_filter: FilterPartType
    on_close: Callable[[], None]
    update_conditions: Callable[[Conditions], None]


@dataclass(frozen=True)
class DeleteDialogProps:
    """Everything the delete confirmation dialog is rendered with."""

    is_open: bool
    target: str
    title: str
    description: str
    confirm_button_text: str
    cancel_button_text: str
    confirm: Callable[[], None]
    cancel: Callable[[], None]


def _is_panel_path(path: str) -> bool:
    return path.endswith(CONDITIONS_SUFFIX) or path.endswith(NEW_VARIANT_SUFFIX)


class SidebarController:
    """Controller for one mounted sidebar.

    Derived state (context, display name, affordances) is recomputed from the
    router and form store on every access. The router subscription keeps the
    conditions panel flag in step with path changes until ``dispose()``.

    Args:
        store: Form state store holding the steps
        router: Router for the editor routes
        readonly: Open the conditions panel read-only (defaults to settings)
        default_filter: Preselected filter kind (defaults to settings)
        settings: Settings to default from (defaults to the global settings)
        id_factory: Produces ids for new variants
    """

    def __init__(
        self,
        store: FormStore,
        router: Router,
        *,
        readonly: Optional[bool] = None,
        default_filter: Optional[FilterPartType] = None,
        settings: Optional[SidebarSettings] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        settings = settings or get_settings()
        self.store = store
        self.router = router
        self.readonly = settings.readonly if readonly is None else readonly
        self.default_filter = default_filter or settings.default_filter

        self.form = TemplateForm(store)
        self.conditions = ConditionsAdapter(self.form)
        self.lifecycle = VariantLifecycle(self.form, router, id_factory=id_factory)
        self.deletion = DeletionOrchestrator(self.form, router)

        self.log = get_sidebar_logger(__name__)

        # Set while a draft commit is navigating to its new variant
        self.proceed_to_new_variant = False
        self.conditions_panel_open = False
        self._unsubscribe: Optional[Callable[[], None]] = router.subscribe(self.on_path_change)
        self.on_path_change(router.current_path())

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def context(self) -> ResolvedContext:
        return resolve(self.router.current_path(), self.router.route_params())

    @property
    def pending_deletion(self) -> PendingDeletion:
        return self.deletion.pending

    @property
    def step_index(self) -> int:
        return self.form.step_index(self.context.params.step_id)

    @property
    def display_name(self) -> str:
        ctx = self.context
        if ctx.is_draft:
            step_name = self.form.record_name(ctx)
            return f"V{self.form.variants_count(ctx.params.step_id) + 1} {step_name}"
        return self.form.record_name(ctx)

    @property
    def has_no_filters(self) -> bool:
        return self.conditions.has_no_filters(self.context)

    def actions(self) -> list[ActionButton]:
        """Header actions in display order."""
        ctx = self.context
        group = "group " if ctx.is_variants_list else ""
        buttons: list[ActionButton] = []

        if ctx.is_step_level:
            buttons.append(ActionButton(key="add-variant", tooltip="Add variant", icon="variant-plus"))

        if self.conditions.has_no_filters(ctx):
            buttons.append(
                ActionButton(
                    key="add-conditions",
                    tooltip=f"Add {group}conditions",
                    icon="conditions-file" if ctx.is_variants_list else "condition-plus",
                    test_id="editor-sidebar-add-conditions",
                )
            )
        else:
            buttons.append(
                ActionButton(
                    key="edit-conditions",
                    tooltip=f"Edit {group}conditions",
                    icon="conditions-file" if ctx.is_variants_list else "condition",
                    text=str(len(self.conditions.get_filter_children(ctx))),
                    test_id="editor-sidebar-edit-conditions",
                )
            )

        buttons.append(
            ActionButton(
                key="delete",
                tooltip=f"Delete {delete_target_for(ctx).value}",
                icon="trash",
                test_id="editor-sidebar-delete",
            )
        )
        return buttons

    def conditions_panel(self) -> Optional[ConditionsPanelProps]:
        """Props for the conditions panel, or None while it is closed."""
        if not self.conditions_panel_open:
            return None
        ctx = self.context
        return ConditionsPanelProps(
            is_open=True,
            is_readonly=self.readonly,
            name=self.display_name,
            conditions=self.conditions.get_conditions(ctx),
            filter_parts_list=get_filter_parts_list(self.step_index, ctx.params.channel),
            default_filter=self.default_filter,
            on_close=self.on_conditions_close,
            update_conditions=self.update_conditions,
        )

    def delete_dialog(self) -> DeleteDialogProps:
        pending = self.deletion.pending
        if pending.is_open and pending.target is not None:
            target = pending.target.value
        else:
            target = delete_target_for(self.context).value
        return DeleteDialogProps(
            is_open=pending.is_open,
            target=target,
            title=f"Delete {target}?",
            description=(
                "This cannot be undone. "
                f"The trigger code will be updated and this {target} "
                "will no longer participate in the notification workflow."
            ),
            confirm_button_text=f"Delete {target}",
            cancel_button_text="Cancel",
            confirm=self.confirm_delete,
            cancel=self.cancel_delete,
        )

    def snapshot(self) -> dict[str, Any]:
        """Plain-data view of the derived state."""
        ctx = self.context
        pending = self.deletion.pending
        return {
            "path": ctx.path,
            "context": ctx.kind.value,
            "step_id": ctx.params.step_id,
            "channel": ctx.params.channel,
            "variant_id": ctx.params.variant_id,
            "display_name": self.display_name,
            "conditions_panel_open": self.conditions_panel_open,
            "has_no_filters": self.conditions.has_no_filters(ctx),
            "conditions": self.conditions.get_conditions(ctx),
            "actions": [button.to_dict() for button in self.actions()],
            "pending_deletion": {
                "is_open": pending.is_open,
                "target": pending.target.value if pending.target else None,
            },
        }

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def on_path_change(self, path: str) -> None:
        self.conditions_panel_open = _is_panel_path(path)
        if not path.endswith(NEW_VARIANT_SUFFIX):
            # The draft is gone, so a pending commit has landed
            self.proceed_to_new_variant = False
        ctx = self.context
        self.log.bind(
            step_id=ctx.params.step_id,
            variant_id=ctx.params.variant_id,
            editing_context=ctx.kind.value,
        )

    def open_conditions(self) -> None:
        self.conditions_panel_open = True

    def request_add_variant(self) -> None:
        path = self.lifecycle.request_add_variant(self.context.params)
        self.log.debug("Opening new variant draft at %s", path)

    def update_conditions(self, new_conditions: Conditions) -> None:
        """Apply conditions confirmed in the panel."""
        ctx = self.context
        if ctx.is_draft:
            self.finalize_draft_conditions(new_conditions)
            return
        self.conditions.set_conditions(ctx, new_conditions)

    def finalize_draft_conditions(self, new_conditions: Conditions) -> Optional[Variant]:
        """Materialize the drafted variant with its buffered conditions."""
        step_id = self.context.params.step_id
        self.proceed_to_new_variant = True
        variant = self.lifecycle.commit_draft(step_id, new_conditions)
        if variant is None:
            # Leave the draft closable; nothing navigated away from it
            self.proceed_to_new_variant = False
            self.log.warning("Could not create a variant for step '%s'; draft kept open", step_id)
        return variant

    def on_conditions_close(self) -> None:
        """Close the panel and navigate back out of the conditions route."""
        self.conditions_panel_open = False
        path = self.router.current_path()

        if path.endswith(VARIANTS_CONDITIONS_SUFFIX):
            self.router.navigate(path[: -len(CONDITIONS_SUFFIX)])
            return

        if path.endswith(CONDITIONS_SUFFIX):
            self.router.navigate(self.router.base_path)
            return

        if self.context.is_draft and not self.proceed_to_new_variant:
            self.log.debug("Discarding new variant draft")
            self.router.navigate(path[: -len(CREATE_SUFFIX)])

    def request_delete(self) -> PendingDeletion:
        return self.deletion.request_delete(self.context)

    def confirm_delete(self) -> None:
        self.deletion.confirm_delete()

    def cancel_delete(self) -> None:
        self.deletion.cancel_delete()

    def dispose(self) -> None:
        """Stop observing the router; the panel ends closed."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.conditions_panel_open = False
