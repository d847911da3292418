"""Shared constants for the step sidebar.

Centralizes route markers, form keys and the filter part catalogue used by
several sidebar modules.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Route segment markers
VARIANTS_SEGMENT = "variants"
CONDITIONS_SEGMENT = "conditions"
CREATE_SEGMENT = "create"

# Path suffixes that drive the sidebar
NEW_VARIANT_SUFFIX = "/variants/create"
VARIANTS_CONDITIONS_SUFFIX = "/variants/conditions"
CONDITIONS_SUFFIX = "/conditions"
CREATE_SUFFIX = "/create"

# Form keys
STEPS_KEY = "steps"
VARIANTS_KEY = "variants"
FILTERS_KEY = "filters"

# New variants are inserted at the front of the list
NEW_VARIANT_INDEX = 0

# Channels that never reach a subscriber directly
ACTION_CHANNELS = frozenset({"delay", "digest"})


class FilterPartType(str, Enum):
    """Kind of data a condition can filter on."""

    PAYLOAD = "payload"
    SUBSCRIBER = "subscriber"
    TENANT = "tenant"
    WEBHOOK = "webhook"
    IS_ONLINE = "isOnline"
    IS_ONLINE_IN_LAST = "isOnlineInLast"
    PREVIOUS_STEP = "previousStep"


@dataclass(frozen=True)
class FilterPart:
    """One entry of the filter kind picker in the conditions panel."""

    value: FilterPartType
    label: str


FILTER_PART_LABELS: dict[FilterPartType, str] = {
    FilterPartType.PAYLOAD: "Payload",
    FilterPartType.SUBSCRIBER: "Subscriber",
    FilterPartType.TENANT: "Tenant",
    FilterPartType.WEBHOOK: "Webhook",
    FilterPartType.IS_ONLINE: "Is online",
    FilterPartType.IS_ONLINE_IN_LAST: "Last time was online",
    FilterPartType.PREVIOUS_STEP: "Previous step",
}


def get_filter_parts_list(step_index: int, channel: str | None) -> list[FilterPart]:
    """Build the filter parts offered for a step.

    Online checks only make sense for channels that reach a subscriber, and
    previous-step filters need a step before this one.
    """
    kinds = [
        FilterPartType.PAYLOAD,
        FilterPartType.SUBSCRIBER,
        FilterPartType.TENANT,
        FilterPartType.WEBHOOK,
    ]
    if channel not in ACTION_CHANNELS:
        kinds.extend([FilterPartType.IS_ONLINE, FilterPartType.IS_ONLINE_IN_LAST])
    if step_index > 0:
        kinds.append(FilterPartType.PREVIOUS_STEP)

    return [FilterPart(value=kind, label=FILTER_PART_LABELS[kind]) for kind in kinds]
