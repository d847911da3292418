"""Transient state of the delete confirmation dialog."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class DeleteTarget(str, Enum):
    """What a confirmed deletion removes."""

    STEP = "step"
    VARIANT = "variant"


@dataclass(frozen=True)
class PendingDeletion:
    """Open or closed delete dialog with the target captured at request time.

    Attributes:
        is_open: Whether the confirmation dialog is showing
        target: Entity kind to delete (None while closed)
        step_id: Step the deletion applies to
        variant_id: Variant to delete (VARIANT target only)
    """

    is_open: bool = False
    target: Optional[DeleteTarget] = None
    step_id: str = ""
    variant_id: str = ""

    @classmethod
    def closed(cls) -> "PendingDeletion":
        return cls()
