"""Step and variant records as stored in the template form."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Variant:
    """A variant of a workflow step.

    Attributes:
        uuid: Unique variant id
        name: Display name
        template_type: Channel type of the variant's template
        filters: ConditionSet gating the variant
        template: Full template payload copied from the owning step
    """

    uuid: str
    name: str = ""
    template_type: str = ""
    filters: list[dict[str, Any]] = field(default_factory=list)
    template: dict[str, Any] = field(default_factory=dict, repr=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the form document representation."""
        template = copy.deepcopy(self.template)
        template["type"] = self.template_type
        return {
            "uuid": self.uuid,
            "name": self.name,
            "template": template,
            "filters": copy.deepcopy(self.filters),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Variant":
        """Create from a form document entry."""
        template = data.get("template") or {}
        return cls(
            uuid=data.get("uuid", ""),
            name=data.get("name", ""),
            template_type=template.get("type", ""),
            filters=list(data.get("filters") or []),
            template=dict(template),
        )


@dataclass
class Step:
    """A workflow step and the variants it owns."""

    uuid: str
    name: str = ""
    template_type: str = ""
    filters: list[dict[str, Any]] = field(default_factory=list)
    variants: list[Variant] = field(default_factory=list)
    template: dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def variants_count(self) -> int:
        return len(self.variants)

    def make_variant(self, uuid: str) -> Variant:
        """Build the next variant of this step, named after its ordinal."""
        return Variant(
            uuid=uuid,
            name=f"V{self.variants_count + 1} {self.name}",
            template_type=self.template_type,
            filters=[],
            template=copy.deepcopy(self.template),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the form document representation."""
        template = copy.deepcopy(self.template)
        template["type"] = self.template_type
        return {
            "uuid": self.uuid,
            "name": self.name,
            "template": template,
            "filters": copy.deepcopy(self.filters),
            "variants": [variant.to_dict() for variant in self.variants],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Step":
        """Create from a form document entry."""
        template = data.get("template") or {}
        return cls(
            uuid=data.get("uuid", ""),
            name=data.get("name", ""),
            template_type=template.get("type", ""),
            filters=list(data.get("filters") or []),
            variants=[Variant.from_dict(v) for v in data.get("variants") or []],
            template=dict(template),
        )
