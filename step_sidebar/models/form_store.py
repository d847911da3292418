"""Form state store addressed by structured dotted keys.

The sidebar reads and writes the template form through two calls, ``watch``
and ``set_value``. ``FormStore`` is that contract; ``InMemoryFormStore`` is a
dict-backed implementation used by the CLI and the tests.
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any, Protocol

import yaml

from step_sidebar.errors import FormPathError

logger = logging.getLogger(__name__)


class FormStore(Protocol):
    """Narrow form-state contract consumed by the sidebar."""

    def watch(self, path: str) -> Any:
        """Read the current value at ``path`` (None when absent)."""
        ...

    def set_value(self, path: str, value: Any, should_dirty: bool = True) -> None:
        """Write ``value`` at ``path``."""
        ...


def _split(path: str) -> list[str]:
    return [part for part in path.split(".") if part]


def _child(container: Any, key: str) -> tuple[bool, Any]:
    """Look up one path segment, returning (found, value)."""
    if isinstance(container, dict):
        if key in container:
            return True, container[key]
        return False, None
    if isinstance(container, list) and key.isdigit():
        index = int(key)
        if index < len(container):
            return True, container[index]
    return False, None


class InMemoryFormStore:
    """Nested dict/list form document with dirty tracking.

    Attributes:
        dirty_fields: Keys written with ``should_dirty=True``, in write order
    """

    def __init__(self, values: dict[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = copy.deepcopy(values) if values else {}
        self.dirty_fields: list[str] = []

    @classmethod
    def from_yaml(cls, path: Path) -> "InMemoryFormStore":
        """Load a form document from a YAML file.

        Args:
            path: Path to the YAML document

        Returns:
            Store holding the document (empty for an empty file)
        """
        with open(path, encoding="utf-8") as f:
            values = yaml.safe_load(f) or {}
        logger.debug("Loaded form document from %s", path)
        return cls(values)

    def to_yaml(self) -> str:
        """Dump the form document as YAML."""
        return yaml.safe_dump(self._values, sort_keys=False, default_flow_style=False)

    @property
    def is_dirty(self) -> bool:
        return bool(self.dirty_fields)

    def get_values(self) -> dict[str, Any]:
        """Return a deep copy of the whole form document."""
        return copy.deepcopy(self._values)

    def watch(self, path: str) -> Any:
        """Read the value at a dotted key, or None when any segment is missing."""
        current: Any = self._values
        for key in _split(path):
            found, current = _child(current, key)
            if not found:
                return None
        return current

    def set_value(self, path: str, value: Any, should_dirty: bool = True) -> None:
        """Write a value at a dotted key.

        The parent container must exist. A list index may address an existing
        element or the position just past the end (append).

        Raises:
            FormPathError: If the parent is missing or the index is out of range
        """
        keys = _split(path)
        if not keys:
            raise FormPathError("Cannot write to the form root", path=path)

        parent: Any = self._values
        for key in keys[:-1]:
            found, parent = _child(parent, key)
            if not found:
                raise FormPathError(f"Missing form key '{key}'", path=path)

        value = copy.deepcopy(value)
        last = keys[-1]
        if isinstance(parent, dict):
            parent[last] = value
        elif isinstance(parent, list) and last.isdigit() and int(last) <= len(parent):
            index = int(last)
            if index == len(parent):
                parent.append(value)
            else:
                parent[index] = value
        else:
            raise FormPathError(f"Cannot write '{last}' into {type(parent).__name__}", path=path)

        if should_dirty and path not in self.dirty_fields:
            self.dirty_fields.append(path)
