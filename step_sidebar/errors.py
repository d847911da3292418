"""Structured exception hierarchy for the step sidebar.

The controller itself degrades to safe defaults instead of raising. These
exceptions come from the collaborators around it: settings loading and the
in-memory form store.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

__all__ = [
    "SidebarError",
    "ConfigurationError",
    "FormPathError",
]


class SidebarError(Exception):
    """Base exception for all step sidebar errors.

    Provides structured error information for debugging.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Dict[str, Any]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        self.details = details or {}
        self.suggestion = suggestion

        parts = [message]

        if details:
            detail_lines = [f"  {k}: {v}" for k, v in details.items()]
            parts.append("\nDetails:")
            parts.extend(detail_lines)

        if suggestion:
            parts.append(f"\nSuggestion: {suggestion}")

        super().__init__("\n".join(parts) if len(parts) > 1 else message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "suggestion": self.suggestion,
        }


class ConfigurationError(SidebarError):
    """Error in sidebar settings.

    Raised when a settings file holds a value the sidebar cannot use.
    """

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Any = None,
        **kwargs: Any,
    ) -> None:
        self.field = field
        self.value = value

        details = kwargs.pop("details", {})
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)

        super().__init__(message, details=details, **kwargs)


class FormPathError(SidebarError):
    """A structured form key does not address a writable location.

    Raised by the form store when a parent container is missing or a list
    index is out of range.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        self.path = path

        details = kwargs.pop("details", {})
        if path:
            details["path"] = path

        suggestion = kwargs.pop("suggestion", None)
        if not suggestion:
            suggestion = (
                "Check that the step and variant exist in the form before "
                "writing to them."
            )

        super().__init__(message, details=details, suggestion=suggestion, **kwargs)
