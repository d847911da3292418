"""Sidebar project settings loader.

Reads sidebar configuration from .step-sidebar.yaml in the project root.

Example .step-sidebar.yaml:
    sidebar:
      readonly: false          # Open the conditions panel read-only
      default_filter: payload  # Filter kind preselected for new conditions
      log_level: DEBUG
      json_logs: true
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

from step_sidebar.constants import FilterPartType
from step_sidebar.errors import ConfigurationError

logger = logging.getLogger(__name__)

SETTINGS_FILE = ".step-sidebar.yaml"


@dataclass
class SidebarSettings:
    """Sidebar configuration settings."""

    # Environment is read-only (conditions can be viewed, not edited)
    readonly: bool = False

    # Filter kind preselected when adding a condition
    default_filter: FilterPartType = FilterPartType.PAYLOAD

    # Logging (None defers to SIDEBAR_LOG_LEVEL / LOG_LEVEL)
    log_level: str | None = None
    json_logs: bool = False

    @classmethod
    def load(cls, project_root: Path | None = None) -> "SidebarSettings":
        """Load settings from .step-sidebar.yaml in project root.

        Args:
            project_root: Project root directory. Defaults to cwd.

        Returns:
            SidebarSettings with values from config file or defaults.

        Raises:
            ConfigurationError: If default_filter names an unknown filter kind
        """
        root = project_root or Path.cwd()
        config_path = root / SETTINGS_FILE

        if not config_path.exists():
            return cls()

        try:
            with open(config_path, encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
            logger.warning("Ignoring unreadable %s: %s", config_path, exc)
            return cls()

        if not isinstance(config, dict):
            config = {}
        sidebar_config = config.get("sidebar") or {}
        if not isinstance(sidebar_config, dict):
            logger.warning("Ignoring %s: the sidebar section is not a mapping", config_path)
            return cls()
        default_filter = sidebar_config.get("default_filter", cls.default_filter.value)
        try:
            filter_kind = FilterPartType(default_filter)
        except ValueError:
            raise ConfigurationError(
                f"Unknown default filter '{default_filter}'",
                field="sidebar.default_filter",
                value=default_filter,
                suggestion="Use one of: " + ", ".join(k.value for k in FilterPartType),
            ) from None

        return cls(
            readonly=bool(sidebar_config.get("readonly", False)),
            default_filter=filter_kind,
            log_level=sidebar_config.get("log_level"),
            json_logs=bool(sidebar_config.get("json_logs", False)),
        )


# Global settings instance (loaded on first access)
_settings: SidebarSettings | None = None


def get_settings(reload: bool = False) -> SidebarSettings:
    """Get the global sidebar settings.

    Args:
        reload: Force reload from config file.
    """
    global _settings
    if _settings is None or reload:
        _settings = SidebarSettings.load()
    return _settings
