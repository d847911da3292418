"""Inspect the sidebar state for a form document at a given path.

Usage:
    python -m step_sidebar form.yaml PATH --base-path BASE [--readonly] [-v] [--json-logs]
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import yaml

from step_sidebar.controller import SidebarController
from step_sidebar.logging_config import setup_logging
from step_sidebar.models.form_store import InMemoryFormStore
from step_sidebar.models.router import MemoryRouter
from step_sidebar.settings import get_settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="step-sidebar",
        description="Print the step sidebar state for a template form at a navigation path",
    )
    parser.add_argument("form", help="YAML file holding the template form (with a 'steps' list)")
    parser.add_argument("path", help="Navigation path the sidebar is showing")
    parser.add_argument("--base-path", default="", help="Path the sidebar routes hang off")
    parser.add_argument("--readonly", action="store_true", help="Open the conditions panel read-only")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(
        verbose=args.verbose,
        json_format=args.json_logs or settings.json_logs,
        level_name=settings.log_level,
    )

    form_path = Path(args.form)
    try:
        store = InMemoryFormStore.from_yaml(form_path)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        logger.error("Could not read form %s: %s", form_path, exc)
        return 1

    router = MemoryRouter(args.base_path, initial_path=args.path)
    controller = SidebarController(
        store,
        router,
        readonly=True if args.readonly else None,
        settings=settings,
    )
    try:
        print(yaml.safe_dump(controller.snapshot(), sort_keys=False, default_flow_style=False), end="")
    finally:
        controller.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(main())
