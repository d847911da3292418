"""Shared fixtures for sidebar tests."""

from __future__ import annotations

import itertools
import logging
from typing import Any, Callable, Generator

import pytest

import step_sidebar.settings as settings_module
from step_sidebar.controller import SidebarController
from step_sidebar.models.form_store import InMemoryFormStore
from step_sidebar.models.router import MemoryRouter
from step_sidebar.settings import SidebarSettings

BASE = "/workflows/edit/tpl-1"


def condition_group(*children: dict[str, Any]) -> dict[str, Any]:
    return {"type": "GROUP", "value": "AND", "isNegated": False, "children": list(children)}


def payload_rule(field: str, value: str) -> dict[str, Any]:
    return {"on": "payload", "field": field, "value": value, "operator": "EQUAL"}


@pytest.fixture(autouse=True)
def reset_global_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the cached settings from leaking between tests."""
    monkeypatch.setattr(settings_module, "_settings", None)


@pytest.fixture
def restore_logging() -> Generator[None, None, None]:
    """Drop handlers installed by setup_logging and restore the root level."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def form_values() -> dict[str, Any]:
    """Template form with an email step (two variants), a digest and an SMS step."""
    return {
        "name": "Onboarding",
        "steps": [
            {
                "uuid": "step-email",
                "name": "Welcome email",
                "template": {"type": "email", "subject": "Welcome!"},
                "filters": [condition_group(payload_rule("plan", "pro"))],
                "variants": [
                    {
                        "uuid": "var-a",
                        "name": "V2 Welcome email",
                        "template": {"type": "email", "subject": "Welcome back"},
                        "filters": [],
                    },
                    {
                        "uuid": "var-b",
                        "name": "V1 Welcome email",
                        "template": {"type": "email", "subject": "Hi"},
                        "filters": [
                            condition_group(
                                payload_rule("country", "DE"),
                                payload_rule("lang", "de"),
                            )
                        ],
                    },
                ],
            },
            {
                "uuid": "step-digest",
                "name": "Daily digest",
                "template": {"type": "digest"},
                "filters": [],
                "variants": [],
            },
            {
                "uuid": "step-sms",
                "name": "SMS reminder",
                "template": {"type": "sms", "content": "Reminder"},
                "variants": [],
            },
        ],
    }


@pytest.fixture
def store(form_values: dict[str, Any]) -> InMemoryFormStore:
    return InMemoryFormStore(form_values)


@pytest.fixture
def id_factory() -> Callable[[], str]:
    counter = itertools.count(1)
    return lambda: f"new-{next(counter)}"


@pytest.fixture
def make_router() -> Callable[..., MemoryRouter]:
    def _make(suffix: str = "", deferred: bool = False) -> MemoryRouter:
        return MemoryRouter(BASE, initial_path=BASE + suffix, deferred=deferred)

    return _make


@pytest.fixture
def make_controller(
    store: InMemoryFormStore,
    make_router: Callable[..., MemoryRouter],
    id_factory: Callable[[], str],
) -> Callable[..., SidebarController]:
    """Build a controller mounted at BASE + suffix."""

    def _make(suffix: str = "", deferred: bool = False, **kwargs: Any) -> SidebarController:
        kwargs.setdefault("settings", SidebarSettings())
        kwargs.setdefault("id_factory", id_factory)
        return SidebarController(store, make_router(suffix, deferred=deferred), **kwargs)

    return _make
