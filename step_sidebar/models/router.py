"""Navigation contract and an in-memory router."""

from __future__ import annotations

import logging
from typing import Callable, Protocol

from step_sidebar.models.editing_context import RouteParams, parse_route_params

logger = logging.getLogger(__name__)

PathListener = Callable[[str], None]


class Router(Protocol):
    """Narrow routing contract consumed by the sidebar."""

    @property
    def base_path(self) -> str:
        """Path the sidebar routes hang off."""
        ...

    def current_path(self) -> str:
        ...

    def navigate(self, path: str) -> None:
        """Request navigation; callers never wait for it to apply."""
        ...

    def route_params(self) -> RouteParams:
        ...

    def subscribe(self, listener: PathListener) -> Callable[[], None]:
        """Register a path-change listener and return its unsubscribe call."""
        ...


class MemoryRouter:
    """Router keeping its location and history in memory.

    In deferred mode navigations queue until ``commit()`` is called, which
    models a router that applies them after the current handler returns.

    Attributes:
        history: Every applied path, oldest first
        pending: Navigations requested but not yet applied (deferred mode)
    """

    def __init__(self, base_path: str, initial_path: str | None = None, deferred: bool = False) -> None:
        self._base_path = base_path.rstrip("/")
        self._path = initial_path if initial_path is not None else self._base_path
        self._listeners: list[PathListener] = []
        self.deferred = deferred
        self.history: list[str] = [self._path]
        self.pending: list[str] = []

    @property
    def base_path(self) -> str:
        return self._base_path

    def current_path(self) -> str:
        return self._path

    def route_params(self) -> RouteParams:
        return parse_route_params(self._path, self._base_path)

    def navigate(self, path: str) -> None:
        if self.deferred:
            self.pending.append(path)
            return
        self._apply(path)

    def commit(self) -> None:
        """Apply queued navigations in request order."""
        queued, self.pending = self.pending, []
        for path in queued:
            self._apply(path)

    def subscribe(self, listener: PathListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _apply(self, path: str) -> None:
        logger.debug("Navigating %s -> %s", self._path, path)
        self._path = path
        self.history.append(path)
        for listener in list(self._listeners):
            listener(path)
