from __future__ import annotations

from typing import Protocol


class Navigator(Protocol):
    """Port for moving the client to another screen. Fire-and-forget."""

    def go_to(self, route: str) -> None: ...


class RecordingNavigator(Navigator):
    """
    Navigator for request/response delivery.

    An HTTP API cannot push the browser anywhere, so the requested route is
    recorded and handed back to the client as ``next``.
    """

    def __init__(self) -> None:
        self.routes: list[str] = []

    def go_to(self, route: str) -> None:
        self.routes.append(route)

    @property
    def last_route(self) -> str | None:
        return self.routes[-1] if self.routes else None
