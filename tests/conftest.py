from __future__ import annotations

from typing import Sequence

import pytest

from ussdflow.config import AppSettings
from ussdflow.screens import MenuItem, RouterOption, Screen


# ---------------------------------------------------------------------------
# Fake screen sources
# ---------------------------------------------------------------------------


class RecordingSource:
    """
    In-memory ScreenSource that records every fetch and can be told to fail.

    - failing: screen names whose child fetch raises RuntimeError.
    """

    def __init__(
        self,
        screens: Sequence[Screen] = (),
        menu_items: dict[str, list[MenuItem]] | None = None,
        router_options: dict[str, list[RouterOption]] | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self.screens = list(screens)
        self.menu_items = menu_items or {}
        self.router_options = router_options or {}
        self.failing = failing or set()
        self.calls: list[tuple[str, str]] = []

    async def fetch_all_screens(self) -> Sequence[Screen]:
        self.calls.append(("screens", ""))
        return list(self.screens)

    async def fetch_menu_items(self, screen_name: str) -> Sequence[MenuItem]:
        self.calls.append(("menu_items", screen_name))
        if screen_name in self.failing:
            raise RuntimeError(f"menu items for {screen_name} unavailable")
        return list(self.menu_items.get(screen_name, []))

    async def fetch_router_options(self, screen_name: str) -> Sequence[RouterOption]:
        self.calls.append(("router_options", screen_name))
        if screen_name in self.failing:
            raise RuntimeError(f"router options for {screen_name} unavailable")
        return list(self.router_options.get(screen_name, []))


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings()


@pytest.fixture
def source_factory() -> type[RecordingSource]:
    return RecordingSource
