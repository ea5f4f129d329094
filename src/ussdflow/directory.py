from __future__ import annotations

"""Screen directory and the collaborator protocol that supplies screens."""

from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Iterator, Mapping, Optional, Protocol, Sequence

from .diagnostics import BuildWarning, WarningKind
from .log import getLogger
from .screens import MenuItem, RouterOption, Screen, screen_from_dict

logger = getLogger(__name__)


class ScreenSource(Protocol):
    """Protocol for data-fetch collaborators that provide screens and their children."""

    async def fetch_all_screens(self) -> Sequence[Screen]:
        """Return every screen record."""

    async def fetch_menu_items(self, screen_name: str) -> Sequence[MenuItem]:
        """Return the menu items of the MENU screen ``screen_name``, in stored order."""

    async def fetch_router_options(self, screen_name: str) -> Sequence[RouterOption]:
        """Return the router options of the ROUTER screen ``screen_name``, in stored order."""


class ScreenDirectory(Mapping[str, Screen]):
    """
    Ordered mapping screen name -> Screen for the duration of one graph build.

    The directory holds its own copies of the records it is given, so
    enrichment never mutates the caller's screen list. Iteration follows
    input order. Screens repeating an earlier name are dropped and reported
    as ``duplicate_screen`` warnings.
    """

    __slots__ = ("_screens", "warnings")

    def __init__(self, screens: Iterable[Screen] = ()) -> None:
        self._screens: dict[str, Screen] = {}
        self.warnings: list[BuildWarning] = []
        for screen in screens:
            if screen.name in self._screens:
                logger.warning("Duplicate screen name %r ignored", screen.name)
                self.warnings.append(
                    BuildWarning(
                        WarningKind.DUPLICATE_SCREEN,
                        screen.name,
                        "a screen with this name appeared earlier in the list",
                    )
                )
                continue
            self._screens[screen.name] = replace(screen)

    @classmethod
    def from_menu(cls, menu: Mapping[str, Any]) -> ScreenDirectory:
        """
        Build a directory from a menu document.

        Accepts either ``{"menus": {name: screen, ...}}`` or the bare
        ``{name: screen, ...}`` mapping; screens are keyed by name.
        """
        menus = menu.get("menus", menu)
        return cls(screen_from_dict(data, name=name) for name, data in menus.items())

    # Mapping API ----------------------------------------------------------

    def __getitem__(self, name: str) -> Screen:
        return self._screens[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._screens)

    def __len__(self) -> int:
        return len(self._screens)

    def __contains__(self, name: object) -> bool:
        return name in self._screens

    # Convenience ----------------------------------------------------------

    def screens(self) -> list[Screen]:
        """Return the screens in input order."""
        return list(self._screens.values())

    def names(self) -> list[str]:
        return list(self._screens)

    def __repr__(self) -> str:
        return f"ScreenDirectory(num_screens={len(self._screens)})"


@dataclass(slots=True)
class InMemoryScreenSource(ScreenSource):
    """Serve screens and child records held in memory (fixtures, demos, tests)."""

    screens: Sequence[Screen]
    menu_items: Mapping[str, Sequence[MenuItem]] = field(default_factory=dict)
    router_options: Mapping[str, Sequence[RouterOption]] = field(default_factory=dict)

    async def fetch_all_screens(self) -> Sequence[Screen]:
        return list(self.screens)

    async def fetch_menu_items(self, screen_name: str) -> Sequence[MenuItem]:
        return list(self.menu_items.get(screen_name, ()))

    async def fetch_router_options(self, screen_name: str) -> Sequence[RouterOption]:
        return list(self.router_options.get(screen_name, ()))

    @classmethod
    def from_records(
        cls,
        screens: Sequence[Screen],
        menu_items: Iterable[MenuItem] = (),
        router_options: Iterable[RouterOption] = (),
    ) -> InMemoryScreenSource:
        """Group flat child records by their ``screen_name`` back reference."""
        items: dict[str, list[MenuItem]] = {}
        for item in menu_items:
            items.setdefault(_owner(item.screen_name, item), []).append(item)
        options: dict[str, list[RouterOption]] = {}
        for opt in router_options:
            options.setdefault(_owner(opt.screen_name, opt), []).append(opt)
        return cls(screens=screens, menu_items=items, router_options=options)


def _owner(screen_name: Optional[str], record: object) -> str:
    if not screen_name:
        raise ValueError(f"Child record {record!r} has no screen_name")
    return screen_name
