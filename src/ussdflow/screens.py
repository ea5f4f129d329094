from __future__ import annotations

"""
Screen records of a USSD menu flow.

Screens are a tagged variant on ``screen_type``:

- Screen        : INITIAL, INPUT, FUNCTION and QUIT screens (no child records).
- MenuScreen    : MENU screens, carrying ``menu_items``.
- RouterScreen  : ROUTER screens, carrying ``router_options``.

Child relations are ``None`` until fetched and a tuple (possibly empty)
afterwards, so "not fetched" and "fetched, nothing there" stay distinct.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping, Optional

from .diagnostics import ScreenTypeError


class ScreenType(str, Enum):
    INITIAL = "Initial"
    MENU = "Menu"
    INPUT = "Input"
    FUNCTION = "Function"
    ROUTER = "Router"
    QUIT = "Quit"

    @classmethod
    def parse(cls, value: str | ScreenType) -> ScreenType:
        """Parse a screen type name, ignoring case ("Menu", "MENU", "menu")."""
        if isinstance(value, ScreenType):
            return value
        key = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == key:
                return member
        raise ScreenTypeError(f"Unknown screen type {value!r}")


def _ref(value: Optional[str]) -> Optional[str]:
    """Normalise a screen reference: empty strings mean 'no reference'."""
    if value is None:
        return None
    value = str(value)
    return value if value.strip() else None


@dataclass(frozen=True, slots=True)
class MenuItem:
    """A selectable option on a MENU screen."""

    option: str
    display_name: str
    next_screen: Optional[str] = None
    screen_name: Optional[str] = None
    name: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "next_screen", _ref(self.next_screen))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, name: Optional[str] = None) -> MenuItem:
        return cls(
            option=str(data.get("option", "")),
            display_name=str(data.get("display_name", "")),
            next_screen=data.get("next_screen"),
            screen_name=data.get("screen_name"),
            name=data.get("name", name),
        )


@dataclass(frozen=True, slots=True)
class RouterOption:
    """A conditional routing rule on a ROUTER screen."""

    router_option: str
    next_screen: Optional[str] = None
    screen_name: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "next_screen", _ref(self.next_screen))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RouterOption:
        return cls(
            router_option=str(data.get("router_option", "")),
            next_screen=data.get("next_screen"),
            screen_name=data.get("screen_name"),
        )


@dataclass(slots=True)
class Screen:
    """A screen without child records."""

    name: str
    screen_type: ScreenType
    text: str = ""
    default_next_screen: Optional[str] = None
    service_code: Optional[str] = None
    function: Optional[str] = None
    input_identifier: Optional[str] = None
    input_type: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ScreenTypeError("Screen name must be non-empty")
        self.screen_type = ScreenType.parse(self.screen_type)
        self.default_next_screen = _ref(self.default_next_screen)
        self._check_type()

    def _check_type(self) -> None:
        if self.screen_type in (ScreenType.MENU, ScreenType.ROUTER):
            raise ScreenTypeError(
                f"Screen {self.name!r} of type {self.screen_type.value} "
                f"must be a {'MenuScreen' if self.screen_type is ScreenType.MENU else 'RouterScreen'}"
            )

    @property
    def menu_items(self) -> Optional[tuple[MenuItem, ...]]:
        return None

    @property
    def router_options(self) -> Optional[tuple[RouterOption, ...]]:
        return None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "screen_type": self.screen_type.value,
            "text": self.text,
            "default_next_screen": self.default_next_screen,
            "service_code": self.service_code,
            "function": self.function,
            "input_identifier": self.input_identifier,
            "input_type": self.input_type,
        }
        return data


@dataclass(slots=True)
class MenuScreen(Screen):
    """A MENU screen; ``menu_items`` is populated by the relation enricher."""

    screen_type: ScreenType = ScreenType.MENU
    menu_items: Optional[tuple[MenuItem, ...]] = field(default=None)  # type: ignore[assignment]

    def _check_type(self) -> None:
        if self.screen_type is not ScreenType.MENU:
            raise ScreenTypeError(
                f"MenuScreen {self.name!r} has screen type {self.screen_type.value}"
            )
        if self.menu_items is not None:
            self.menu_items = tuple(self.menu_items)

    def to_dict(self) -> dict[str, Any]:
        data = Screen.to_dict(self)
        data["menu_items"] = (
            None if self.menu_items is None
            else [
                {
                    "option": item.option,
                    "display_name": item.display_name,
                    "next_screen": item.next_screen,
                }
                for item in self.menu_items
            ]
        )
        return data


@dataclass(slots=True)
class RouterScreen(Screen):
    """A ROUTER screen; ``router_options`` is populated by the relation enricher."""

    screen_type: ScreenType = ScreenType.ROUTER
    router_options: Optional[tuple[RouterOption, ...]] = field(default=None)  # type: ignore[assignment]

    def _check_type(self) -> None:
        if self.screen_type is not ScreenType.ROUTER:
            raise ScreenTypeError(
                f"RouterScreen {self.name!r} has screen type {self.screen_type.value}"
            )
        if self.router_options is not None:
            self.router_options = tuple(self.router_options)

    def to_dict(self) -> dict[str, Any]:
        data = Screen.to_dict(self)
        data["router_options"] = (
            None if self.router_options is None
            else [
                {"router_option": opt.router_option, "next_screen": opt.next_screen}
                for opt in self.router_options
            ]
        )
        return data


def make_screen(name: str, screen_type: str | ScreenType = ScreenType.INPUT, **fields: Any) -> Screen:
    """Construct the screen variant matching ``screen_type``."""
    kind = ScreenType.parse(screen_type)
    if kind is ScreenType.MENU:
        items = fields.pop("menu_items", None)
        if items is not None:
            fields["menu_items"] = tuple(_menu_items(items, name))
        return MenuScreen(name=name, screen_type=kind, **fields)
    if kind is ScreenType.ROUTER:
        options = fields.pop("router_options", None)
        if options is not None:
            fields["router_options"] = tuple(_router_options(options, name))
        return RouterScreen(name=name, screen_type=kind, **fields)
    fields.pop("menu_items", None)
    fields.pop("router_options", None)
    return Screen(name=name, screen_type=kind, **fields)


def screen_from_dict(data: Mapping[str, Any], *, name: Optional[str] = None) -> Screen:
    """
    Build a screen from a plain mapping.

    ``name`` overrides/supplies the screen name (menu documents key screens
    by name). ``menu_items`` may be a list of item mappings or a mapping of
    item name -> item mapping. Unknown keys are ignored.
    """
    screen_name = name if name is not None else data.get("name")
    if not screen_name:
        raise ScreenTypeError("Screen mapping has no name")

    fields: dict[str, Any] = {
        key: data[key]
        for key in (
            "text",
            "default_next_screen",
            "service_code",
            "function",
            "input_identifier",
            "input_type",
            "menu_items",
            "router_options",
        )
        if key in data
    }
    if fields.get("text") is None:
        fields.pop("text", None)
    return make_screen(str(screen_name), data.get("screen_type", ScreenType.INPUT), **fields)


def _menu_items(items: Iterable[Any] | Mapping[str, Any], screen_name: str) -> Iterable[MenuItem]:
    if isinstance(items, Mapping):
        for key, item in items.items():
            yield item if isinstance(item, MenuItem) else MenuItem.from_dict(
                {"screen_name": screen_name, **item}, name=key
            )
        return
    for item in items:
        yield item if isinstance(item, MenuItem) else MenuItem.from_dict(
            {"screen_name": screen_name, **item}
        )


def _router_options(options: Iterable[Any], screen_name: str) -> Iterable[RouterOption]:
    for opt in options:
        yield opt if isinstance(opt, RouterOption) else RouterOption.from_dict(
            {"screen_name": screen_name, **opt}
        )
