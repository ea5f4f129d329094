from __future__ import annotations

import dataclasses

import pytest

from ussdflow.diagnostics import ScreenTypeError
from ussdflow.screens import (
    MenuItem,
    MenuScreen,
    RouterOption,
    RouterScreen,
    Screen,
    ScreenType,
    make_screen,
    screen_from_dict,
)


@pytest.mark.parametrize("raw", ["Menu", "MENU", "menu", " menu "])
def test_screen_type_parse_ignores_case(raw: str) -> None:
    assert ScreenType.parse(raw) is ScreenType.MENU


def test_screen_type_parse_rejects_unknown() -> None:
    with pytest.raises(ScreenTypeError):
        ScreenType.parse("Carousel")


def test_make_screen_dispatches_on_type() -> None:
    assert type(make_screen("a", "Menu")) is MenuScreen
    assert type(make_screen("b", "ROUTER")) is RouterScreen
    assert type(make_screen("c", "Function", function="buy_airtime")) is Screen
    assert type(make_screen("d", ScreenType.QUIT)) is Screen


def test_plain_screen_cannot_carry_menu_type() -> None:
    """Menu/router screens must use their own variant."""
    with pytest.raises(ScreenTypeError):
        Screen(name="x", screen_type=ScreenType.MENU)
    with pytest.raises(ScreenTypeError):
        MenuScreen(name="x", screen_type=ScreenType.ROUTER)


def test_relations_absent_until_fetched() -> None:
    menu = make_screen("m", "Menu")
    router = make_screen("r", "Router")
    plain = make_screen("p", "Input")

    assert menu.menu_items is None
    assert router.router_options is None
    assert plain.menu_items is None
    assert plain.router_options is None

    fetched_empty = make_screen("m2", "Menu", menu_items=[])
    assert fetched_empty.menu_items == ()


def test_empty_references_normalised_to_none() -> None:
    screen = make_screen("a", "Input", default_next_screen="")
    item = MenuItem(option="1", display_name="About", next_screen="  ")
    option = RouterOption(router_option="x", next_screen="")

    assert screen.default_next_screen is None
    assert item.next_screen is None
    assert option.next_screen is None


def test_empty_name_rejected() -> None:
    with pytest.raises(ScreenTypeError):
        make_screen("", "Input")


def test_screen_from_dict_with_item_mapping() -> None:
    """Menu documents key items by name; the key becomes MenuItem.name."""
    screen = screen_from_dict(
        {
            "text": "Welcome",
            "screen_type": "Menu",
            "default_next_screen": "Quit",
            "menu_items": {
                "about": {"option": "1", "display_name": "About", "next_screen": "About"},
                "help": {"option": "2", "display_name": "Help", "next_screen": "Help"},
            },
        },
        name="Home",
    )

    assert isinstance(screen, MenuScreen)
    assert screen.name == "Home"
    assert screen.text == "Welcome"
    assert [i.name for i in screen.menu_items] == ["about", "help"]
    assert [i.screen_name for i in screen.menu_items] == ["Home", "Home"]
    assert [i.next_screen for i in screen.menu_items] == ["About", "Help"]


def test_screen_from_dict_router_options() -> None:
    screen = screen_from_dict(
        {
            "name": "Route",
            "screen_type": "Router",
            "default_next_screen": "Fallback",
            "router_options": [
                {"router_option": "{{balance}} > 0", "next_screen": "Buy"},
                {"router_option": "true"},
            ],
        }
    )

    assert isinstance(screen, RouterScreen)
    assert [o.next_screen for o in screen.router_options] == ["Buy", None]


def test_screen_from_dict_requires_name() -> None:
    with pytest.raises(ScreenTypeError):
        screen_from_dict({"screen_type": "Input"})


def test_replace_keeps_variant_and_relations() -> None:
    menu = make_screen(
        "m", "Menu", menu_items=[{"option": "1", "display_name": "A", "next_screen": "a"}]
    )
    copy = dataclasses.replace(menu)

    assert type(copy) is MenuScreen
    assert copy is not menu
    assert copy.menu_items == menu.menu_items


def test_to_dict_round_trips_fields() -> None:
    menu = make_screen(
        "m",
        "Menu",
        text="Pick",
        menu_items=[{"option": "1", "display_name": "A", "next_screen": "a"}],
    )
    data = menu.to_dict()

    assert data["screen_type"] == "Menu"
    assert data["menu_items"] == [{"option": "1", "display_name": "A", "next_screen": "a"}]
    assert screen_from_dict(data).menu_items == menu.menu_items
