"""Tests for the menu and text input widgets."""

from scv.core.keys import KeyPress
from scv.ui.themes import get_theme
from scv.widgets.menu import AnimatedMenu, MenuItem, class_management_menu
from scv.widgets.text_input import TextInput
from scv.ui.frame import Frame


def _menu() -> AnimatedMenu:
    return AnimatedMenu(
        [
            MenuItem("Disabled", enabled=False),
            MenuItem("One", hotkey="o"),
            MenuItem.separator(),
            MenuItem("Two", hotkey="t"),
        ],
    )


def test_menu_skips_unselectable_items() -> None:
    menu = _menu()
    assert menu.selected == 1
    menu.select_next()
    assert menu.selected == 3
    menu.select_next()
    assert menu.selected == 1
    menu.select_previous()
    assert menu.selected == 3


def test_menu_navigation_keys() -> None:
    menu = _menu()
    assert menu.navigate(KeyPress("down"))
    assert menu.selected == 3
    assert menu.navigate(KeyPress.char("k"))
    assert menu.selected == 1
    assert menu.navigate(KeyPress("end"))
    assert menu.selected == 3
    assert not menu.navigate(KeyPress("enter"))


def test_menu_hotkeys() -> None:
    menu = _menu()
    assert menu.index_for_hotkey("T") == 3
    assert menu.index_for_hotkey("x") is None
    assert menu.index_for_hotkey(None) is None


def test_menu_select_rejects_separator() -> None:
    menu = _menu()
    menu.select(2)
    assert menu.selected == 1


def test_menu_entrance_progress() -> None:
    menu = class_management_menu("Web 101")
    menu.trigger_entrance()
    menu.update(0.1)
    assert 0.0 < menu.entrance < 1.0
    menu.update(1.0)
    assert menu.entrance == 1.0


def test_menu_renders_titles() -> None:
    menu = class_management_menu("Web 101")
    menu.update(1.0)
    frame = Frame(70, 20)
    frame.render(menu.renderable(get_theme("neon_night")), frame.region)
    text = frame.plain()
    assert "Managing: Web 101" in text
    assert "Delete Class" in text


def test_menu_highlight_band_coverage() -> None:
    menu = _menu()
    assert menu.band(1) == 1.0
    assert menu.band(3) == 0.0
    assert menu.band(1, 3.0) == 0.0
    assert menu.band(3, 2.5) == 0.5
    assert menu.band(2, 2.5) == 0.5


def test_text_input_editing() -> None:
    field = TextInput("Name")
    for ch in "abd":
        assert field.handle_key(KeyPress.char(ch))
    field.handle_key(KeyPress("left"))
    field.handle_key(KeyPress.char("c"))
    assert field.value == "abcd"
    field.handle_key(KeyPress("home"))
    field.handle_key(KeyPress("delete"))
    assert field.value == "bcd"
    field.handle_key(KeyPress("end"))
    field.handle_key(KeyPress("backspace"))
    assert field.value == "bc"
    assert field.cursor == 2


def test_text_input_ignores_control_keys_and_respects_limit() -> None:
    field = TextInput("Name", max_length=3)
    assert not field.handle_key(KeyPress("f5"))
    for ch in "abcdef":
        field.handle_key(KeyPress.char(ch))
    assert field.value == "abc"
    field.handle_key(KeyPress("ctrl+u"))
    assert field.value == ""
