from typing import Optional

from aiogram.types import KeyboardButton, ReplyKeyboardMarkup

from bot_carimport.constants import BTN_BACK, BTN_MAIN_MENU


def nav_row() -> list[KeyboardButton]:
    return [KeyboardButton(text=BTN_BACK), KeyboardButton(text=BTN_MAIN_MENU)]


def back_menu(placeholder: Optional[str] = None) -> ReplyKeyboardMarkup:
    """Keyboard for free-text steps: navigation only, with an input hint."""
    return ReplyKeyboardMarkup(
        keyboard=[nav_row()],
        resize_keyboard=True,
        input_field_placeholder=placeholder,
    )


def build_menu(options: list[str], columns: int = 2) -> ReplyKeyboardMarkup:
    """Lay ``options`` out ``columns`` per row, followed by the navigation row."""
    columns = max(1, int(columns))
    rows = [
        [KeyboardButton(text=o) for o in options[i : i + columns]]
        for i in range(0, len(options), columns)
    ]
    rows.append(nav_row())
    return ReplyKeyboardMarkup(keyboard=rows, resize_keyboard=True)


__all__ = ["nav_row", "back_menu", "build_menu"]
