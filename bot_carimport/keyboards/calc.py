from aiogram.types import ReplyKeyboardMarkup, KeyboardButton

from bot_carimport.constants import (
    BTN_ELECTRIC,
    BTN_FUEL,
    BTN_HYBRID,
    BTN_MAIN_MENU,
    BTN_NEW,
    BTN_OTHER,
    BTN_SEDAN,
    BTN_SUV,
)
from bot_carimport.keyboards.common import build_menu

FUEL_OPTIONS = [BTN_FUEL, BTN_HYBRID, BTN_ELECTRIC]
UTILITY_OPTIONS = [BTN_SEDAN, BTN_SUV, BTN_OTHER]


def options_keyboard(options: list[str]) -> ReplyKeyboardMarkup:
    # Long catalog lists (makers) read better in three columns
    columns = 3 if len(options) > 12 else 2
    return build_menu(options, columns=columns)


def fuel_keyboard() -> ReplyKeyboardMarkup:
    return build_menu(FUEL_OPTIONS, columns=3)


def utility_keyboard() -> ReplyKeyboardMarkup:
    return build_menu(UTILITY_OPTIONS, columns=3)


def result_keyboard() -> ReplyKeyboardMarkup:
    kb = [
        [KeyboardButton(text=BTN_NEW)],
        [KeyboardButton(text=BTN_MAIN_MENU)],
    ]
    return ReplyKeyboardMarkup(keyboard=kb, resize_keyboard=True)


__all__ = [
    "FUEL_OPTIONS",
    "UTILITY_OPTIONS",
    "options_keyboard",
    "fuel_keyboard",
    "utility_keyboard",
    "result_keyboard",
]
