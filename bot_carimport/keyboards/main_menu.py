from aiogram.types import ReplyKeyboardMarkup, KeyboardButton

from bot_carimport.constants import BTN_CALC, BTN_EXIT, BTN_FAQ, BTN_RATE


def main_menu() -> ReplyKeyboardMarkup:
    kb = [
        [KeyboardButton(text=BTN_CALC)],
        [KeyboardButton(text=BTN_RATE), KeyboardButton(text=BTN_FAQ)],
        [KeyboardButton(text=BTN_EXIT)],
    ]
    return ReplyKeyboardMarkup(keyboard=kb, resize_keyboard=True)
