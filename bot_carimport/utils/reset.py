from aiogram import types
from aiogram.fsm.context import FSMContext

from bot_carimport.constants import BTN_MAIN_MENU
from bot_carimport.keyboards.main_menu import main_menu


async def reset_to_menu(message: types.Message, state: FSMContext):
    """Clear the FSM and return to the main menu."""
    await state.clear()
    await message.answer(f"{BTN_MAIN_MENU}:", reply_markup=main_menu())
