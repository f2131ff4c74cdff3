from aiogram import Router, types, F
from aiogram.filters import StateFilter
from aiogram.fsm.context import FSMContext

from bot_carimport.keyboards.main_menu import main_menu
from bot_carimport.constants import FALLBACK_UNKNOWN


router = Router()


@router.message(StateFilter(None), F.text)
async def fallback_top_level(message: types.Message, state: FSMContext) -> None:
    """Catch-all for unrecognized top-level text."""
    await message.answer(FALLBACK_UNKNOWN, reply_markup=main_menu())
