from aiogram import Router, types, F
from aiogram.filters import Command, StateFilter
from aiogram.fsm.context import FSMContext

from bot_carimport.constants import (
    BTN_EXIT,
    BTN_MAIN_MENU,
    BTN_RATE,
    CANCEL_TEXT,
    EXIT_TEXT,
    NOTHING_TO_CANCEL_TEXT,
    RATE_TEXT,
    WELCOME_TEXT,
)
from bot_carimport.keyboards.main_menu import main_menu
from bot_carimport.services.rates import ExchangeRateProvider
from bot_carimport.utils.formatting import format_rate_line
from bot_carimport.utils.reset import reset_to_menu


router = Router()


@router.message(Command("start"), StateFilter("*"))
async def cmd_start(message: types.Message, state: FSMContext):
    await state.clear()
    await message.answer(WELCOME_TEXT, reply_markup=main_menu())


@router.message(F.text == BTN_MAIN_MENU)
async def go_main_menu(message: types.Message, state: FSMContext):
    await reset_to_menu(message, state)


@router.message(Command("cancel"), StateFilter("*"))
async def cmd_cancel(message: types.Message, state: FSMContext):
    if await state.get_state() is None:
        await message.answer(NOTHING_TO_CANCEL_TEXT, reply_markup=main_menu())
        return
    await message.answer(CANCEL_TEXT)
    await reset_to_menu(message, state)


@router.message(Command("rate"), StateFilter(None))
@router.message(F.text == BTN_RATE, StateFilter(None))
async def show_rate(
    message: types.Message,
    rate_provider: ExchangeRateProvider,
    local_currency: str = "RWF",
):
    """Show the rate the next calculation would use and where it came from."""
    quote = await rate_provider.current_rate()
    text = RATE_TEXT.format(line=format_rate_line(quote, local_currency), day=quote.as_of.isoformat())
    await message.answer(text, reply_markup=main_menu())


@router.message(F.text == BTN_EXIT)
async def exit_bot(message: types.Message, state: FSMContext):
    await state.clear()
    await message.answer(EXIT_TEXT, reply_markup=types.ReplyKeyboardRemove())
