from aiogram import Router, types, F
from aiogram.filters import StateFilter
from aiogram.fsm.context import FSMContext

from bot_carimport.constants import BTN_FAQ, BTN_CALC
from bot_carimport.keyboards.main_menu import main_menu

router = Router()

FAQ_TEXT = (
    "ℹ️ <b>FAQ</b>\n"
    "- How is the tax calculated? The catalog value as new is depreciated by age, "
    "freight and insurance are added (CIF), and duties are applied to the CIF value.\n"
    "- Fuel cars pay customs duty (25%), excise for sedans/SUVs by engine size, and VAT (18%).\n"
    "- Hybrids pay no customs duty, excise for sedans/SUVs by age, withholding tax (5%) and VAT.\n"
    "- Electric cars pay only the infrastructure levy (1.5%) and the registration fee.\n"
    "- Start with \"{calc}\" in the main menu.".format(calc=BTN_CALC)
)


@router.message(F.text == BTN_FAQ, StateFilter(None))
async def show_faq(message: types.Message, state: FSMContext) -> None:
    await message.answer(FAQ_TEXT, reply_markup=main_menu())
