from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional

from aiogram import F, Router, types
from aiogram.fsm.context import FSMContext

from bot_carimport.constants import (
    BTN_CALC,
    BTN_NEW,
    CALC_ELECTRIC_STEPS,
    CALC_TOTAL_STEPS,
    ERROR_CALCULATION,
    ERROR_CATALOG,
    ERROR_ENGINE_CAPACITY,
    ERROR_FREIGHT,
    ERROR_INSURANCE,
    ERROR_NO_OPTIONS,
    ERROR_PRICE_NOT_FOUND,
    ERROR_SELECT_FROM_KEYBOARD,
    HINT_AMOUNT_USD,
    HINT_ENGINE_CAPACITY,
    MSG_REFERENCE_PRICE,
    PROMPT_ENGINE_CAPACITY,
    PROMPT_FREIGHT,
    PROMPT_FUEL,
    PROMPT_INSURANCE,
    PROMPT_MAKER,
    PROMPT_MODEL,
    PROMPT_SPEC,
    PROMPT_UTILITY,
    PROMPT_YEAR,
)
from bot_carimport.errors import UpstreamUnavailable, ValidationError
from bot_carimport.keyboards.calc import (
    FUEL_OPTIONS,
    UTILITY_OPTIONS,
    fuel_keyboard,
    options_keyboard,
    result_keyboard,
    utility_keyboard,
)
from bot_carimport.keyboards.common import back_menu
from bot_carimport.models import FuelType, SelectionLevel, SelectionState, UtilityType
from bot_carimport.services.catalog import CatalogClient
from bot_carimport.services.rates import ExchangeRateProvider
from bot_carimport.states.calc import CalcStates
from bot_carimport.tariff import DEFAULT_SCHEDULE, TariffSchedule, TaxInput, compute_breakdown
from bot_carimport.utils.formatting import fmt_usd, format_result_message
from bot_carimport.utils.navigation import NavigationManager, NavStep, with_nav
from bot_carimport.utils.reset import reset_to_menu

logger = logging.getLogger(__name__)

router = Router()

_SELECTION_STEPS = {
    SelectionLevel.MAKER: (CalcStates.maker, PROMPT_MAKER),
    SelectionLevel.YEAR: (CalcStates.year, PROMPT_YEAR),
    SelectionLevel.MODEL: (CalcStates.model, PROMPT_MODEL),
    SelectionLevel.SPEC: (CalcStates.spec, PROMPT_SPEC),
}


def _parse_amount(text: Optional[str]) -> Optional[Decimal]:
    """Parse a non-negative amount; ``None`` if the text is not one."""
    try:
        value = Decimal((text or "").strip().replace(" ", "").replace(",", "."))
    except InvalidOperation:
        return None
    if not value.is_finite() or value < 0:
        return None
    return value


async def _catalog_failed(message: types.Message, state: FSMContext, exc: Exception) -> None:
    await message.answer(ERROR_CATALOG.format(error=exc))
    await reset_to_menu(message, state)


async def _fetch_options(catalog: CatalogClient, selection: SelectionState, level: SelectionLevel) -> list[str]:
    if level is SelectionLevel.MAKER:
        return await catalog.list_makers()
    if level is SelectionLevel.YEAR:
        return await catalog.list_years(selection.maker)
    if level is SelectionLevel.MODEL:
        return await catalog.list_models(selection.maker, selection.year)
    return await catalog.list_specs(selection.maker, selection.year, selection.model)


async def _push_selection_step(
    message: types.Message,
    state: FSMContext,
    nav: NavigationManager,
    catalog: CatalogClient,
    selection: SelectionState,
    level: SelectionLevel,
) -> None:
    try:
        options = await _fetch_options(catalog, selection, level)
    except UpstreamUnavailable as exc:
        await _catalog_failed(message, state, exc)
        return
    if not options:
        await message.answer(ERROR_NO_OPTIONS)
        await reset_to_menu(message, state)
        return
    fsm_state, prompt = _SELECTION_STEPS[level]
    await nav.push(message, state, NavStep(fsm_state, prompt, options_keyboard(options), tuple(options)))


async def _choose(
    message: types.Message,
    state: FSMContext,
    nav: NavigationManager,
    level: SelectionLevel,
) -> Optional[SelectionState]:
    """Record the chosen value at ``level``; levels below it are discarded."""
    text = (message.text or "").strip()
    step = nav.current
    if step is not None and step.options and text not in step.options:
        await message.answer(ERROR_SELECT_FROM_KEYBOARD, reply_markup=step.kb)
        return None
    data = await state.get_data()
    selection = SelectionState.from_dict(data.get("selection")).choose(level, text)
    await state.update_data(selection=selection.as_dict(), reference_price=None)
    return selection


@router.message(F.text.in_({BTN_CALC, BTN_NEW}))
async def start_calc(message: types.Message, state: FSMContext, catalog: CatalogClient):
    await state.clear()
    nav = NavigationManager(total_steps=CALC_TOTAL_STEPS)
    await state.update_data(_nav=nav, selection=SelectionState().as_dict())
    await _push_selection_step(message, state, nav, catalog, SelectionState(), SelectionLevel.MAKER)


@router.message(CalcStates.maker)
@with_nav
async def get_maker(message: types.Message, state: FSMContext, nav: NavigationManager, catalog: CatalogClient):
    selection = await _choose(message, state, nav, SelectionLevel.MAKER)
    if selection is not None:
        await _push_selection_step(message, state, nav, catalog, selection, SelectionLevel.YEAR)


@router.message(CalcStates.year)
@with_nav
async def get_year(message: types.Message, state: FSMContext, nav: NavigationManager, catalog: CatalogClient):
    try:
        selection = await _choose(message, state, nav, SelectionLevel.YEAR)
    except ValueError:
        await message.answer(ERROR_SELECT_FROM_KEYBOARD)
        return
    if selection is not None:
        await _push_selection_step(message, state, nav, catalog, selection, SelectionLevel.MODEL)


@router.message(CalcStates.model)
@with_nav
async def get_model(message: types.Message, state: FSMContext, nav: NavigationManager, catalog: CatalogClient):
    selection = await _choose(message, state, nav, SelectionLevel.MODEL)
    if selection is not None:
        await _push_selection_step(message, state, nav, catalog, selection, SelectionLevel.SPEC)


@router.message(CalcStates.spec)
@with_nav
async def get_spec(message: types.Message, state: FSMContext, nav: NavigationManager, catalog: CatalogClient):
    selection = await _choose(message, state, nav, SelectionLevel.SPEC)
    if selection is None:
        return
    try:
        price = await catalog.resolve_price(selection.maker, selection.year, selection.model, selection.spec)
    except UpstreamUnavailable as exc:
        await _catalog_failed(message, state, exc)
        return
    if price is None:
        await message.answer(ERROR_PRICE_NOT_FOUND)
        await reset_to_menu(message, state)
        return
    vehicle = selection.resolve(price)
    await state.update_data(reference_price=str(vehicle.reference_price))
    await message.answer(MSG_REFERENCE_PRICE.format(price=fmt_usd(vehicle.reference_price)))
    await nav.push(message, state, NavStep(CalcStates.fuel_type, PROMPT_FUEL, fuel_keyboard(), tuple(FUEL_OPTIONS)))


@router.message(CalcStates.fuel_type)
@with_nav
async def get_fuel(message: types.Message, state: FSMContext, nav: NavigationManager):
    try:
        fuel = FuelType.from_str(message.text)
    except ValidationError:
        await message.answer(ERROR_SELECT_FROM_KEYBOARD, reply_markup=fuel_keyboard())
        return
    if fuel is FuelType.ELECTRIC:
        # Utility type and engine capacity do not apply to electric cars
        nav.total_steps = CALC_ELECTRIC_STEPS
        await state.update_data(fuel_type=fuel.value, utility_type=None, engine_cc=None)
        await nav.push(message, state, NavStep(CalcStates.freight, PROMPT_FREIGHT, back_menu(HINT_AMOUNT_USD)))
        return
    nav.total_steps = CALC_TOTAL_STEPS
    await state.update_data(fuel_type=fuel.value)
    await nav.push(
        message, state, NavStep(CalcStates.utility_type, PROMPT_UTILITY, utility_keyboard(), tuple(UTILITY_OPTIONS))
    )


@router.message(CalcStates.utility_type)
@with_nav
async def get_utility(message: types.Message, state: FSMContext, nav: NavigationManager):
    try:
        utility = UtilityType.from_str(message.text)
    except ValidationError:
        await message.answer(ERROR_SELECT_FROM_KEYBOARD, reply_markup=utility_keyboard())
        return
    await state.update_data(utility_type=utility.value)
    await nav.push(
        message, state, NavStep(CalcStates.engine_capacity, PROMPT_ENGINE_CAPACITY, back_menu(HINT_ENGINE_CAPACITY))
    )


@router.message(CalcStates.engine_capacity)
@with_nav
async def get_capacity(message: types.Message, state: FSMContext, nav: NavigationManager):
    try:
        capacity = int((message.text or "").strip())
    except ValueError:
        capacity = 0
    if capacity <= 0:
        await message.answer(ERROR_ENGINE_CAPACITY)
        return
    await state.update_data(engine_cc=capacity)
    await nav.push(message, state, NavStep(CalcStates.freight, PROMPT_FREIGHT, back_menu(HINT_AMOUNT_USD)))


@router.message(CalcStates.freight)
@with_nav
async def get_freight(message: types.Message, state: FSMContext, nav: NavigationManager):
    freight = _parse_amount(message.text)
    if freight is None:
        await message.answer(ERROR_FREIGHT)
        return
    await state.update_data(freight=str(freight))
    await nav.push(message, state, NavStep(CalcStates.insurance, PROMPT_INSURANCE, back_menu(HINT_AMOUNT_USD)))


@router.message(CalcStates.insurance)
@with_nav
async def get_insurance(
    message: types.Message,
    state: FSMContext,
    nav: NavigationManager,
    rate_provider: ExchangeRateProvider,
    schedule: TariffSchedule = DEFAULT_SCHEDULE,
    local_currency: str = "RWF",
):
    insurance = _parse_amount(message.text)
    if insurance is None:
        await message.answer(ERROR_INSURANCE)
        return
    data = await state.get_data()
    selection = SelectionState.from_dict(data.get("selection"))

    quote = await rate_provider.current_rate()
    try:
        vehicle = selection.resolve(Decimal(data["reference_price"]))
        tax_input = TaxInput(
            reference_price=vehicle.reference_price,
            manufacturing_year=vehicle.year,
            fuel_type=data["fuel_type"],
            exchange_rate=quote.rate,
            utility_type=data.get("utility_type"),
            engine_capacity_cc=data.get("engine_cc"),
            freight_cost_usd=Decimal(data["freight"]),
            insurance_cost_usd=insurance,
        )
        breakdown = compute_breakdown(tax_input, schedule=schedule)
    except (KeyError, TypeError, ValidationError) as exc:
        logger.warning("Calculation rejected: %s", exc)
        await message.answer(ERROR_CALCULATION.format(error=exc))
        await reset_to_menu(message, state)
        return

    text = format_result_message(
        title=vehicle.title,
        breakdown=breakdown,
        quote=quote,
        code=local_currency,
    )
    await state.clear()
    await message.answer(text, reply_markup=result_keyboard())
