from aiogram.fsm.state import State, StatesGroup


class CalcStates(StatesGroup):
    maker = State()
    year = State()
    model = State()
    spec = State()
    fuel_type = State()
    utility_type = State()
    engine_capacity = State()
    freight = State()
    insurance = State()

__all__ = ["CalcStates"]
