"""FSM state groups for bot conversations."""

from .calc import CalcStates

__all__ = ["CalcStates"]
