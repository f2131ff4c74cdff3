from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import wraps
from typing import List, Optional, Tuple

from aiogram import types
from aiogram.fsm.context import FSMContext
from aiogram.fsm.state import State

from bot_carimport.constants import BTN_BACK, BTN_MAIN_MENU
from bot_carimport.utils.reset import reset_to_menu


@dataclass
class NavStep:
    state: State
    prompt: str
    kb: types.ReplyKeyboardMarkup
    # Accepted keyboard answers; empty means free text
    options: Tuple[str, ...] = field(default_factory=tuple)


class NavigationManager:
    """Step stack with back/main menu handling.

    Back on the first step leaves the conversation. ``total_steps`` may be
    changed mid-flow when a branch skips steps.
    """

    def __init__(self, total_steps: int) -> None:
        self.total_steps = total_steps
        self.stack: List[NavStep] = []

    @property
    def current(self) -> Optional[NavStep]:
        return self.stack[-1] if self.stack else None

    def _strip_step_prefix(self, text: str) -> str:
        """Remove a leading "Step X/Y:" so prompts are not numbered twice."""
        return re.sub(r"^\s*Step\s+\d+/\d+:\s*", "", text).strip()

    async def _show(self, message: types.Message, step: NavStep) -> None:
        cur = min(len(self.stack), self.total_steps)
        prompt = self._strip_step_prefix(step.prompt)
        await message.answer(f"Step {cur}/{self.total_steps}: {prompt}", reply_markup=step.kb)

    async def push(
        self,
        message: types.Message,
        fsm: FSMContext,
        step: NavStep,
    ) -> None:
        self.stack.append(step)
        await fsm.set_state(step.state)
        await self._show(message, step)

    async def handle_nav(self, message: types.Message, fsm: FSMContext) -> bool:
        if message.text == BTN_MAIN_MENU or (message.text == BTN_BACK and len(self.stack) <= 1):
            await reset_to_menu(message, fsm)
            self.stack.clear()
            return True
        if message.text == BTN_BACK:
            self.stack.pop()
            prev = self.stack[-1]
            await fsm.set_state(prev.state)
            await self._show(message, prev)
            return True
        return False


def with_nav(handler):
    @wraps(handler)
    async def wrapped(message: types.Message, state: FSMContext, *args, **kwargs):
        data = await state.get_data()
        nav: NavigationManager | None = data.get("_nav")
        if nav is None:
            # Conversation state was lost (e.g. bot restart)
            await reset_to_menu(message, state)
            return
        if await nav.handle_nav(message, state):
            return
        return await handler(message, state, nav, *args, **kwargs)

    return wrapped
