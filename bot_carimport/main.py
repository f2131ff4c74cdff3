"""Entry point for running the Telegram bot."""

import asyncio
import logging
import os

from bot_carimport.bot import main as run_bot


def run() -> None:
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    asyncio.run(run_bot())


if __name__ == "__main__":
    run()
