import asyncio
import logging
from functools import partial

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from bot_carimport.handlers import calculate, faq, menu, misc
from bot_carimport.services import CatalogClient, ExchangeRateProvider, RateCache, close_rates_session, fetch_usd_rate
from bot_carimport.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def build_dispatcher(settings: Settings) -> Dispatcher:
    catalog = CatalogClient(settings.CATALOG_API_URL, timeout=settings.HTTP_TIMEOUT)
    rate_provider = ExchangeRateProvider(
        fetch=partial(fetch_usd_rate, settings.RATE_API_URL, settings.LOCAL_CURRENCY, settings.HTTP_TIMEOUT),
        cache=RateCache(settings.RATE_CACHE_PATH),
        default_rate=settings.DEFAULT_EXCHANGE_RATE,
    )

    dp = Dispatcher(
        catalog=catalog,
        rate_provider=rate_provider,
        schedule=settings.tariff_schedule(),
        local_currency=settings.LOCAL_CURRENCY,
    )

    async def on_shutdown():
        await catalog.close()
        await close_rates_session()

    dp.shutdown.register(on_shutdown)

    dp.include_router(menu.router)
    dp.include_router(faq.router)
    dp.include_router(calculate.router)
    dp.include_router(misc.router)
    return dp


async def main():
    settings = get_settings()
    bot = Bot(token=settings.BOT_TOKEN, default=DefaultBotProperties(parse_mode=ParseMode.HTML))
    dp = build_dispatcher(settings)

    # Polling does not work while a webhook is set
    try:
        await bot.delete_webhook(drop_pending_updates=True)
    except Exception as exc:
        logger.warning("Could not delete webhook: %s", exc)

    await dp.start_polling(bot)


if __name__ == "__main__":
    asyncio.run(main())
