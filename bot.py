import asyncio
import logging
from aiogram import types
from aiogram import Bot, Dispatcher
from config import BOT_TOKEN, LOG_LEVEL
from database import create_pool, close_pool
from init_pg_db import create_mission_tables
from missions import setup_missions

# Роутеры
from handlers.missions_handler import router as missions_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

async def main():
    if not BOT_TOKEN:
        raise RuntimeError("BOT_TOKEN не задан. Проверь .env")

    # 1) Бот и диспетчер
    bot = Bot(token=BOT_TOKEN)
    dp = Dispatcher()

    await bot.set_my_commands([
        types.BotCommand(command="missions", description="Мои миссии"),
        types.BotCommand(command="start_mission", description="Начать миссию"),
        types.BotCommand(command="claim", description="Забрать награду"),
    ])

    # 2) Подключение к БД (asyncpg pool)
    await create_pool()

    # 3) Инициализация схемы БД
    await create_mission_tables()
    logging.info("✅ Database connected and schema ensured")

    # 4) Движок миссий доступен хендлерам как аргумент `missions`
    dp["missions"] = await setup_missions()

    # 5) Подключаем роутеры
    dp.include_router(missions_router)

    logging.info("🤖 Bot started...")
    try:
        await dp.start_polling(bot)
    finally:
        await close_pool()
        await bot.session.close()
        logging.info("🛑 Bot stopped, pool closed.")

if __name__ == "__main__":
    asyncio.run(main())
