import os
from dotenv import load_dotenv

load_dotenv()

BOT_TOKEN = os.getenv("BOT_TOKEN")

DATABASE_URL = os.getenv("DATABASE_URL")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# таймаут на чужие таблицы (гардероб, вишлисты, круг)
MISSIONS_READ_TIMEOUT = float(os.getenv("MISSIONS_READ_TIMEOUT", "5"))

# сколько раз перечитываем состояние при конфликте версии
MISSIONS_WRITE_RETRIES = int(os.getenv("MISSIONS_WRITE_RETRIES", "1"))

MAX_FREEZE_TOKENS = int(os.getenv("MAX_FREEZE_TOKENS", "2"))
