"""Configuration settings for the bot."""

import os
from dotenv import load_dotenv
load_dotenv()

# Base directory paths
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DATA_DIR = os.path.join(BASE_DIR, "data")

# Discord
DISCORD_TOKEN = os.getenv("DISCORD_TOKEN", "")
COMMAND_PREFIX = os.getenv("COMMAND_PREFIX", "!")

# Database configuration (Tortoise connection string)
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite://{os.path.join(DATA_DIR, 'rosterbot.sqlite3')}")

# Background loops
ENFORCEMENT_INTERVAL_SECONDS = float(os.getenv("ENFORCEMENT_INTERVAL_SECONDS", "60"))
BOARD_REFRESH_SECONDS = float(os.getenv("BOARD_REFRESH_SECONDS", "300"))
BOARD_CHANNEL_ID = int(os.getenv("BOARD_CHANNEL_ID", "0")) or None

# Translation API (LibreTranslate compatible)
TRANSLATE_API_URL = os.getenv("TRANSLATE_API_URL", "https://libretranslate.com/translate")
TRANSLATE_API_KEY = os.getenv("TRANSLATE_API_KEY", "")
TRANSLATE_TIMEOUT = float(os.getenv("TRANSLATE_TIMEOUT", "10"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Permissions (read from .env)
OWNER_ID = int(os.getenv("OWNER_ID", "0"))
ADMIN_IDS = [int(id_str) for id_str in os.getenv("ADMIN_IDS", "").split(",") if id_str.strip().isdigit()]
if OWNER_ID and OWNER_ID not in ADMIN_IDS:
    ADMIN_IDS.append(OWNER_ID)
