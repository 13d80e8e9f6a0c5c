
import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    # Base directory
    BASE_DIR = os.path.abspath(os.path.dirname(__file__))
    DB_PATH = os.environ.get("DB_PATH") or os.path.join(BASE_DIR, "todayku.db")
    DATABASE_URL = os.environ.get("DATABASE_URL", "")

    SECRET_KEY = os.environ.get("SECRET_KEY", "change-me-please")
    SESSION_COOKIE_NAME = "todayku_session"
    DEBUG = os.environ.get("DEBUG", "0") == "1"

    # Puzzle generation
    DAILY_DIFFICULTY = os.environ.get("DAILY_DIFFICULTY", "medium")
    GENERATION_STRATEGY = os.environ.get("GENERATION_STRATEGY", "transform")
    GENERATION_TIME_LIMIT = float(os.environ.get("GENERATION_TIME_LIMIT", "30"))
    GENERATION_RETRIES = int(os.environ.get("GENERATION_RETRIES", "3"))
    # First generation attempt uses the date seed
    DAILY_SEEDED = os.environ.get("DAILY_SEEDED", "1") == "1"

    # Clues left on the board per difficulty
    DIFFICULTY_CLUES = {
        "easy": int(os.environ.get("EASY_CLUES", "46")),
        "medium": int(os.environ.get("MEDIUM_CLUES", "36")),
        "hard": int(os.environ.get("HARD_CLUES", "26")),
    }
    # Fewest clues labelled easy, then medium; each clue target must sit in its own band
    DIFFICULTY_THRESHOLDS = (
        int(os.environ.get("EASY_MIN_CLUES", "40")),
        int(os.environ.get("MEDIUM_MIN_CLUES", "30")),
    )

    # Scheduler (UTC, HH:MM)
    SCHEDULER_ENABLED = os.environ.get("SCHEDULER_ENABLED", "1") == "1"
    PUZZLE_PREGEN_TIME = os.environ.get("PUZZLE_PREGEN_TIME", "23:00")

    LEADERBOARD_LIMIT = int(os.environ.get("LEADERBOARD_LIMIT", "50"))
    LOG_FILE = os.environ.get("LOG_FILE", "app.log")

    # Branding
    BRAND = os.environ.get("BRAND", "Todayku")
