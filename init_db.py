# init_db.py
import logging

from app import app, daily_puzzle
from database import init_db
from todayku.grid import format_grid
from todayku.rng import utc_today

logging.basicConfig(level=logging.INFO)

init_db()
# Today's puzzle is created along with the tables
record = daily_puzzle(utc_today())
app.logger.info(f"Puzzle {record['id']} for {record['date']} ({record['difficulty']}, {record['clues']} clues)")
print(format_grid(record['puzzle']))
print("Database initialized")
