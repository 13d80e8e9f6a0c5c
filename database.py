# database.py
import logging
import os
import sqlite3
from urllib.parse import urlparse

from config import Config
from todayku.grid import grid_from_string, grid_to_string

logger = logging.getLogger(__name__)

def get_db():
    """Get database connection: PostgreSQL when DATABASE_URL is set, SQLite otherwise"""
    url = os.environ.get('DATABASE_URL') or Config.DATABASE_URL
    if url:
        import psycopg2
        from psycopg2.extras import RealDictCursor

        # Parse the database URL
        result = urlparse(url)
        try:
            return psycopg2.connect(
                database=result.path[1:],
                user=result.username,
                password=result.password,
                host=result.hostname,
                port=result.port,
                sslmode=os.environ.get('PGSSLMODE', 'require'),
                cursor_factory=RealDictCursor
            )
        except Exception as e:
            logger.error(f"PostgreSQL connection failed: {e}")
            raise
    return get_sqlite_db()

def get_sqlite_db():
    """Get SQLite database connection"""
    path = os.environ.get('DB_PATH') or Config.DB_PATH
    try:
        conn = sqlite3.connect(path)
        conn.row_factory = sqlite3.Row
        return conn
    except Exception as e:
        logger.error(f"SQLite connection failed: {e}")
        raise

def is_postgres(conn):
    """Check if connection is PostgreSQL"""
    return hasattr(conn, 'pgconn') or 'psycopg2' in str(type(conn))

def execute_query(cur, query, params=None):
    """Execute query with proper parameter formatting for database type"""
    if params is None:
        params = ()

    # Convert SQLite ? placeholders to %s for PostgreSQL
    if 'psycopg2' in str(type(cur)) and '?' in query:
        query = query.replace('?', '%s')
    cur.execute(query, params)
    return cur

def init_db():
    conn = None
    try:
        conn = get_db()
        cur = conn.cursor()

        if is_postgres(conn):
            id_column = 'id SERIAL PRIMARY KEY'
        else:
            id_column = 'id INTEGER PRIMARY KEY AUTOINCREMENT'

        # One puzzle per calendar date; the UNIQUE key is what makes racing
        # generators safe
        cur.execute(f"""
            CREATE TABLE IF NOT EXISTS puzzles(
                {id_column},
                date TEXT UNIQUE NOT NULL,
                puzzle TEXT NOT NULL,
                solution TEXT NOT NULL,
                difficulty TEXT NOT NULL,
                clues INTEGER NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        cur.execute(f"""
            CREATE TABLE IF NOT EXISTS completion_times(
                {id_column},
                puzzle_id INTEGER NOT NULL REFERENCES puzzles(id),
                player TEXT NOT NULL,
                seconds INTEGER NOT NULL,
                completed_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                UNIQUE(puzzle_id, player)
            )
        """)

        conn.commit()
        logger.info("Database tables created successfully")

    except Exception as e:
        logger.error(f"Database initialization error: {e}")
        if conn:
            conn.rollback()
        raise
    finally:
        if conn:
            conn.close()

def _puzzle_record(row):
    record = dict(row)
    record['puzzle'] = grid_from_string(record['puzzle'])
    record['solution'] = grid_from_string(record['solution'])
    return record

def get_puzzle_by_date(day_key):
    conn = get_db()
    try:
        cur = conn.cursor()
        execute_query(cur, 'SELECT id, date, puzzle, solution, difficulty, clues FROM puzzles WHERE date=?', (day_key,))
        row = cur.fetchone()
        return _puzzle_record(row) if row else None
    finally:
        conn.close()

def get_puzzle(puzzle_id):
    conn = get_db()
    try:
        cur = conn.cursor()
        execute_query(cur, 'SELECT id, date, puzzle, solution, difficulty, clues FROM puzzles WHERE id=?', (puzzle_id,))
        row = cur.fetchone()
        return _puzzle_record(row) if row else None
    finally:
        conn.close()

def insert_puzzle_if_absent(day_key, puzzle, solution, difficulty, clues):
    """
    Store a puzzle for day_key unless one already exists.
    Returns True if this call's puzzle was the one stored.
    """
    conn = get_db()
    try:
        cur = conn.cursor()
        execute_query(cur, '''
            INSERT INTO puzzles(date, puzzle, solution, difficulty, clues) VALUES(?,?,?,?,?)
            ON CONFLICT(date) DO NOTHING
        ''', (day_key, grid_to_string(puzzle), grid_to_string(solution), str(difficulty), clues))
        inserted = cur.rowcount == 1
        conn.commit()
        return inserted
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()

def get_or_create_puzzle(day_key, generate):
    """
    Return the stored puzzle for day_key, calling generate() to create it
    when missing. generate must return a todayku Puzzle.
    """
    record = get_puzzle_by_date(day_key)
    if record:
        return record

    result = generate()
    if insert_puzzle_if_absent(day_key, result.puzzle, result.solution, result.difficulty.value, result.clues):
        logger.info(f"Stored {result.difficulty.value} puzzle for {day_key}")
    else:
        logger.info(f"Puzzle for {day_key} already stored, discarding generated copy")
    return get_puzzle_by_date(day_key)

def _best_time(cur, puzzle_id, player):
    execute_query(cur, 'SELECT seconds FROM completion_times WHERE puzzle_id=? AND player=?', (puzzle_id, player))
    row = cur.fetchone()
    return row['seconds'] if row else None

def record_completion(puzzle_id, player, seconds):
    """
    Save a solve time, keeping only the best time per player and puzzle.
    Returns {'best': ..., 'previous': ... or None}.
    """
    conn = get_db()
    try:
        cur = conn.cursor()
        previous = _best_time(cur, puzzle_id, player)

        # A concurrent first submission lands on the UNIQUE key and is merged
        execute_query(cur, '''
            INSERT INTO completion_times(puzzle_id, player, seconds) VALUES(?,?,?)
            ON CONFLICT(puzzle_id, player) DO UPDATE SET
                completed_at = CASE WHEN excluded.seconds < completion_times.seconds
                                    THEN CURRENT_TIMESTAMP ELSE completion_times.completed_at END,
                seconds = CASE WHEN excluded.seconds < completion_times.seconds
                               THEN excluded.seconds ELSE completion_times.seconds END
        ''', (puzzle_id, player, seconds))
        best = _best_time(cur, puzzle_id, player)
        conn.commit()

        return {'best': best, 'previous': previous}
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()

def leaderboard(since_key=None, until_key=None, limit=50):
    """
    Best time per player over puzzles dated in [since_key, until_key].
    Either bound may be None.
    """
    clauses, params = [], []
    if since_key:
        clauses.append('p.date >= ?')
        params.append(since_key)
    if until_key:
        clauses.append('p.date <= ?')
        params.append(until_key)
    where = ('WHERE ' + ' AND '.join(clauses)) if clauses else ''
    params.append(limit)

    conn = get_db()
    try:
        cur = conn.cursor()
        execute_query(cur, f'''
            SELECT ct.player AS player, MIN(ct.seconds) AS best_time, COUNT(ct.id) AS games
            FROM completion_times ct JOIN puzzles p ON ct.puzzle_id = p.id
            {where}
            GROUP BY ct.player ORDER BY best_time ASC, ct.player ASC LIMIT ?
        ''', tuple(params))
        return [dict(row) for row in cur.fetchall()]
    finally:
        conn.close()
