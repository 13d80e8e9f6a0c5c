from flask import Flask, request, session, jsonify
import os, time as time_mod, logging, threading
from datetime import timedelta
from logging.handlers import RotatingFileHandler

import schedule

from config import Config
from database import (get_db, init_db, get_or_create_puzzle, get_puzzle,
                      record_completion, leaderboard as load_leaderboard)
from todayku.difficulty import DEFAULT_THRESHOLDS
from todayku.errors import GenerationError, GridError
from todayku.generator import generate_sudoku, generate_with_retry
from todayku.grid import coerce_grid
from todayku.rng import daily_rng_factory, game_number, seed_key, system_rng, utc_today
from todayku.session import GameSession, format_time, performance_rating
from todayku.sudoku import solve
from todayku.validation import diff_cells, has_conflict, validate_solution

app = Flask(__name__)
app.config.from_object(Config)
app.secret_key = app.config['SECRET_KEY']

# Configure logging
def setup_logging():
    logging.basicConfig(level=logging.INFO)
    handler = RotatingFileHandler(app.config.get('LOG_FILE', 'app.log'), maxBytes=10000, backupCount=3)
    handler.setLevel(logging.INFO)
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    handler.setFormatter(formatter)
    app.logger.addHandler(handler)

def generation_options():
    return {
        'strategy': app.config.get('GENERATION_STRATEGY', 'transform'),
        'clue_targets': app.config.get('DIFFICULTY_CLUES'),
        'thresholds': tuple(app.config.get('DIFFICULTY_THRESHOLDS', DEFAULT_THRESHOLDS)),
        'time_limit': app.config.get('GENERATION_TIME_LIMIT'),
    }

def daily_puzzle(day):
    """Stored puzzle for a day, generated on first request"""
    def generate():
        rng_factory = daily_rng_factory(day) if app.config.get('DAILY_SEEDED') else system_rng
        return generate_with_retry(app.config.get('DAILY_DIFFICULTY', 'medium'),
                                   attempts=app.config.get('GENERATION_RETRIES', 3),
                                   rng_factory=rng_factory,
                                   **generation_options())
    return get_or_create_puzzle(seed_key(day), generate)

def load_game():
    data = session.get('game')
    return GameSession.from_dict(data) if data else None

def save_game(game):
    session['game'] = game.to_dict()

def cell_args(data, *names):
    try:
        return [int(data[name]) for name in names]
    except (KeyError, TypeError, ValueError):
        raise GridError(f"Expected integer fields: {', '.join(names)}")

@app.route('/')
def index():
    today = utc_today()
    return jsonify({
        'name': app.config.get('BRAND', 'Todayku'),
        'date': seed_key(today),
        'game_number': game_number(today),
    })

@app.route('/api/puzzles/today')
def api_today():
    today = utc_today()
    try:
        record = daily_puzzle(today)
    except Exception as e:
        app.logger.error(f"Daily puzzle error: {e}")
        return jsonify({'error': 'Failed to load today\'s puzzle'}), 500

    game = load_game()
    if not game or game.puzzle_id != record['id']:
        # The solution stays server side; the cookie only carries the board
        game = GameSession(record['puzzle'], puzzle_id=record['id'])
        save_game(game)

    app.logger.info(f"Served puzzle {record['id']} for {record['date']}")
    return jsonify({
        'id': record['id'],
        'date': record['date'],
        'game_number': game_number(today),
        'puzzle': record['puzzle'],
        'board': game.board,
        'difficulty': record['difficulty'],
    })

@app.route('/api/new_puzzle')
def api_new_puzzle():
    diff = request.args.get('difficulty', 'medium')
    try:
        result = generate_sudoku(diff, **generation_options())
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    except GenerationError as e:
        app.logger.error(f"New puzzle error: {e}")
        return jsonify({'error': 'Failed to generate puzzle'}), 500

    game = GameSession(result.puzzle, solution=result.solution)
    save_game(game)
    app.logger.info(f"Practice puzzle generated with difficulty {result.difficulty.value}")
    return jsonify({'puzzle': result.puzzle, 'difficulty': result.difficulty.value, 'clues': result.clues})

@app.route('/api/check', methods=['POST'])
def api_check():
    data = request.get_json(silent=True) or {}
    grid = coerce_grid(data.get('grid'))
    row, col, digit = cell_args(data, 'row', 'col', 'digit')
    return jsonify({'conflict': has_conflict(grid, row, col, digit)})

@app.route('/api/move', methods=['POST'])
def api_move():
    game = load_game()
    if not game:
        return jsonify({'error': 'No active puzzle'}), 400

    data = request.get_json(silent=True) or {}
    row, col, digit = cell_args(data, 'row', 'col', 'digit')
    result = game.place(digit, row, col)
    save_game(game)

    body = result._asdict()
    if result.complete:
        body['seconds'] = game.elapsed_seconds()
        body['time'] = format_time(body['seconds'])
    return jsonify(body)

@app.route('/api/note', methods=['POST'])
def api_note():
    game = load_game()
    if not game:
        return jsonify({'error': 'No active puzzle'}), 400

    data = request.get_json(silent=True) or {}
    row, col, digit = cell_args(data, 'row', 'col', 'digit')
    ok = game.toggle_note(row, col, digit)
    save_game(game)
    return jsonify({'ok': ok, 'notes': game.notes[row][col]})

@app.route('/api/solve', methods=['POST'])
def api_solve():
    data = request.get_json(silent=True) or {}
    grid = coerce_grid(data.get('grid'))
    solved = solve(grid)
    if solved is None:
        return jsonify({'error': 'Puzzle has no solution'}), 422
    return jsonify({'solution': solved})

@app.route('/api/puzzles/submit', methods=['POST'])
def api_submit():
    data = request.get_json(silent=True) or {}
    player = str(data.get('name', '')).strip()
    if not player:
        return jsonify({'error': 'name is required'}), 400

    try:
        puzzle_id = int(data.get('puzzle_id'))
        seconds = int(data.get('seconds', 0))
    except (TypeError, ValueError):
        return jsonify({'error': 'puzzle_id and seconds must be integers'}), 400
    if seconds <= 0:
        return jsonify({'error': 'invalid time'}), 400

    candidate = coerce_grid(data.get('solution'))

    try:
        record = get_puzzle(puzzle_id)
        if not record:
            return jsonify({'error': 'Puzzle not found'}), 404

        if not validate_solution(candidate, record['solution']):
            wrong = diff_cells(candidate, record['solution'])
            return jsonify({'error': 'Solution is incorrect', 'wrong_cells': wrong}), 400

        saved = record_completion(puzzle_id, player, seconds)
    except Exception as e:
        app.logger.error(f"Record result error: {e}")
        return jsonify({'error': 'Failed to record result'}), 500

    app.logger.info(f"Result recorded for {player}: {seconds}s, best: {saved['best']}s")
    return jsonify({
        'status': 'ok',
        'best_time': saved['best'],
        'previous_time': saved['previous'],
        'time': format_time(seconds),
        'rating': performance_rating(seconds),
    })

def leaderboard_window(period, today):
    """(since, until) date keys for a leaderboard period"""
    if period == 'today':
        return seed_key(today), seed_key(today)
    if period == 'week':
        return seed_key(today - timedelta(days=today.weekday())), None
    if period == 'month':
        return seed_key(today.replace(day=1)), None
    if period == 'all':
        return None, None
    raise ValueError(f"Unknown leaderboard period: {period}")

@app.route('/api/leaderboard/<period>')
def api_leaderboard(period):
    try:
        since, until = leaderboard_window(period, utc_today())
    except ValueError as e:
        return jsonify({'error': str(e)}), 404

    try:
        rows = load_leaderboard(since, until, app.config.get('LEADERBOARD_LIMIT', 50))
    except Exception as e:
        app.logger.error(f"Leaderboard error: {e}")
        return jsonify({'error': 'Failed to load leaderboard'}), 500
    return jsonify({'period': period, 'rows': rows})

@app.route('/debug/db')
def debug_db():
    """Debug endpoint to check database status"""
    conn = None
    try:
        conn = get_db()
        cur = conn.cursor()
        cur.execute("SELECT COUNT(*) AS n FROM puzzles")
        count = cur.fetchone()['n']
        return jsonify({'status': 'success', 'puzzle_count': count})
    except Exception as e:
        return jsonify({'status': 'error', 'message': str(e)}), 500
    finally:
        if conn:
            conn.close()

def pregenerate_tomorrow():
    tomorrow = utc_today() + timedelta(days=1)
    try:
        record = daily_puzzle(tomorrow)
        app.logger.info(f"Puzzle ready for {record['date']}")
    except Exception as e:
        app.logger.error(f"Pre-generation for {seed_key(tomorrow)} failed: {e}")

def scheduler_thread():
    while True:
        try:
            schedule.run_pending()
        except Exception as e:
            app.logger.error(f'Scheduler error: {e}')
        time_mod.sleep(60)

def setup_schedule():
    schedule.every().day.at(app.config.get('PUZZLE_PREGEN_TIME', '23:00')).do(pregenerate_tomorrow)
    t = threading.Thread(target=scheduler_thread, daemon=True)
    t.start()

@app.errorhandler(GridError)
def bad_grid(error):
    app.logger.warning(f"Bad grid input: {error}")
    return jsonify({'error': str(error)}), 400

@app.errorhandler(ValueError)
def bad_value(error):
    app.logger.warning(f"Bad input: {error}")
    return jsonify({'error': str(error)}), 400

@app.errorhandler(404)
def not_found(error):
    app.logger.warning(f"404 error: {error}")
    return jsonify({'error': 'Not found'}), 404

@app.errorhandler(500)
def internal_error(error):
    app.logger.error(f"500 error: {error}")
    return jsonify({'error': 'Internal server error'}), 500

if __name__ == '__main__':
    setup_logging()
    app.logger.info("Starting Todayku server...")
    try:
        init_db()
        app.logger.info("Database initialized successfully")
    except Exception as e:
        app.logger.error(f"Database initialization failed: {e}")

    if app.config.get('SCHEDULER_ENABLED'):
        setup_schedule()
        app.logger.info("Scheduler started")
    app.run(debug=app.config.get('DEBUG', False), host='0.0.0.0', port=int(os.environ.get('PORT', 5000)))
