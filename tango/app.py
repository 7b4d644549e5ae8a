# --- File: tango/app.py ---
# Description: JSON API for generating, checking and solving Tango puzzles.
import logging

from flask import Flask, current_app, jsonify, request
from flask_cors import CORS

from tango import constants as const
from tango.constraints import ConstraintSet
from tango.errors import (
    GenerationFailure, InvalidDifficultyError, InvalidSizeError, LockedCellError,
    NoPuzzlesAvailableError, PuzzleNotFoundError
)
from tango.game_state import GameState, locked_cells_intact
from tango.generator import restart_budget
from tango.grid import is_valid_solution, validate_size
from tango.logical_solver import solve_logically
from tango.service import initialize_game
from tango.store import PuzzleStore
from tango.z3_solver import Z3TangoSolver

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    'STORE_PATH': None,
    'MAX_SIZE': const.DEFAULT_MAX_API_SIZE,
    'MAX_ATTEMPTS': const.DEFAULT_MAX_ATTEMPTS,
    # Per-restart step budget; None means restart_budget(size).
    'MAX_STEPS': None,
    'MAX_RESTARTS': const.DEFAULT_MAX_RESTARTS,
    'SEED': None,
}


def create_app(config=None, store=None):
    """
    Builds the Flask app. Settings come from DEFAULT_CONFIG, then TANGO_*
    environment variables, then the config mapping passed in.
    """
    app = Flask(__name__)
    app.config.from_mapping(DEFAULT_CONFIG)
    app.config.from_prefixed_env('TANGO')
    if config:
        app.config.from_mapping(config)
    CORS(app)

    app.extensions['tango_store'] = store if store is not None else PuzzleStore(app.config['STORE_PATH'])

    app.add_url_rule('/api/new_puzzle', view_func=get_new_puzzle, methods=['GET'])
    app.add_url_rule('/api/puzzles/<int:puzzle_number>', view_func=get_stored_puzzle, methods=['GET'])
    app.add_url_rule('/api/check', view_func=check_solution, methods=['POST'])
    app.add_url_rule('/api/solve', view_func=find_solution, methods=['POST'])
    app.add_url_rule('/api/toggle', view_func=toggle_cell, methods=['POST'])
    return app


def _store():
    return current_app.extensions['tango_store']


def _parse_grid(raw):
    """Validates a client grid: square, even size, cells 0, 1 or null."""
    if not isinstance(raw, list) or not raw:
        raise ValueError("grid must be a non-empty list of rows")
    size = validate_size(len(raw))
    grid = []
    for row in raw:
        if not isinstance(row, list) or len(row) != size:
            raise ValueError("grid must be square")
        if any(cell not in (0, 1, None) or isinstance(cell, bool) for cell in row):
            raise ValueError("grid cells must be 0, 1 or null")
        grid.append(list(row))
    return grid


def _puzzle_from_request(data):
    """Returns (clue grid, constraints) for a stored puzzleNumber or an inline grid."""
    puzzle_number = data.get('puzzleNumber')
    if puzzle_number is not None:
        entry = _store().get(int(puzzle_number))
        if entry is None:
            raise PuzzleNotFoundError(puzzle_number)
        return entry.puzzle.grid, entry.puzzle.constraints
    if data.get('grid') is not None:
        return _parse_grid(data['grid']), ConstraintSet.from_dict(data.get('constraints'))
    raise ValueError('Missing grid or puzzleNumber in request')


def get_new_puzzle():
    try:
        size = int(request.args.get('size', const.DEFAULT_GAME_SIZE))
        difficulty = request.args.get('difficulty', const.DEFAULT_GAME_DIFFICULTY)
        validate_size(size)
        if size > current_app.config['MAX_SIZE']:
            return jsonify({'error': f"Size must be at most {current_app.config['MAX_SIZE']}"}), 400
        response = initialize_game(
            _store(), difficulty=difficulty, size=size,
            max_attempts=current_app.config['MAX_ATTEMPTS'],
            seed=current_app.config['SEED'],
            max_steps=current_app.config['MAX_STEPS'] or restart_budget(size),
            max_restarts=current_app.config['MAX_RESTARTS'],
        )
        return jsonify(response)
    except (ValueError, InvalidSizeError, InvalidDifficultyError) as e:
        return jsonify({'error': str(e)}), 400
    except NoPuzzlesAvailableError as e:
        return jsonify({'error': str(e)}), 404
    except GenerationFailure:
        logger.exception("Puzzle generation failed")
        return jsonify({'error': 'Puzzle generation failed'}), 500
    except Exception:
        logger.exception("Error in /api/new_puzzle")
        return jsonify({'error': 'An internal error occurred'}), 500


def get_stored_puzzle(puzzle_number):
    entry = _store().get(puzzle_number)
    if entry is None:
        return jsonify({'error': f'Puzzle #{puzzle_number} not found'}), 404
    return jsonify(entry.to_dict())


def check_solution():
    try:
        data = request.get_json(silent=True) or {}
        if data.get('playerGrid') is None:
            return jsonify({'error': 'Missing playerGrid in request'}), 400
        player_grid = _parse_grid(data['playerGrid'])
        puzzle_grid, constraints = _puzzle_from_request(data)
        if len(player_grid) != len(puzzle_grid):
            return jsonify({'error': 'playerGrid size does not match the puzzle'}), 400

        state = GameState(puzzle_grid, player_grid)
        intact = locked_cells_intact(state.puzzle_grid, state.player_grid)
        complete = state.is_complete()
        is_correct = (
            intact and complete and is_valid_solution(state.player_grid)
            and all(c.is_satisfied_by(state.player_grid) for c in constraints)
        )
        return jsonify({'isCorrect': is_correct, 'isComplete': complete, 'lockedCellsIntact': intact})
    except PuzzleNotFoundError as e:
        return jsonify({'error': str(e)}), 404
    except (ValueError, KeyError, TypeError, InvalidSizeError) as e:
        return jsonify({'error': str(e)}), 400
    except Exception:
        logger.exception("Error in /api/check")
        return jsonify({'error': 'An internal error occurred'}), 500


def toggle_cell():
    try:
        data = request.get_json(silent=True) or {}
        if data.get('playerGrid') is None:
            return jsonify({'error': 'Missing playerGrid in request'}), 400
        puzzle_grid, _ = _puzzle_from_request(data)
        player_grid = _parse_grid(data['playerGrid'])
        if len(player_grid) != len(puzzle_grid):
            return jsonify({'error': 'playerGrid size does not match the puzzle'}), 400
        row, col = int(data['row']), int(data['col'])
        if not (0 <= row < len(player_grid) and 0 <= col < len(player_grid)):
            return jsonify({'error': f'Cell ({row}, {col}) is outside the grid'}), 400

        state = GameState(puzzle_grid, player_grid)
        value = state.toggle(row, col)
        return jsonify({'playerGrid': state.player_grid, 'value': value, 'isComplete': state.is_complete()})
    except PuzzleNotFoundError as e:
        return jsonify({'error': str(e)}), 404
    except LockedCellError as e:
        return jsonify({'error': str(e)}), 409
    except (ValueError, KeyError, TypeError, InvalidSizeError) as e:
        return jsonify({'error': str(e)}), 400
    except Exception:
        logger.exception("Error in /api/toggle")
        return jsonify({'error': 'An internal error occurred'}), 500


def find_solution():
    try:
        data = request.get_json(silent=True) or {}
        if data.get('grid') is None:
            return jsonify({'error': 'Missing grid in request'}), 400
        grid = _parse_grid(data['grid'])
        if len(grid) > current_app.config['MAX_SIZE']:
            return jsonify({'error': f"Size must be at most {current_app.config['MAX_SIZE']}"}), 400
        constraints = ConstraintSet.from_dict(data.get('constraints'))

        solutions = Z3TangoSolver(grid, constraints).solve(max_solutions=2)
        _, logically_solvable = solve_logically(grid, constraints)
        return jsonify({
            'solution': solutions[0] if solutions else None,
            'isUnique': len(solutions) == 1,
            'logicallySolvable': logically_solvable,
        })
    except (ValueError, KeyError, TypeError, InvalidSizeError) as e:
        return jsonify({'error': str(e)}), 400
    except Exception:
        logger.exception("Error in /api/solve")
        return jsonify({'error': 'An internal error occurred'}), 500
