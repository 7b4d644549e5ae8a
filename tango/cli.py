# --- File: tango/cli.py ---
# Description: Command-line tools for building and checking a Tango puzzle store.
#
# Usage:
#   tango generate --size 6 --difficulty medium --count 50 --store puzzles.json
#   tango validate puzzles.json
#   tango show puzzles.json 3
#   tango serve --port 5000
import argparse
import logging
import sys

from tqdm import tqdm

from tango import constants as const
from tango.display import display_terminal_grid
from tango.errors import SearchBudgetExceeded, TangoError
from tango.generator import generate_puzzle, restart_budget
from tango.grid import is_valid_solution
from tango.logical_solver import solve_logically
from tango.store import PuzzleStore
from tango.z3_solver import count_solutions


def do_generate(args):
    """Generates puzzles into a store, skipping duplicates by canonical form."""
    store = PuzzleStore(args.store, backup=args.backup)
    max_steps = args.max_steps if args.max_steps is not None else restart_budget(args.size)
    added = duplicates = over_budget = 0
    for i in tqdm(range(args.count), desc="Generating", unit="puzzle", disable=args.count < 2):
        seed = None if args.seed is None else args.seed + i * const.VARIANT_SEED_STRIDE
        try:
            puzzle = generate_puzzle(args.size, args.difficulty, variant=i, seed=seed,
                                     max_steps=max_steps, max_restarts=args.max_restarts)
        except SearchBudgetExceeded as e:
            over_budget += 1
            tqdm.write(f"Puzzle {i + 1}: {e}, skipped")
            continue
        if store.exists(puzzle.canonical_form):
            duplicates += 1
            continue
        entry = store.add(puzzle, attempt=i)
        added += 1
        if args.show:
            display_terminal_grid(puzzle.grid, f"Puzzle #{entry.puzzle_number}", puzzle.constraints)
    print(f"Added {added} puzzles ({duplicates} duplicates, {over_budget} over budget skipped). "
          f"Store now holds {len(store)}.")
    return 0


def do_validate(args):
    """Checks every stored puzzle: valid solution, logically solvable, unique."""
    store = PuzzleStore(args.store)
    failures = 0
    for entry in tqdm(list(store), desc="Validating", unit="puzzle"):
        puzzle = entry.puzzle
        problems = []
        if not is_valid_solution(puzzle.solution):
            problems.append("solution breaks the rules")
        solved, complete = solve_logically(puzzle.grid, puzzle.constraints, puzzle.size)
        if not complete or solved != puzzle.solution:
            problems.append("not solvable by deduction")
        if not args.skip_z3 and count_solutions(puzzle.grid, puzzle.constraints) != 1:
            problems.append("solution is not unique")
        if problems:
            failures += 1
            tqdm.write(f"Puzzle #{entry.puzzle_number}: {', '.join(problems)}")
    print(f"Checked {len(store)} puzzles, {failures} failed.")
    return 1 if failures else 0


def do_show(args):
    store = PuzzleStore(args.store)
    entry = store.get(args.number)
    if entry is None:
        print(f"Error: Puzzle #{args.number} not found in '{args.store}'", file=sys.stderr)
        return 1
    puzzle = entry.puzzle
    print(f"Puzzle #{entry.puzzle_number}: {puzzle.size}x{puzzle.size}, {puzzle.difficulty}")
    display_terminal_grid(puzzle.grid, "Clues", puzzle.constraints)
    display_terminal_grid(puzzle.solution, "Solution", puzzle.constraints)
    print(f"Canonical form: {puzzle.canonical_form}")
    return 0


def do_serve(args):
    from tango.app import create_app

    config = {'STORE_PATH': args.store} if args.store else None
    create_app(config).run(host=args.host, port=args.port, debug=args.debug)
    return 0


def build_parser():
    parser = argparse.ArgumentParser(
        prog="tango",
        description="Generate, validate and serve Tango logic-grid puzzles.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")

    parser_generate = subparsers.add_parser("generate", help="Generate puzzles into a store.")
    parser_generate.add_argument("--size", type=int, default=const.DEFAULT_SIZE, help="Even grid size (default 6).")
    parser_generate.add_argument("--difficulty", choices=const.DIFFICULTIES, default=const.DEFAULT_DIFFICULTY)
    parser_generate.add_argument("--count", type=int, default=1, help="Number of puzzles to generate.")
    parser_generate.add_argument("--seed", type=int, default=None, help="Base seed for reproducible runs.")
    parser_generate.add_argument("--max-steps", type=int, default=None, help="Step budget per search restart (default 20 per cell).")
    parser_generate.add_argument("--max-restarts", type=int, default=const.DEFAULT_MAX_RESTARTS,
                                 help="Restarts before a puzzle is skipped as over budget.")
    parser_generate.add_argument("--store", default=None, help="JSON store path (in-memory if omitted).")
    parser_generate.add_argument("--backup", action="store_true", help="Keep a .bak copy of the store.")
    parser_generate.add_argument("--show", action="store_true", help="Print each new puzzle.")
    parser_generate.set_defaults(func=do_generate)

    parser_validate = subparsers.add_parser("validate", help="Check every puzzle in a store.")
    parser_validate.add_argument("store", help="JSON store path.")
    parser_validate.add_argument("--skip-z3", action="store_true", help="Skip the Z3 uniqueness proof.")
    parser_validate.set_defaults(func=do_validate)

    parser_show = subparsers.add_parser("show", help="Print a stored puzzle.")
    parser_show.add_argument("store", help="JSON store path.")
    parser_show.add_argument("number", type=int, help="Puzzle number.")
    parser_show.set_defaults(func=do_show)

    parser_serve = subparsers.add_parser("serve", help="Run the JSON API.")
    parser_serve.add_argument("--host", default="127.0.0.1")
    parser_serve.add_argument("--port", type=int, default=5000)
    parser_serve.add_argument("--store", default=None, help="JSON store path.")
    parser_serve.add_argument("--debug", action="store_true")
    parser_serve.set_defaults(func=do_serve)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        return args.func(args)
    except TangoError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
