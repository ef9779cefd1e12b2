"""Command-line entry point for Canvas Snake."""

from __future__ import annotations

import argparse
import logging
import sys

logger = logging.getLogger(__name__)

# One character per tick in --moves; "." keeps the current heading.
_MOVE_CHARS = {"u": "up", "d": "down", "l": "left", "r": "right"}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="canvas-snake",
        description="Canvas Snake game server and tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- serve ---
    serve_p = sub.add_parser("serve", help="Run the HTTP/WebSocket server.")
    serve_p.add_argument("--host", type=str, default="127.0.0.1")
    serve_p.add_argument("--port", type=int, default=8000)
    serve_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file.",
    )
    serve_p.add_argument(
        "--difficulty", type=str, default=None,
        choices=["easy", "medium", "hard"],
    )
    serve_p.add_argument("--high-score-file", type=str, default=None)

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Play a scripted game headlessly.",
    )
    sim_p.add_argument("--grid-size", type=int, default=30)
    sim_p.add_argument("--steps", type=int, default=20)
    sim_p.add_argument("--seed", type=int, default=None)
    sim_p.add_argument(
        "--moves", type=str, default="",
        help="Turns per tick: u/d/l/r, '.' to keep going straight.",
    )

    # --- high-score ---
    hs_p = sub.add_parser("high-score", help="Show or clear the best score.")
    hs_p.add_argument("--high-score-file", type=str, default=None)
    hs_p.add_argument("--reset", action="store_true")

    return parser


def _load_config(args: argparse.Namespace):
    from canvas_snake.config import GameConfig

    config = (
        GameConfig.load(args.config)
        if getattr(args, "config", None) else GameConfig()
    )
    return config.with_overrides(
        difficulty=getattr(args, "difficulty", None),
        high_score_file=getattr(args, "high_score_file", None),
    )


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from canvas_snake.server.app import create_app

    app = create_app(_load_config(args))
    uvicorn.run(app, host=args.host, port=args.port)
    return 0


def _run_simulate(args: argparse.Namespace) -> int:
    from canvas_snake.controls import direction_for_name
    from canvas_snake.engine import GameEngine, GameStatus
    from canvas_snake.render import AsciiRenderer

    moves = args.moves.lower()
    unknown = set(moves) - set(_MOVE_CHARS) - {"."}
    if unknown:
        logger.error("Unknown move characters: %s", "".join(sorted(unknown)))
        return 2

    try:
        engine = GameEngine(grid_size=args.grid_size, seed=args.seed)
    except ValueError as exc:
        logger.error("Cannot simulate: %s", exc)
        return 2

    snapshot = engine.reset()
    for i in range(args.steps):
        if i < len(moves) and moves[i] in _MOVE_CHARS:
            engine.set_direction(direction_for_name(_MOVE_CHARS[moves[i]]))
        snapshot = engine.step()
        if snapshot.status != GameStatus.RUNNING:
            break

    AsciiRenderer(stream=sys.stdout).render(snapshot)
    return 0


def _run_high_score(args: argparse.Namespace) -> int:
    from canvas_snake.scores import JsonScoreStore

    store = JsonScoreStore(_load_config(args).high_score_file)
    if args.reset:
        store.clear()
        logger.info("High score cleared.")
    print(store.get_high_score())  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``canvas-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "serve": _run_serve,
        "simulate": _run_simulate,
        "high-score": _run_high_score,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
