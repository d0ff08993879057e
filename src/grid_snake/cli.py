"""Command-line launcher for Grid Snake."""

from __future__ import annotations

import argparse
import logging
import sys

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grid-snake",
        description="Grid Snake headless simulation and config tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser("simulate", help="Run one round headless.")
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (flags override it).",
    )
    sim_p.add_argument("--board-size", type=int, default=None)
    sim_p.add_argument("--cell-size", type=int, default=None)
    sim_p.add_argument("--seed", type=int, default=None)
    sim_p.add_argument(
        "--moves", type=str, default="",
        help="Comma-separated directions, one per tick; the last is held.",
    )
    sim_p.add_argument("--max-ticks", type=int, default=1_000)

    # --- config ---
    cfg_p = sub.add_parser("config", help="Write a config file.")
    cfg_p.add_argument("output", help="Path for the JSON config.")
    cfg_p.add_argument("--board-size", type=int, default=None)
    cfg_p.add_argument("--cell-size", type=int, default=None)
    cfg_p.add_argument("--tick-rate", type=float, default=None)
    cfg_p.add_argument("--seed", type=int, default=None)

    return parser


def _config_from_args(args: argparse.Namespace):
    from grid_snake.config import GameConfig

    config_path = getattr(args, "config", None)
    config = GameConfig.load(config_path) if config_path else GameConfig()

    overrides: dict = {}
    for name in ("board_size", "cell_size", "tick_rate", "seed"):
        val = getattr(args, name, None)
        if val is not None:
            overrides[name] = val

    if overrides:
        d = config.to_dict()
        d.update(overrides)
        config = GameConfig(**d)
    return config


def _run_simulate(args: argparse.Namespace) -> int:
    from grid_snake.controller import SnakeController

    config = _config_from_args(args)
    controller = SnakeController.new_round(config)
    moves = [m for m in args.moves.split(",") if m.strip()]

    for i in range(args.max_ticks):
        if i < len(moves) and not controller.set_direction(moves[i]):
            logger.warning("Ignoring unknown move %r at tick %d.", moves[i], i)
        controller.tick()
        if controller.crashed:
            break

    reason = controller.crash_reason.value if controller.crash_reason else "-"
    print(  # noqa: T201
        f"Simulation: {controller.tick_count} ticks, "
        f"length {controller.snake.length}, "
        f"state {controller.round_state.value}, crash {reason}"
    )
    return 0


def _run_config(args: argparse.Namespace) -> int:
    config = _config_from_args(args)
    config.save(args.output)
    print(f"Wrote config to {args.output}")  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``grid-snake`` CLI."""
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
        "simulate": _run_simulate,
        "config": _run_config,
    }
    try:
        return handlers[args.command](args)
    except ValueError as exc:
        parser.error(str(exc))
    return 2


if __name__ == "__main__":
    sys.exit(main())
