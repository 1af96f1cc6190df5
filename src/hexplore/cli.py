"""Command-line interface: replay explorer moves and summarize the map."""

import argparse
import sys
import tomllib

import structlog

from .config import ExplorerConfig, find_config, load_config
from .exceptions import HexploreError
from .hexgrid import Direction
from .session import ExplorerSession
from .terrain_types import Category


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Grow a hex exploration map along a sequence of moves"
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Config name or path (default: built-in defaults)",
    )
    parser.add_argument("--seed", type=str, default=None, help="Generation seed")
    parser.add_argument(
        "--difficulty", type=str, default=None, help="Difficulty profile name"
    )
    parser.add_argument(
        "--moves",
        type=str,
        default="",
        help="Comma-separated directions, e.g. 'e,e,ne,sw' (default: none)",
    )
    parser.add_argument(
        "--reroll", action="store_true", help="Reroll the last move once at the end"
    )
    parser.add_argument("--no-fog", action="store_true", help="Disable fog of war")
    parser.add_argument(
        "--vision", type=int, default=None, help="Vision radius (1, 2 or 3)"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )
    return parser


def parse_moves(moves: str) -> list[Direction]:
    """Parse a comma-separated direction list."""
    return [Direction.parse(m) for m in moves.split(",") if m.strip()]


def format_summary(session: ExplorerSession) -> str:
    """Human-readable summary of a session."""
    counters = session.counters
    lines = [
        f"Seed: {session.seed}  Profile: {session.profile.name}",
        f"Position: {session.position}  Move: {session.state.move_id}",
        f"Tiles: {counters.total} "
        f"(biome {counters.biome}, desert {counters.desert}, "
        f"biome fraction {counters.biome_fraction:.2%})",
        f"Visible: {len(session.visible_tiles())}",
        f"Trail: {' '.join(str(p) for p in session.trail) or '-'}",
        f"Rivers: {len(session.rivers)}",
    ]
    for i, river in enumerate(session.rivers):
        state = "finished" if river.finished else "flowing"
        path = " <- ".join(str(n) for n in river.nodes)
        lines.append(f"  #{i} [{state}] {path}")
    discovered = session.discovered_types()
    for category in Category:
        labels = ", ".join(t.label for t in discovered[category]) or "-"
        lines.append(f"{category.value}: {labels}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(10 if args.verbose else 20),
    )

    try:
        config = load_config(find_config(args.config)) if args.config else ExplorerConfig()
        overrides = {}
        if args.seed is not None:
            overrides["seed"] = args.seed
        if args.difficulty is not None:
            overrides["difficulty"] = args.difficulty
        if overrides:
            config = config.model_copy(update=overrides)

        session = ExplorerSession.from_config(config)
        if args.no_fog:
            session.set_fog(False)
        if args.vision is not None:
            session.set_vision_radius(args.vision)

        for direction in parse_moves(args.moves):
            session.move(direction)
        if args.reroll:
            session.reroll_last_move()
    except (HexploreError, FileNotFoundError, tomllib.TOMLDecodeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    print(format_summary(session))
    return 0


if __name__ == "__main__":
    sys.exit(main())
