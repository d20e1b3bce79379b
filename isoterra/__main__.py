"""Entry point for ``python -m isoterra``.

Loads the YAML config, generates a world, optionally runs the economy
for a number of ticks, and prints the terrain as a text map.
"""

from __future__ import annotations

import argparse
import pathlib
from dataclasses import replace

from isoterra.logging_config import configure_logging
from isoterra.simulation.config import SimulationConfig
from isoterra.simulation.engine import CityEngine
from isoterra.world.grid import Grid

_DEFAULT_CONFIG = pathlib.Path(__file__).resolve().parent / "config" / "default.yaml"


def build_parser() -> argparse.ArgumentParser:
    """Return the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="isoterra",
        description="Isoterra - tile-grid terrain generator",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=None,
        help="Path to YAML config file (default: bundled config/default.yaml)",
    )
    parser.add_argument("--seed", type=int, help="Override the RNG seed")
    parser.add_argument("--width", type=int, help="Override grid columns")
    parser.add_argument("--height", type=int, help="Override grid rows")
    parser.add_argument(
        "--ticks",
        type=int,
        default=0,
        help="Economy ticks to run after generation (default: 0)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit logs as JSON lines",
    )
    return parser


def load_config(path: pathlib.Path | None) -> SimulationConfig:
    """Load ``path``, or the bundled defaults when no path is given.

    An explicit path must exist.  Without one, the bundled YAML is used
    if it was installed, and the built-in dataclass defaults otherwise.
    """
    if path is not None:
        return SimulationConfig.from_yaml(path)
    if _DEFAULT_CONFIG.is_file():
        return SimulationConfig.from_yaml(_DEFAULT_CONFIG)
    return SimulationConfig()


def format_summary(grid: Grid) -> str:
    """Return a per-terrain tile count table for ``grid``."""
    total = grid.width * grid.height
    lines = [f"{grid.width}x{grid.height} tiles"]
    for kind, count in grid.terrain_counts().items():
        lines.append(
            f"  {kind.glyph} {kind.name.lower():<9}{count:>7}  {count / total:6.1%}",
        )
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI args, generate the world, print it."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, json=args.json_logs)

    config = load_config(args.config)
    overrides = {
        name: value
        for name, value in (
            ("seed", args.seed),
            ("width", args.width),
            ("height", args.height),
        )
        if value is not None
    }
    config = replace(config, **overrides)

    engine = CityEngine(config=config)
    engine.run(args.ticks)

    print(engine.grid.render_text())
    print()
    print(format_summary(engine.grid))


if __name__ == "__main__":
    main()
