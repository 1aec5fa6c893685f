"""Mini Brainstormer command-line interface.

Argparse-based CLI that launches the GUI or runs the loaders headless, and
initializes logging early. Exposed via ``python -m brainstormer``.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import random
from typing import Optional

from .config import REEL_COUNT, BrainstormerConfig
from .content.errors import StartupFailure
from .content.loader import SourceLoader
from .content.models import ensure_items
from .engine.composer import compose
from .engine.reel import ReelEngine
from .logging_utils import LogMode, get_default_log_path, setup_logging

EXIT_OK = 0
EXIT_EMPTY = 1
EXIT_STARTUP_FAILURE = 2


def _add_logging_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Set log level (default: INFO)",
    )
    parser.add_argument(
        "--log-mode",
        choices=[mode.value for mode in LogMode],
        default=LogMode.NORMAL.value,
        help="Logging preset: quiet suppresses console info, perf forces DEBUG",
    )
    parser.add_argument(
        "--log-file",
        default=str(get_default_log_path()),
        help="Path to log file (default: per-user brainstormer directory)",
    )
    parser.add_argument(
        "--log-format",
        choices=["plain", "json"],
        default="plain",
        help="Log format (plain or json)",
    )


def _build_logging_parent() -> argparse.ArgumentParser:
    parent = argparse.ArgumentParser(add_help=False)
    _add_logging_args(parent)
    return parent


def _positive_float(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {raw!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {raw}")
    return value


def _add_source_args(parser: argparse.ArgumentParser, default: object = None) -> None:
    # Sub-commands pass SUPPRESS so they do not clobber flags given before the command name
    group = parser.add_argument_group("Reel sources")
    for n in range(1, REEL_COUNT + 1):
        group.add_argument(f"--l{n}", dest=f"l{n}", default=default, metavar="LABEL", help=f"Label of reel {n}")
        group.add_argument(f"--src{n}", dest=f"src{n}", default=default, metavar="SOURCE", help=f"URL or file path for reel {n}")
    group.add_argument(
        "--timeout", type=_positive_float, default=default, metavar="S", help="Fetch timeout in seconds"
    )


def build_parser() -> argparse.ArgumentParser:
    logging_parent = _build_logging_parent()
    parser = argparse.ArgumentParser(
        description="Mini Brainstormer CLI",
        parents=[logging_parent],
    )
    _add_source_args(parser)
    sub = parser.add_subparsers(dest="command", required=False)

    def add_subparser(name: str, **kwargs: object) -> argparse.ArgumentParser:
        parents = list(kwargs.pop("parents", []))
        parents.insert(0, logging_parent)
        return sub.add_parser(name, parents=parents, **kwargs)

    p_run = add_subparser("run", help="Start the GUI (default)")
    _add_source_args(p_run, default=argparse.SUPPRESS)

    p_load = add_subparser("load", help="Load one list source and print its items as JSON")
    p_load.add_argument("source", help="URL or file path")
    p_load.add_argument("--timeout", type=_positive_float, default=None, metavar="S", help="Fetch timeout in seconds")

    p_roll = add_subparser("roll", help="Pick one concept headless and print it")
    _add_source_args(p_roll, default=argparse.SUPPRESS)
    p_roll.add_argument("--seed", type=int, default=None, help="Seed for reproducible picks")
    return parser


def config_from_args(args: argparse.Namespace) -> BrainstormerConfig:
    labels = [getattr(args, f"l{n}", None) for n in range(1, REEL_COUNT + 1)]
    sources = [getattr(args, f"src{n}", None) for n in range(1, REEL_COUNT + 1)]
    return BrainstormerConfig.resolve(labels=labels, sources=sources, timeout_s=getattr(args, "timeout", None))


def cmd_load(args: argparse.Namespace) -> int:
    timeout = args.timeout if args.timeout is not None else BrainstormerConfig.resolve().fetch_timeout_s
    loader = SourceLoader(timeout_s=timeout)
    items = asyncio.run(loader.load(args.source))
    print(json.dumps([item.to_dict() for item in items], ensure_ascii=False, indent=2))
    return EXIT_OK if items else EXIT_EMPTY


async def roll_concept(config: BrainstormerConfig, *, loader: Optional[SourceLoader] = None, seed: Optional[int] = None) -> str:
    """Load every source, settle each reel on a random item and compose."""
    loader = loader or SourceLoader(timeout_s=config.fetch_timeout_s)
    lists = await loader.load_all(config.sources)
    rng = random.Random(seed)
    engines = [
        ReelEngine(ensure_items(items), rng=rng, name=label)
        for label, items in zip(config.labels, lists)
    ]
    for engine in engines:
        engine.lock(True)
    return compose(config.labels, *(engine.value for engine in engines)).share_text


def cmd_roll(args: argparse.Namespace) -> int:
    log = logging.getLogger(__name__)
    try:
        text = asyncio.run(roll_concept(config_from_args(args), seed=args.seed))
    except Exception as exc:  # noqa: BLE001 - reported as a startup failure
        failure = StartupFailure(str(exc))
        log.exception("roll failed: %s", failure)
        return EXIT_STARTUP_FAILURE
    print(text)
    return EXIT_OK


def cmd_run(args: argparse.Namespace) -> int:
    # Import lazily so headless commands never load Qt
    from .app import run as run_gui

    return run_gui(config_from_args(args))


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging before doing any work
    setup_logging(
        level=args.log_level,
        log_file=args.log_file,
        json_format=(args.log_format == "json"),
        log_mode=args.log_mode,
        add_console=True,
    )

    cmd = args.command or "run"
    if cmd == "load":
        return cmd_load(args)
    if cmd == "roll":
        return cmd_roll(args)
    if cmd == "run":
        return cmd_run(args)
    parser.error(f"unknown command {cmd!r}")
    return EXIT_STARTUP_FAILURE


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
