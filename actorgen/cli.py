"""CLI entrypoints for actorgen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import load_config
from .errors import GenerationError
from .logging import configure_logging
from .orchestrator import ActorBuilder


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_config_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "config",
        nargs="?",
        default=".",
        help="Path to actor.yml or its directory (defaults to current directory).",
    )


def _add_log_file_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also append log records to this file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="actorgen",
        description="Generate actor action mixins that delegate to test modules.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Generate the actions module for an actor.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    _add_config_argument(build_parser)
    _add_log_file_option(build_parser)
    build_parser.add_argument(
        "--force",
        action="store_true",
        help="Regenerate even when the stamp shows nothing changed.",
    )

    fingerprint_parser = subparsers.add_parser(
        "fingerprint",
        help="Print the fingerprint the next build would stamp.",
    )
    _add_verbose_option(fingerprint_parser, suppress_default=True)
    _add_config_argument(fingerprint_parser)
    _add_log_file_option(fingerprint_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for actorgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    builder = ActorBuilder()
    config_path = Path(args.config)

    if args.command == "build":
        try:
            outcome = builder.build_from_path(config_path, force=bool(args.force))
        except GenerationError as exc:
            parser.exit(1, f"actorgen build failed: {exc}\nRun with --verbose for more details.\n")
        rel_path = _relativize(outcome.path)
        if outcome.skipped:
            print(f"{rel_path} is up to date")
        else:
            print(f"{outcome.num_methods} actions generated in {rel_path}")
    elif args.command == "fingerprint":
        try:
            print(builder.fingerprint(load_config(config_path)))
        except GenerationError as exc:
            parser.exit(1, f"actorgen fingerprint failed: {exc}\n")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
