"""CLI entry point for projboard."""

import argparse
from pathlib import Path

from . import __version__
from .config import Settings
from .logging import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="projboard",
        description="Terminal Kanban board for the projects pipeline",
    )
    parser.add_argument(
        "--project-root",
        type=Path,
        default=None,
        help="Directory containing projboard.yml (default: current directory)",
    )
    parser.add_argument(
        "--api-url",
        default=None,
        help="Projects API base URL (overrides projboard.yml)",
    )
    parser.add_argument(
        "--team",
        default=None,
        metavar="TEAM_ID",
        help="Show only projects owned by this team",
    )
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Run offline against a local data file seeded with sample projects",
    )
    parser.add_argument(
        "--generate",
        action="store_true",
        help="Generate default projboard.yml config and exit",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Path to write logs to file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    """Merge CLI args over environment-derived settings."""
    settings_kwargs: dict = {}
    if args.project_root:
        settings_kwargs["project_root"] = args.project_root
    if args.api_url:
        settings_kwargs["api_url"] = args.api_url
    if args.team:
        settings_kwargs["team"] = args.team
    if args.demo:
        settings_kwargs["demo"] = True
    if args.verbose:
        settings_kwargs["verbose"] = args.verbose
    if args.log_file:
        settings_kwargs["log_file"] = args.log_file
    return Settings(**settings_kwargs)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_args(argv)
    settings = build_settings(args)

    setup_logging(settings.verbose, settings.log_file)

    if args.generate:
        from .cli.generate import run_generate

        raise SystemExit(run_generate(settings.project_root))

    # Import here so --generate and --version stay fast
    from .app import run

    run(settings)


if __name__ == "__main__":
    main()
