#!/usr/bin/env python3
"""Postal installation manager: CLI entrypoint."""

import argparse
import logging
import sys

from postalctl.commands.bootstrap import register_bootstrap_command
from postalctl.commands.lifecycle import register_lifecycle_commands
from postalctl.commands.runner import register_runner_commands
from postalctl.commands.upgrade import register_upgrade_commands
from postalctl.context import PostalContext
from postalctl.errors import PostalError
from postalctl.logging_setup import setup_cli_logging
from postalctl.settings import Settings

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(prog="postal", description="Manage a postal mail server installation")
    parser.add_argument("--root", default=None, help="Directory holding docker-compose.yml (default: $POSTAL_ROOT or cwd)")
    parser.add_argument("--config", default=None, help="Path to postal.yml (default: $POSTAL_CONFIG_PATH or /opt/postal/config/postal.yml)")
    parser.add_argument("--dry-run", action="store_true", help="Print commands and file writes without executing them")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug output")
    subparsers = parser.add_subparsers(dest="command", required=True, metavar="command")

    register_upgrade_commands(subparsers)
    register_lifecycle_commands(subparsers)
    register_runner_commands(subparsers)
    register_bootstrap_command(subparsers)

    return parser


def run(args, ctx=None):
    """Execute the parsed command and return the process exit code."""
    if ctx is None:
        settings = Settings.from_env(root_dir=args.root, config_path=args.config, dry_run=args.dry_run)
        ctx = PostalContext.from_settings(settings)

    try:
        rc = args.func(ctx, args)
    except PostalError as e:
        logger.error(f"Error: {e.message}")
        if e.hint:
            logger.error(f"Hint: {e.hint}")
        return e.exit_code
    except OSError as e:
        logger.error(f"Error: {e}")
        return 1
    return rc or 0


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_cli_logging(verbose=args.verbose)
    sys.exit(run(args))


if __name__ == "__main__":
    main()
