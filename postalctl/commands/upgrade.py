"""Version management: set-version and upgrade."""

import logging

from postalctl.commands.runner import runner_args
from postalctl.compose import invoke, invoke_checked, resolve_version, set_version
from postalctl.errors import MissingArgumentError, SubprocessFailureError
from postalctl.source import PULL_COMMAND

logger = logging.getLogger(__name__)


def handle_set_version(ctx, args):
    if not args.version:
        raise MissingArgumentError(
            "Must provide a version number",
            hint="usage: postal set-version <version>",
        )
    set_version(ctx, args.version)
    return 0


def handle_upgrade(ctx, args):
    """Pull installer changes, move to the new version and restart the stack."""
    logger.info("Pulling latest installer changes...")
    rc = ctx.pull_source()
    if rc != 0:
        raise SubprocessFailureError(PULL_COMMAND, rc)

    version = args.version or resolve_version(ctx)
    logger.info(f"Upgrading to {version}")
    set_version(ctx, version)

    invoke_checked(ctx, ["pull"])
    invoke_checked(ctx, runner_args("upgrade"))
    return invoke(ctx, ["up", "-d"])


def register_upgrade_commands(subparsers):
    """Register set-version and upgrade."""
    parser = subparsers.add_parser("set-version", help="Render docker-compose.yml for a specific postal version")
    parser.add_argument("version", nargs="?", default=None, help="Postal version (e.g. 3.3.4)")
    parser.set_defaults(func=handle_set_version)

    parser = subparsers.add_parser("upgrade", help="Upgrade postal to the given or latest version")
    parser.add_argument("version", nargs="?", default=None, help="Target version (default: latest release)")
    parser.set_defaults(func=handle_upgrade)
