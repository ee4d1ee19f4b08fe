"""Compose invoker: run docker compose against the postal project.

The compose descriptor (docker-compose.yml) is rendered from a template with
the postal version baked in. It is generated on first use and re-rendered,
with a backup of the previous copy, whenever the version changes.
"""

import logging
import os
import shlex
import shutil
import subprocess

from postalctl.errors import ExternalToolMissingError, SubprocessFailureError
from postalctl.settings import COMPOSE_FILE, PROJECT_NAME
from postalctl.templates import render_template

logger = logging.getLogger(__name__)

VERSION_PLACEHOLDER = "{{version}}"


def compose_base_command(dry_run=False):
    """Prefer the standalone docker-compose binary, then the docker plugin."""
    if shutil.which("docker-compose"):
        return ["docker-compose"]
    if shutil.which("docker") or dry_run:
        return ["docker", "compose"]
    raise ExternalToolMissingError(
        "docker",
        hint="Install Docker with the compose plugin, or the standalone docker-compose binary.",
    )


def make_run_compose(settings):
    """Create a run_compose(args) -> returncode callable.

    Output is not captured: the child inherits stdout and stderr.
    """

    def run_compose(args):
        command = compose_base_command(settings.dry_run) + ["-p", PROJECT_NAME, *args]
        if settings.dry_run:
            logger.info(f"[dry-run] {shlex.join(command)}")
            return 0

        logger.debug(f"Running: {shlex.join(command)}")
        try:
            return subprocess.run(command, cwd=settings.root_dir).returncode
        except FileNotFoundError as e:
            raise ExternalToolMissingError(command[0]) from e

    return run_compose


def set_version(ctx, version):
    """Render a descriptor for *version*, keeping the current one as backup.

    The new descriptor is rendered to a staging file first, so a failed
    render leaves the current descriptor in place.
    """
    settings = ctx.settings
    compose_file = settings.compose_file
    backup_file = settings.compose_backup_file
    replacements = {VERSION_PLACEHOLDER: version}

    if settings.dry_run:
        if os.path.isfile(compose_file):
            logger.info(f"[dry-run] mv {compose_file} {backup_file}")
        render_template(settings.compose_template, compose_file, replacements, dry_run=True)
        logger.info(f"Updated {COMPOSE_FILE} with version {version}")
        return

    staged_file = compose_file + ".new"
    try:
        render_template(settings.compose_template, staged_file, replacements)
    except OSError:
        if os.path.exists(staged_file):
            os.remove(staged_file)
        raise

    if os.path.isfile(compose_file):
        os.replace(compose_file, backup_file)
    os.replace(staged_file, compose_file)
    logger.info(f"Updated {COMPOSE_FILE} with version {version}")


def resolve_version(ctx):
    """Look up the latest released version and report it."""
    version = ctx.fetch_latest_version()
    logger.info(f"Latest version is {version}")
    return version


def ensure_compose_file(ctx):
    """Generate the descriptor from the latest release if there is none yet."""
    if os.path.isfile(ctx.settings.compose_file):
        return
    logger.info(f"No {COMPOSE_FILE} file available. Generating using latest available version...")
    set_version(ctx, resolve_version(ctx))


def invoke(ctx, args):
    """Run a compose command and return its exit code."""
    ensure_compose_file(ctx)
    return ctx.run_compose(list(args))


def invoke_checked(ctx, args):
    """Run a compose command, raising SubprocessFailureError on failure."""
    rc = invoke(ctx, args)
    if rc != 0:
        raise SubprocessFailureError(["compose", "-p", PROJECT_NAME, *args], rc)
    return rc
