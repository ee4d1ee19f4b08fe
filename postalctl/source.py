"""Pull the latest installer changes from git before an upgrade."""

import logging
import shutil
import subprocess

from postalctl.errors import ExternalToolMissingError

logger = logging.getLogger(__name__)

PULL_COMMAND = ["git", "pull", "origin", "main"]


def make_pull_source(root_dir, dry_run=False):
    """Create a pull_source() -> returncode callable running in *root_dir*."""

    def pull_source():
        if dry_run:
            logger.info(f"[dry-run] {' '.join(PULL_COMMAND)}")
            return 0
        if shutil.which("git") is None:
            raise ExternalToolMissingError("git")
        return subprocess.run(PULL_COMMAND, cwd=root_dir).returncode

    return pull_source
