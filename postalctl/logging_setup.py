"""CLI logging setup: plain %(message)s output, errors on stderr."""

import logging
import sys


class _MaxLevelFilter(logging.Filter):
    def __init__(self, max_level):
        super().__init__()
        self.max_level = max_level

    def filter(self, record):
        return record.levelno <= self.max_level


def setup_cli_logging(verbose=False):
    """Configure the root logger so log lines read like print() output.

    INFO and DEBUG go to stdout, WARNING and above to stderr.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    root.handlers.clear()

    formatter = logging.Formatter("%(message)s")

    out = logging.StreamHandler(sys.stdout)
    out.setFormatter(formatter)
    out.addFilter(_MaxLevelFilter(logging.INFO))

    err = logging.StreamHandler(sys.stderr)
    err.setLevel(logging.WARNING)
    err.setFormatter(formatter)

    root.addHandler(out)
    root.addHandler(err)
