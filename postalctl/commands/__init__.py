"""Subcommands of the postal CLI. Each module registers its parsers."""

import argparse


def add_passthrough_parser(subparsers, name, help_text):
    """Register a command whose remaining arguments go to compose verbatim.

    The sub-parser knows no options of its own, so tokens such as ``-f`` or
    ``--tail`` are captured instead of being rejected.
    """
    parser = subparsers.add_parser(name, help=help_text, prefix_chars="+", add_help=False)
    parser.add_argument("compose_args", nargs=argparse.REMAINDER, help="Arguments forwarded to docker compose")
    return parser
