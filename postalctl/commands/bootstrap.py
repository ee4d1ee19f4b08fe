"""Bootstrap: first-time scaffolding of config and key material."""

import logging
import os

from postalctl.compose import resolve_version, set_version
from postalctl.errors import MissingArgumentError
from postalctl.settings import (
    CONFIG_TEMPLATE,
    DEFAULT_OUTPUT_PATH,
    PROXY_TEMPLATE,
    SIGNING_KEY_BITS,
)
from postalctl.templates import generate_secret_key, render_template, write_file

logger = logging.getLogger(__name__)

SIGNING_KEY_FILE = "signing.key"
SIGNING_KEY_MODE = 0o644

HOSTNAME_PLACEHOLDER = "postal.yourdomain.com"
SECRET_KEY_PLACEHOLDER = "{{secretkey}}"


def _create_once(path):
    """Return True if *path* should be created, logging the decision."""
    if os.path.exists(path):
        logger.info(f"=> {path} already exists, skipping")
        return False
    logger.info(f"=> Creating {path}")
    return True


def scaffold(ctx, hostname, output_path):
    """Create postal.yml, Caddyfile and signing.key in *output_path* if absent."""
    settings = ctx.settings

    if settings.dry_run:
        logger.info(f"[dry-run] mkdir -p {output_path}")
    else:
        os.makedirs(output_path, exist_ok=True)

    config_path = os.path.join(output_path, CONFIG_TEMPLATE)
    if _create_once(config_path):
        render_template(
            settings.config_template,
            config_path,
            {SECRET_KEY_PLACEHOLDER: generate_secret_key(), HOSTNAME_PLACEHOLDER: hostname},
            dry_run=settings.dry_run,
        )

    proxy_path = os.path.join(output_path, PROXY_TEMPLATE)
    if _create_once(proxy_path):
        render_template(
            settings.proxy_template,
            proxy_path,
            {HOSTNAME_PLACEHOLDER: hostname},
            dry_run=settings.dry_run,
        )

    key_path = os.path.join(output_path, SIGNING_KEY_FILE)
    if _create_once(key_path):
        pem = ctx.generate_rsa_private_key(SIGNING_KEY_BITS)
        write_file(key_path, pem, mode=SIGNING_KEY_MODE, dry_run=settings.dry_run)


def handle_bootstrap(ctx, args):
    hostname = (args.hostname or "").strip()
    if not hostname:
        raise MissingArgumentError(
            "Hostname is missing",
            hint="usage: postal bootstrap postal.mydomain.com [path/to/config]",
        )
    output_path = args.output_path or DEFAULT_OUTPUT_PATH

    set_version(ctx, resolve_version(ctx))
    scaffold(ctx, hostname, output_path)
    return 0


def register_bootstrap_command(subparsers):
    """Register the bootstrap command."""
    parser = subparsers.add_parser("bootstrap", help="Generate initial configuration for a new installation")
    parser.add_argument("hostname", nargs="?", default=None, help="Public hostname (e.g. postal.example.com)")
    parser.add_argument(
        "output_path",
        nargs="?",
        default=None,
        help=f"Directory for postal.yml, Caddyfile and signing.key (default: {DEFAULT_OUTPUT_PATH})",
    )
    parser.set_defaults(func=handle_bootstrap)
