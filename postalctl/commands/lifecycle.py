"""Stack lifecycle commands: start, stop, status, logs, dc, bash."""

from postalctl.commands import add_passthrough_parser
from postalctl.compose import invoke
from postalctl.config import ABSENT
from postalctl.errors import MissingArgumentError
from postalctl.settings import WORKER_REPLICAS_QUERY, WORKER_SERVICE


def start_args(ctx, extra_args):
    """Build the ``up`` arguments, scaling workers when postal.yml asks for it."""
    compose_args = ["up", "-d"]
    replicas = ctx.read_config_value(ctx.settings.config_path, WORKER_REPLICAS_QUERY)
    if replicas is not ABSENT:
        compose_args += ["--scale", f"{WORKER_SERVICE}={replicas}"]
    return compose_args + list(extra_args)


def handle_start(ctx, args):
    return invoke(ctx, start_args(ctx, args.compose_args))


def handle_stop(ctx, args):
    return invoke(ctx, ["down"])


def handle_status(ctx, args):
    return invoke(ctx, ["ps"])


def handle_logs(ctx, args):
    return invoke(ctx, ["logs", *args.compose_args])


def handle_dc(ctx, args):
    return invoke(ctx, args.compose_args)


def handle_bash(ctx, args):
    if not args.service:
        raise MissingArgumentError(
            "Must provide the name of the service you wish to get bash for",
            hint="usage: postal bash <service>",
        )
    return invoke(ctx, ["exec", args.service, "bash"])


def register_lifecycle_commands(subparsers):
    """Register start, stop, status, logs, dc and bash."""
    parser = add_passthrough_parser(subparsers, "start", "Start the postal stack in the background")
    parser.set_defaults(func=handle_start)

    parser = subparsers.add_parser("stop", help="Stop and remove the postal containers")
    parser.set_defaults(func=handle_stop)

    parser = subparsers.add_parser("status", help="Show container status")
    parser.set_defaults(func=handle_status)

    parser = add_passthrough_parser(subparsers, "logs", "Show container logs")
    parser.set_defaults(func=handle_logs)

    parser = add_passthrough_parser(subparsers, "dc", "Run an arbitrary docker compose command")
    parser.set_defaults(func=handle_dc)

    parser = subparsers.add_parser("bash", help="Open a bash shell in a running service container")
    parser.add_argument("service", nargs="?", default=None, help="Service name (e.g. web, smtp, worker)")
    parser.set_defaults(func=handle_bash)
