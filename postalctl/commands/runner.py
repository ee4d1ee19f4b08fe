"""One-off postal tasks run in a throwaway runner container."""

from postalctl.commands import add_passthrough_parser
from postalctl.compose import invoke, invoke_checked
from postalctl.settings import RUNNER_SERVICE


def runner_args(*postal_args):
    """Compose arguments for ``postal <args>`` inside a fresh runner container."""
    return ["run", "--rm", RUNNER_SERVICE, "postal", *postal_args]


def handle_initialize(ctx, args):
    invoke_checked(ctx, ["pull"])
    return invoke(ctx, runner_args("initialize"))


def handle_upgrade_db(ctx, args):
    return invoke(ctx, runner_args("upgrade"))


def handle_console(ctx, args):
    return invoke(ctx, runner_args("console"))


def handle_make_user(ctx, args):
    return invoke(ctx, runner_args("make-user"))


def handle_default_dkim_record(ctx, args):
    return invoke(ctx, runner_args("default-dkim-record"))


def handle_test_app_smtp(ctx, args):
    return invoke(ctx, runner_args("test-app-smtp", *args.compose_args))


def register_runner_commands(subparsers):
    """Register initialize, upgrade-db, console, make-user, default-dkim-record and test-app-smtp."""
    parser = subparsers.add_parser("initialize", help="Pull images and initialize the database")
    parser.set_defaults(func=handle_initialize)

    parser = subparsers.add_parser("upgrade-db", help="Run database migrations")
    parser.set_defaults(func=handle_upgrade_db)

    parser = subparsers.add_parser("console", help="Open an interactive postal console")
    parser.set_defaults(func=handle_console)

    parser = subparsers.add_parser("make-user", help="Create an admin user")
    parser.set_defaults(func=handle_make_user)

    parser = subparsers.add_parser("default-dkim-record", help="Print the default DKIM DNS record")
    parser.set_defaults(func=handle_default_dkim_record)

    parser = add_passthrough_parser(subparsers, "test-app-smtp", "Send a test message through the app SMTP settings")
    parser.set_defaults(func=handle_test_app_smtp)
