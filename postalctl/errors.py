"""Error taxonomy for the postal CLI.

Every error carries a human-readable message, an optional hint and the exit
code the process terminates with when the error reaches the dispatcher.
"""


class PostalError(Exception):
    """Base class for all errors reported to the operator."""

    exit_code = 1

    def __init__(self, message, *, hint=None):
        super().__init__(message)
        self.message = message
        self.hint = hint

    def __str__(self):
        return self.message


class ConfigParseError(PostalError):
    """The YAML configuration file could not be parsed."""

    exit_code = 2


class MissingArgumentError(PostalError):
    """A command was invoked without a required argument."""

    exit_code = 3


class TemplateMissingError(PostalError):
    """A template file to render from does not exist."""

    exit_code = 4


class NetworkError(PostalError):
    """The release API could not be reached."""

    exit_code = 5


class RateLimitError(PostalError):
    """The release API refused the request because of rate limiting."""

    exit_code = 6


class VersionNotFoundError(PostalError):
    """The release API answered without a usable tag."""

    exit_code = 7


class ExternalToolMissingError(PostalError):
    """A required executable is not on PATH."""

    exit_code = 127

    def __init__(self, tool, *, hint=None):
        super().__init__(f"'{tool}' not found. Is it installed and on PATH?", hint=hint)
        self.tool = tool


class SubprocessFailureError(PostalError):
    """A wrapped command exited with a non-zero status."""

    def __init__(self, command, returncode, *, hint=None):
        super().__init__(f"Command failed with exit code {returncode}: {' '.join(command)}", hint=hint)
        self.command = list(command)
        self.returncode = returncode
        self.exit_code = returncode if returncode > 0 else 1
