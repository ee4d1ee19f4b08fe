"""Invocation context: settings plus the external collaborators."""

from dataclasses import dataclass
from typing import Callable

from postalctl.compose import make_run_compose
from postalctl.config import read_config_value
from postalctl.keys import make_generate_rsa_private_key
from postalctl.release import make_fetch_latest_version
from postalctl.settings import Settings
from postalctl.source import make_pull_source


@dataclass
class PostalContext:
    """Everything a command needs. Tests build one with fakes."""

    settings: Settings
    run_compose: Callable[[list[str]], int]
    fetch_latest_version: Callable[[], str]
    generate_rsa_private_key: Callable[[int], bytes]
    read_config_value: Callable[[str, str], object]
    pull_source: Callable[[], int]

    @classmethod
    def from_settings(cls, settings: Settings) -> "PostalContext":
        """Wire the real docker, httpx, openssl, PyYAML and git adapters."""
        return cls(
            settings=settings,
            run_compose=make_run_compose(settings),
            fetch_latest_version=make_fetch_latest_version(settings),
            generate_rsa_private_key=make_generate_rsa_private_key(settings.dry_run),
            read_config_value=read_config_value,
            pull_source=make_pull_source(settings.root_dir, settings.dry_run),
        )
