"""Runtime settings, built once at startup and handed to every component."""

import os
from dataclasses import dataclass, field

PROJECT_NAME = "postal"

DEFAULT_OUTPUT_PATH = "/opt/postal/config"
DEFAULT_CONFIG_PATH = os.path.join(DEFAULT_OUTPUT_PATH, "postal.yml")
DEFAULT_RELEASES_URL = "https://api.github.com/repos/postalserver/postal/releases/latest"
DEFAULT_HTTP_TIMEOUT = 30.0

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")

COMPOSE_FILE = "docker-compose.yml"
COMPOSE_BACKUP_FILE = "docker-compose.backup.yml"
COMPOSE_TEMPLATE = "docker-compose.yml"
CONFIG_TEMPLATE = "postal.yml"
PROXY_TEMPLATE = "Caddyfile"

WORKER_REPLICAS_QUERY = ".worker.replicas"
WORKER_SERVICE = "worker"
RUNNER_SERVICE = "runner"
SIGNING_KEY_BITS = 1024


@dataclass
class Settings:
    """Paths and endpoints for a single invocation."""

    root_dir: str = field(default_factory=os.getcwd)
    config_path: str = DEFAULT_CONFIG_PATH
    templates_dir: str = TEMPLATES_DIR
    releases_url: str = DEFAULT_RELEASES_URL
    github_token: str = ""
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    dry_run: bool = False

    @property
    def compose_file(self) -> str:
        return os.path.join(self.root_dir, COMPOSE_FILE)

    @property
    def compose_backup_file(self) -> str:
        return os.path.join(self.root_dir, COMPOSE_BACKUP_FILE)

    @property
    def compose_template(self) -> str:
        return os.path.join(self.templates_dir, COMPOSE_TEMPLATE)

    @property
    def config_template(self) -> str:
        return os.path.join(self.templates_dir, CONFIG_TEMPLATE)

    @property
    def proxy_template(self) -> str:
        return os.path.join(self.templates_dir, PROXY_TEMPLATE)

    @classmethod
    def from_env(cls, root_dir=None, config_path=None, dry_run=False):
        """Build settings from CLI values, falling back to POSTAL_* env vars."""
        env = os.environ
        return cls(
            root_dir=os.path.abspath(root_dir or env.get("POSTAL_ROOT") or os.getcwd()),
            config_path=config_path or env.get("POSTAL_CONFIG_PATH") or DEFAULT_CONFIG_PATH,
            templates_dir=env.get("POSTAL_TEMPLATES_DIR") or TEMPLATES_DIR,
            releases_url=env.get("POSTAL_RELEASES_URL") or DEFAULT_RELEASES_URL,
            github_token=env.get("GITHUB_TOKEN", ""),
            dry_run=dry_run,
        )
