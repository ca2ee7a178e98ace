"""Configuration read from environment variables and .env files."""
import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


def load_env() -> None:
    """Load environment variables from .env or env file."""
    load_dotenv('.env') or load_dotenv('env')


def get(section: str, key: str, default: Optional[str] = None) -> Optional[str]:
    """Look up a dotted configuration key in the environment.

    ``get("github", "token")`` reads ``GITHUB_TOKEN``.
    """
    return os.getenv(f"{section}_{key}".upper(), default)


def get_connection_string() -> str:
    """Build PostgreSQL connection string from environment variables."""
    host = get("postgres", "host", "localhost")
    port = get("postgres", "port", "5432")
    database = get("postgres", "db", "repo_metadata")
    user = get("postgres", "user", "postgres")
    password = get("postgres", "password", "postgres")

    return f"host={host} port={port} dbname={database} user={user} password={password}"


@dataclass(frozen=True)
class Settings:
    """Process-wide settings resolved once at startup."""
    github_token: str
    github_api_url: str
    github_timeout_seconds: float
    postgres_dsn: str

    @classmethod
    def from_env(cls) -> 'Settings':
        """Resolve settings from the environment.

        Raises:
            ConfigurationError: If the GitHub token is missing or a value is malformed
        """
        token = get("github", "token")
        if not token:
            raise ConfigurationError("GITHUB_TOKEN environment variable is required")

        timeout = get("github", "timeout", "30")
        try:
            timeout_seconds = float(timeout)
        except ValueError as e:
            raise ConfigurationError(f"GITHUB_TIMEOUT must be a number, got {timeout!r}") from e

        return cls(
            github_token=token,
            github_api_url=get("github", "api_url", "https://api.github.com"),
            github_timeout_seconds=timeout_seconds,
            postgres_dsn=get_connection_string()
        )
