"""Application configuration read from the environment."""
import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the dashboard."""
    github_api_url: str = "https://api.github.com"
    github_host: str = "github.com"
    github_token: Optional[str] = None
    github_timeout: float = 30.0
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "devrepo"
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"
    log_level: str = "INFO"

    @property
    def connection_string(self) -> str:
        """PostgreSQL connection string in libpq key/value form."""
        return (
            f"host={self.postgres_host} port={self.postgres_port} "
            f"dbname={self.postgres_db} user={self.postgres_user} "
            f"password={self.postgres_password}"
        )


def get_settings(load_env: bool = True) -> Settings:
    """Build Settings from environment variables.

    Args:
        load_env: Load a ``.env`` (or ``env``) file into the environment first

    Raises:
        ValueError: When a numeric variable cannot be parsed
    """
    if load_env:
        # Load environment variables from .env or env file
        load_dotenv('.env') or load_dotenv('env')

    return Settings(
        github_api_url=os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip("/"),
        github_host=os.getenv("GITHUB_HOST", "github.com"),
        github_token=os.getenv("GITHUB_TOKEN") or None,
        github_timeout=float(os.getenv("GITHUB_TIMEOUT", "30")),
        postgres_host=os.getenv("POSTGRES_HOST", "localhost"),
        postgres_port=int(os.getenv("POSTGRES_PORT", "5432")),
        postgres_db=os.getenv("POSTGRES_DB", "devrepo"),
        postgres_user=os.getenv("POSTGRES_USER", "postgres"),
        postgres_password=os.getenv("POSTGRES_PASSWORD", "postgres"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper()
    )
