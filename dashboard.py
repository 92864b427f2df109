"""Main entry point for the repository dashboard.

Composition root: builds the store and GitHub client from the environment,
hands them to the ingestion service and runs one add, list or remove action.
"""
import argparse
import asyncio
import logging
import sys
from typing import List, Optional
from devrepo.application.ingestion_service import IngestionService
from devrepo.config import Settings, get_settings
from devrepo.domain.errors import OperationFailed, StoreError
from devrepo.domain.metrics import split_activity_level
from devrepo.domain.models import RepositoryRecord
from devrepo.infrastructure.github_client import GitHubRestClient
from devrepo.infrastructure.postgres_repository import PostgresRepositoryStorage


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="devrepo",
        description="Track and analyze GitHub repository metrics"
    )
    parser.add_argument(
        "--details",
        action="store_true",
        help="Show the underlying error message when an action fails"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    add_parser = subparsers.add_parser("add", help="Add a repository by URL")
    add_parser.add_argument(
        "url",
        help="GitHub repository URL (e.g., https://github.com/facebook/react)"
    )

    subparsers.add_parser("list", help="List tracked repositories, newest first")

    remove_parser = subparsers.add_parser("remove", help="Remove a tracked repository")
    remove_parser.add_argument("id", type=int, help="Repository id as shown by 'list'")

    return parser


def build_service(settings: Settings) -> IngestionService:
    """Wire infrastructure components into the ingestion service."""
    storage = PostgresRepositoryStorage(settings.connection_string)
    github_client = GitHubRestClient(
        api_url=settings.github_api_url,
        access_token=settings.github_token,
        timeout=settings.github_timeout
    )
    return IngestionService(
        github_client=github_client,
        storage=storage,
        host=settings.github_host
    )


def format_records(records: List[RepositoryRecord]) -> str:
    """Render records as a plain-text table."""
    if not records:
        return "No repositories added yet"

    lines = [
        f"{'ID':>6} {'Repository':<40} {'Stars':>10} {'Forks':>8} {'Issues':>7} "
        f"{'Language':<12} {'Health':>6} {'Pushed':>8} {'Trend':>6} {'Added':<10}",
        "-" * 124
    ]
    for record in records:
        days, unit = split_activity_level(record.activity_level)
        pushed = f"{days}d" if unit else days
        lines.append(
            f"{record.repo_id:>6} {record.full_name:<40} {record.stars:>10,} "
            f"{record.forks:>8,} {record.issues:>7,} {record.main_language:<12} "
            f"{record.health_score:>6} {pushed:>8} {record.trending_factor:>6} "
            f"{record.created_at:%Y-%m-%d}"
        )
    return "\n".join(lines)


async def run(args: argparse.Namespace, service: IngestionService) -> int:
    """Execute the requested action and return the process exit status."""
    try:
        if args.command == "add":
            record = await service.add_repository(args.url)
            print(format_records([record]))
        elif args.command == "list":
            records = await service.list_repositories()
            print(format_records(records))
        elif args.command == "remove":
            await service.remove_repository(args.id)
            print(f"Removed repository {args.id}")
    except OperationFailed as e:
        print(e.message, file=sys.stderr)
        if args.details:
            print(e.detail, file=sys.stderr)
        return 1
    return 0


async def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, build the service and run one action."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    try:
        settings = get_settings()
        logging.getLogger().setLevel(settings.log_level)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    try:
        service = build_service(settings)
    except StoreError as e:
        logger.error(f"Could not initialize storage: {e}")
        return 1

    try:
        return await run(args, service)
    finally:
        await service.close()


def cli() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
