"""CLI for syncing Rego policies from GitHub into Harness."""

import logging

import click
from dotenv import load_dotenv

from gh import FetchError

from .config import ConfigError, SyncConfig
from .models import FileOutcome
from .sync import PolicySync

logger = logging.getLogger(__name__)

EXIT_FAILED = 1
EXIT_CONFIG = 2


def setup_logging(verbose: int) -> None:
    """Setup logging."""
    level = logging.DEBUG if verbose >= 2 else logging.INFO if verbose == 1 else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


# ============ CLI Group ============

@click.group()
@click.option("-v", "--verbose", count=True, help="Verbosity (-v, -vv)")
def cli(verbose: int) -> None:
    """Sync Rego policies from a GitHub repository into Harness."""
    load_dotenv()
    setup_logging(verbose)


# ============ Sync Command ============

MESSAGES = {
    "created": "Policy created in Harness: {path}",
    "planned": "Would create policy in Harness: {path} ({identifier})",
    "invalid": "Error: invalid policy file {path}: {message}",
    "fetch_failed": "Error getting file content: {path}: {message}",
    "publish_failed": "Error creating policy in Harness: {path}: {message}",
}


def echo_outcome(outcome: FileOutcome) -> None:
    """Print one file's result."""
    click.echo(MESSAGES[outcome.status].format(**outcome.model_dump()))


@cli.command()
@click.option("--account-id", help="Harness account identifier [HARNESSACCOUNTID]")
@click.option("--api-key", help="Harness API key [HARNESSAPIKEY]")
@click.option("--org", "org_id", help="Harness organization identifier [HARNESSORG]")
@click.option("--project", "project_id", help="Harness project identifier [HARNESSPROJECT]")
@click.option("--github-token", help="GitHub token [GITHUBTOKEN]")
@click.option("--github-user", help="Repository owner [GITHUBUSER]")
@click.option("--github-repo", help="Repository name [GITHUBREPO]")
@click.option("--policy-url", help="Harness policy endpoint [HARNESSPOLICYURL]")
@click.option("--github-api-url", help="GitHub API base URL [GITHUBAPIURL]")
@click.option("-n", "--dry-run", is_flag=True, help="Fetch policies without creating them")
def sync(dry_run: bool, **options: str | None) -> None:
    """Create a Harness policy for every .rego file in the repository root.

    Options override the environment variables shown in brackets.
    """
    config = SyncConfig(**{k: v for k, v in options.items() if v})

    try:
        pipeline = PolicySync(config)
    except ConfigError as e:
        click.echo(f"Error: {e}")
        raise SystemExit(EXIT_CONFIG)

    try:
        result = pipeline.run(dry_run=dry_run)
    except FetchError as e:
        click.echo(f"Error getting files from GitHub: {e}")
        raise SystemExit(EXIT_FAILED)

    for outcome in result.outcomes:
        echo_outcome(outcome)
    click.echo(f"\n{result.summary()}")
    if not result.ok:
        raise SystemExit(EXIT_FAILED)


@cli.command()
def check() -> None:
    """Report which required settings are missing from the environment."""
    missing = SyncConfig().missing()
    if missing:
        click.echo("Missing: " + ", ".join(missing))
        raise SystemExit(EXIT_CONFIG)
    click.echo("Configuration OK")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
