"""Policy sync pipeline: GitHub repository -> Harness policies."""

import logging

from pydantic import ValidationError

from gh import FetchError, GitHubClient
from harness import REGO_EXTENSION, HarnessClient, PolicyPayload, PublishError, policy_identifier

from .config import SyncConfig
from .models import FileOutcome, SyncResult

logger = logging.getLogger(__name__)


class PolicySync:
    """Creates a Harness policy for every .rego file at a repository root."""

    def __init__(
        self,
        config: SyncConfig,
        github: GitHubClient | None = None,
        harness: HarnessClient | None = None,
    ):
        """
        Initialize the pipeline.

        Config is validated before any client is built, so a missing value
        never results in a network call.

        Raises:
            ConfigError: if a required value is empty
        """
        self.config = config.validate_required()
        self.github = github or GitHubClient(
            token=config.github_token,
            base_url=config.github_api_url,
        )
        self.harness = harness or HarnessClient(
            api_key=config.api_key,
            account_id=config.account_id,
            org_id=config.org_id,
            project_id=config.project_id,
            policies_url=config.policy_url,
        )

    @staticmethod
    def is_policy_file(path: str) -> bool:
        return path.endswith(REGO_EXTENSION)

    def list_policy_files(self, result: SyncResult) -> list[str]:
        """List root files and keep the .rego ones. FetchError propagates."""
        files = self.github.list_files(self.config.github_user, self.config.github_repo)
        result.listed = len(files)
        matched = [path for path in files if self.is_policy_file(path)]
        result.matched = len(matched)
        logger.info("%d of %d files are policies", len(matched), len(files))
        return matched

    def build_payload(self, path: str, identifier: str) -> PolicyPayload:
        """Fetch a file and turn it into a policy payload."""
        content = self.github.get_file_content(
            self.config.github_user, self.config.github_repo, path
        )
        rego = content.decode("utf-8", errors="replace")
        return PolicyPayload(identifier=identifier, name=identifier, rego=rego)

    def sync_file(self, path: str, dry_run: bool = False) -> FileOutcome:
        """Fetch and publish one policy file. Never raises for per-file failures."""
        identifier = policy_identifier(path)
        if not identifier:
            logger.error("Skipping %s: empty policy identifier", path)
            return FileOutcome(path=path, status="invalid", message="empty policy identifier")

        try:
            payload = self.build_payload(path, identifier)
        except FetchError as e:
            logger.error("Failed to fetch %s: %s", path, e)
            return FileOutcome(path=path, status="fetch_failed", identifier=identifier, message=str(e))
        except ValidationError as e:
            logger.error("Invalid policy %s: %s", path, e)
            return FileOutcome(path=path, status="invalid", identifier=identifier, message=str(e))

        if dry_run:
            logger.info("Dry run, not creating %s", identifier)
            return FileOutcome(path=path, status="planned", identifier=identifier)

        try:
            self.harness.create_policy(payload)
        except PublishError as e:
            logger.error("Failed to publish %s: %s", path, e)
            return FileOutcome(path=path, status="publish_failed", identifier=identifier, message=str(e))
        return FileOutcome(path=path, status="created", identifier=identifier)

    def run(self, dry_run: bool = False) -> SyncResult:
        """
        Run the sync once.

        A listing failure aborts the run by raising FetchError. Every other
        failure is recorded against its file and the run moves on.
        """
        result = SyncResult()
        for path in self.list_policy_files(result):
            result.record(self.sync_file(path, dry_run=dry_run))
        logger.info(result.summary())
        return result
