"""GitHub API client."""

import base64
import binascii
import logging
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from .models import GitHubContent, GitHubFileContent

logger = logging.getLogger(__name__)

_LISTING = TypeAdapter(list[GitHubContent])


class FetchError(Exception):
    """Raised when repository contents cannot be listed or fetched."""

    def __init__(self, message: str, path: str = "", status_code: int | None = None):
        super().__init__(message)
        self.path = path
        self.status_code = status_code


def decode_content(item: GitHubFileContent, path: str = "") -> bytes:
    """
    Decode a contents API payload to raw bytes.

    Base64 payloads are decoded with the standard alphabet; GitHub wraps them
    at 60 columns so line breaks are dropped first. Anything else is returned
    as UTF-8 bytes unchanged.

    Raises:
        FetchError: if the base64 payload is invalid
    """
    if item.encoding == "base64":
        packed = item.content.replace("\n", "").replace("\r", "")
        try:
            return base64.b64decode(packed, validate=True)
        except (binascii.Error, ValueError) as e:
            raise FetchError(f"invalid base64 content: {e}", path=path or item.path or "") from e
    return item.content.encode("utf-8")


class GitHubClient:
    """GitHub REST API client for the repository contents endpoint."""

    BASE_URL = "https://api.github.com"

    def __init__(
        self,
        token: str | None = None,
        base_url: str | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize GitHub client.

        Args:
            token: GitHub personal access token (optional)
            base_url: Custom base URL (defaults to GitHub API)
            timeout: Request timeout in seconds
            transport: Custom httpx transport (used by tests)
        """
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.timeout = timeout
        self.transport = transport
        self.headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "regosync-github-client",
        }

        if token:
            self.headers["Authorization"] = f"token {token}"
            logger.debug("GitHub client initialized with token")
        else:
            logger.warning("GitHub client initialized without token (rate limited)")
        logger.info("GitHub client ready, base_url=%s", self.base_url)

    def repo_url(self, owner: str, repo: str) -> str:
        """Base URL of a repository."""
        return f"{self.base_url}/repos/{owner}/{repo}"

    def _get_json(self, url: str, path: str) -> Any:
        """GET a contents URL and return the decoded JSON body."""
        logger.debug("Request: GET %s", url)
        try:
            with httpx.Client(
                timeout=self.timeout, headers=self.headers, transport=self.transport
            ) as client:
                response = client.get(url)
        except httpx.HTTPError as e:
            raise FetchError(f"request failed: {e}", path=path) from e

        logger.debug("Response: GET %s (status=%d)", url, response.status_code)
        if response.status_code != 200:
            raise FetchError(
                f"failed to fetch data: {response.status_code} {response.reason_phrase}",
                path=path,
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as e:
            raise FetchError(f"malformed JSON response: {e}", path=path) from e

    def get_contents(self, owner: str, repo: str) -> list[GitHubContent]:
        """
        List the entries at the repository root.

        Args:
            owner: Repository owner
            repo: Repository name

        Returns:
            List of GitHubContent items

        Raises:
            FetchError: on transport failure, non-200 status or unexpected body
        """
        url = f"{self.repo_url(owner, repo)}/contents"
        logger.info("Fetching contents: %s/%s", owner, repo)
        data = self._get_json(url, path="")
        try:
            items = _LISTING.validate_python(data)
        except ValidationError as e:
            raise FetchError(f"unexpected listing format: {e}") from e
        logger.debug("Directory listing: %d items", len(items))
        return items

    def list_files(self, owner: str, repo: str) -> list[str]:
        """
        List paths of the files at the repository root.

        Directories are skipped, not recursed into.
        """
        files = [item.path for item in self.get_contents(owner, repo) if item.type == "file"]
        logger.info("Found %d files in %s/%s", len(files), owner, repo)
        return files

    def get_file_content(self, owner: str, repo: str, path: str) -> bytes:
        """
        Get a file's decoded content.

        Args:
            owner: Repository owner
            repo: Repository name
            path: File path in repository

        Returns:
            Raw file bytes

        Raises:
            FetchError: on transport failure, non-200 status, malformed body
                or invalid base64 content
        """
        url = f"{self.repo_url(owner, repo)}/contents/{path}"
        logger.info("Fetching file content: %s/%s path=%s", owner, repo, path)
        data = self._get_json(url, path=path)
        try:
            item = GitHubFileContent.model_validate(data)
        except ValidationError as e:
            raise FetchError(f"unexpected file content format: {e}", path=path) from e

        content = decode_content(item, path)
        logger.debug("File content fetched: %s (%d bytes)", path, len(content))
        return content
