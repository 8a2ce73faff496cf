"""GitHub API client utilities."""

from .client import FetchError, GitHubClient, decode_content
from .models import GitHubContent, GitHubFileContent

__all__ = ["GitHubClient", "GitHubContent", "GitHubFileContent", "FetchError", "decode_content"]
