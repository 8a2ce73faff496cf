"""GitHub API data models."""

from typing import Literal

from pydantic import BaseModel


class GitHubContent(BaseModel):
    """GitHub content item (file or directory) from a contents listing."""

    path: str
    type: Literal["file", "dir", "symlink", "submodule"]
    name: str | None = None
    sha: str | None = None
    size: int | None = None
    html_url: str | None = None
    download_url: str | None = None


class GitHubFileContent(BaseModel):
    """Single file response from the contents endpoint."""

    content: str
    encoding: str | None = None  # "base64" for regular files
    path: str | None = None
    sha: str | None = None
