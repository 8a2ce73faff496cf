"""Sync configuration loaded from environment variables."""

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from gh import GitHubClient
from harness import HarnessClient

logger = logging.getLogger(__name__)

REQUIRED = ("account_id", "api_key", "github_token", "github_user", "github_repo")


class ConfigError(ValueError):
    """Raised when required configuration values are missing."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(
            "One or more required environment variables are missing: " + ", ".join(missing)
        )


class SyncConfig(BaseSettings):
    """Process-wide settings, read-only after startup.

    Values come from the environment unless passed explicitly; empty
    variables count as unset.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        populate_by_name=True,
        env_ignore_empty=True,
        extra="ignore",
    )

    account_id: str = Field("", validation_alias="HARNESSACCOUNTID")
    api_key: str = Field("", validation_alias="HARNESSAPIKEY")
    org_id: str = Field("", validation_alias="HARNESSORG")
    project_id: str = Field("", validation_alias="HARNESSPROJECT")
    github_token: str = Field("", validation_alias="GITHUBTOKEN")
    github_user: str = Field("", validation_alias="GITHUBUSER")
    github_repo: str = Field("", validation_alias="GITHUBREPO")
    policy_url: str = Field(HarnessClient.POLICIES_URL, validation_alias="HARNESSPOLICYURL")
    github_api_url: str = Field(GitHubClient.BASE_URL, validation_alias="GITHUBAPIURL")

    @classmethod
    def env_var(cls, field: str) -> str:
        """Environment variable name backing a field."""
        return cls.model_fields[field].validation_alias

    def missing(self) -> list[str]:
        """Environment variable names of required values that are empty."""
        return [self.env_var(field) for field in REQUIRED if not getattr(self, field)]

    def validate_required(self) -> "SyncConfig":
        """Raise ConfigError unless every required value is set."""
        missing = self.missing()
        if missing:
            logger.error("Missing configuration: %s", ", ".join(missing))
            raise ConfigError(missing)
        return self
