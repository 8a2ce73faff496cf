"""Harness policy management data models."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

REGO_EXTENSION = ".rego"


def strip_extension(file_name: str, extension: str = REGO_EXTENSION) -> str:
    """Remove a trailing extension from a file name."""
    if file_name.endswith(extension):
        return file_name[: -len(extension)]
    return file_name


def policy_identifier(path: str) -> str:
    """Policy identifier for a repository path: base name without extension."""
    return strip_extension(path.rsplit("/", 1)[-1])


class PolicyPayload(BaseModel):
    """Body of a policy creation request."""

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(min_length=1)
    name: str = Field(min_length=1)
    rego: str

    @model_validator(mode="after")
    def _name_matches_identifier(self) -> "PolicyPayload":
        if self.identifier != self.name:
            raise ValueError("identifier and name must match")
        return self

    @classmethod
    def from_path(cls, path: str, rego: str) -> "PolicyPayload":
        """Build a payload named after the file's base name without its extension."""
        base = policy_identifier(path)
        return cls(identifier=base, name=base, rego=rego)
