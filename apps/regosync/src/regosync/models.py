"""regosync data models."""

from typing import Literal

from pydantic import BaseModel, Field

Status = Literal["created", "planned", "invalid", "fetch_failed", "publish_failed"]

FAILED: frozenset[str] = frozenset({"invalid", "fetch_failed", "publish_failed"})


class FileOutcome(BaseModel):
    """What happened to one policy file."""

    path: str
    status: Status
    identifier: str = ""
    message: str = ""

    @property
    def failed(self) -> bool:
        return self.status in FAILED


class SyncResult(BaseModel):
    """Outcome of one sync run."""

    listed: int = 0
    matched: int = 0
    created: int = 0
    errors: list[str] = Field(default_factory=list)
    outcomes: list[FileOutcome] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def record(self, outcome: FileOutcome) -> None:
        """Add a file outcome, counting creations and errors."""
        self.outcomes.append(outcome)
        if outcome.status == "created":
            self.created += 1
        elif outcome.failed:
            self.errors.append(f"{outcome.path}: {outcome.message}")

    def summary(self) -> str:
        return (
            f"Listed {self.listed}, matched {self.matched}, "
            f"created {self.created}, errors {len(self.errors)}"
        )
