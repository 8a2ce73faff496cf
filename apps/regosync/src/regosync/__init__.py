"""Sync Rego policies from GitHub into Harness."""

from .config import ConfigError, SyncConfig
from .models import FileOutcome, SyncResult
from .sync import PolicySync

__all__ = [
    "PolicySync",
    "SyncConfig",
    "SyncResult",
    "FileOutcome",
    "ConfigError",
]
