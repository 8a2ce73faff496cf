"""Harness policy management client."""

from .client import HarnessClient, PublishError
from .models import REGO_EXTENSION, PolicyPayload, policy_identifier, strip_extension

__all__ = [
    "HarnessClient",
    "PublishError",
    "PolicyPayload",
    "REGO_EXTENSION",
    "policy_identifier",
    "strip_extension",
]
