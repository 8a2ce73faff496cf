"""Harness policy management API client."""

import logging

import httpx

from .models import PolicyPayload

logger = logging.getLogger(__name__)


class PublishError(Exception):
    """Raised when a policy cannot be created."""

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class HarnessClient:
    """Client for the Harness policy management endpoint."""

    POLICIES_URL = "https://app.harness.io/gateway/pm/api/v1/policies"

    def __init__(
        self,
        api_key: str,
        account_id: str,
        org_id: str = "",
        project_id: str = "",
        policies_url: str | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize Harness client.

        Args:
            api_key: Harness API key, sent as x-api-key
            account_id: Account identifier (always sent)
            org_id: Organization identifier (sent when non-empty)
            project_id: Project identifier (sent when non-empty)
            policies_url: Custom policy endpoint URL
            timeout: Request timeout in seconds
            transport: Custom httpx transport (used by tests)
        """
        self.policies_url = policies_url or self.POLICIES_URL
        self.account_id = account_id
        self.org_id = org_id
        self.project_id = project_id
        self.timeout = timeout
        self.transport = transport
        self.headers = {
            "Content-Type": "application/json",
            "x-api-key": api_key,
        }
        logger.info("Harness client ready, url=%s, account=%s", self.policies_url, account_id)

    def scope_params(self) -> dict[str, str]:
        """Query parameters scoping a request to account, org and project."""
        params = {"accountIdentifier": self.account_id}
        if self.org_id:
            params["orgIdentifier"] = self.org_id
        if self.project_id:
            params["projectIdentifier"] = self.project_id
        return params

    def create_policy(self, payload: PolicyPayload) -> httpx.Response:
        """
        Create a policy.

        Not idempotent: submitting an existing identifier is rejected or
        duplicated by the service.

        Raises:
            PublishError: on transport failure or a status of 400 or above
        """
        logger.info("Creating policy: %s", payload.identifier)
        logger.debug("Request: POST %s params=%s", self.policies_url, self.scope_params())
        try:
            with httpx.Client(
                timeout=self.timeout, headers=self.headers, transport=self.transport
            ) as client:
                response = client.post(
                    self.policies_url,
                    params=self.scope_params(),
                    content=payload.model_dump_json(),
                )
        except httpx.HTTPError as e:
            raise PublishError(f"request failed: {e}") from e

        logger.debug("Response: POST %s (status=%d)", self.policies_url, response.status_code)
        if response.status_code >= 400:
            raise PublishError(
                f"failed to create policy in Harness: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )
        return response
