"""Pytest configuration and fixtures."""

import base64
import json
from collections.abc import Callable

import httpx
import pytest

from gh import GitHubClient
from harness import HarnessClient
from regosync import SyncConfig

API = "https://api.github.test"
POLICIES = "https://harness.test/pm/api/v1/policies"
REPO = f"{API}/repos/octo/policies"


def encode(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


class FakeService:
    """Records requests and answers them from a route table."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}

    def add(self, method: str, url: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[(method, url)] = handler

    def json(self, method: str, url: str, body: object, status: int = 200) -> None:
        self.add(method, url, lambda request: httpx.Response(status, json=body))

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = f"{request.url.scheme}://{request.url.host}{request.url.path}"
        handler = self.routes.get((request.method, url))
        if handler is None:
            return httpx.Response(404, json={"message": "Not Found"})
        return handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def posts(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests if r.method == "POST"]


@pytest.fixture
def service() -> FakeService:
    return FakeService()


@pytest.fixture
def config() -> SyncConfig:
    return SyncConfig(
        account_id="acct",
        api_key="pat.secret",
        github_token="ghp_token",
        github_user="octo",
        github_repo="policies",
        policy_url=POLICIES,
        github_api_url=API,
    )


@pytest.fixture
def github(service: FakeService) -> GitHubClient:
    return GitHubClient(token="ghp_token", base_url=API, transport=service.transport)


@pytest.fixture
def harness(service: FakeService) -> HarnessClient:
    return HarnessClient(
        api_key="pat.secret",
        account_id="acct",
        policies_url=POLICIES,
        transport=service.transport,
    )


CONFIG_VARS = (
    "HARNESSACCOUNTID",
    "HARNESSAPIKEY",
    "HARNESSORG",
    "HARNESSPROJECT",
    "GITHUBTOKEN",
    "GITHUBUSER",
    "GITHUBREPO",
    "HARNESSPOLICYURL",
    "GITHUBAPIURL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    """Keep the caller's environment out of SyncConfig."""
    for var in CONFIG_VARS:
        monkeypatch.delenv(var, raising=False)
