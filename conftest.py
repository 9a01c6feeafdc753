"""Root conftest.py — shared settings and stub Jira transport for all tests."""
from __future__ import annotations

import json

import httpx
import pytest

from config.settings import Settings


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    """Clear the lru_cache on get_settings so monkeypatch.setenv takes effect."""
    from config.settings import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        azure_openai_endpoint="https://example-openai.test/openai/deployments/gpt-4o",
        azure_openai_api_key="test-key",
        azure_openai_deployment_name="gpt-4o",
        jira_base_url="https://example.atlassian.net",
        jira_email="bot@example.com",
        jira_api_token="jira-token",
    )


class StubJira:
    """
    In-memory stand-in for the Jira REST API, served through httpx.MockTransport.

    Records every request; `fail_on` maps "<METHOD> <path>" to the 1-based call
    number that should get a 500 response.
    """

    def __init__(self, issues: dict | None = None) -> None:
        self.issues = issues or {}
        self.requests: list[httpx.Request] = []
        self.fail_on: dict[str, int] = {}
        self._counts: dict[str, int] = {}
        self._next_id = 100

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def bodies(self, method: str, path: str) -> list[dict]:
        return [json.loads(r.content) for r in self.calls(method, path)]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/rest/api/3")
        route = f"{request.method} {'/issue/{key}' if path.startswith('/issue/') else path}"

        self._counts[route] = self._counts.get(route, 0) + 1
        if self.fail_on.get(route) == self._counts[route]:
            return httpx.Response(500, json={"errorMessages": ["boom"]})

        if route == "GET /issue/{key}":
            key = path.rsplit("/", 1)[-1]
            if key not in self.issues:
                return httpx.Response(404, json={"errorMessages": ["Issue does not exist"]})
            return httpx.Response(200, json=self.issues[key])
        if route == "POST /issue":
            fields = json.loads(request.content)["fields"]
            self._next_id += 1
            key = f"{fields['project']['key']}-{self._next_id}"
            return httpx.Response(201, json={"id": str(self._next_id), "key": key, "self": ""})
        if route == "POST /issueLink":
            return httpx.Response(201)
        if route == "PUT /issue/{key}":
            return httpx.Response(204)
        return httpx.Response(404)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def stub_jira() -> StubJira:
    return StubJira()
