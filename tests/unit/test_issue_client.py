"""
Unit tests for the Jira issue client.

Jira is replaced by httpx.MockTransport — no credentials required.
"""
from __future__ import annotations

import base64
import json

import httpx
import pytest

from issue_tracker.client import IssueClient, IssueTrackerError


def _issue_payload(description):
    return {
        "id": "10001",
        "key": "PROJ-1",
        "fields": {
            "summary": "Add filter",
            "issuetype": {"name": "Story"},
            "description": description,
        },
    }


@pytest.mark.asyncio
async def test_fetch_issue_maps_fields(settings, stub_jira):
    stub_jira.issues["PROJ-1"] = _issue_payload(
        {"type": "doc", "version": 1, "content": [
            {"type": "paragraph", "content": [{"type": "text", "text": "Let users filter by date"}]}
        ]}
    )
    client = IssueClient(settings, transport=stub_jira.transport)

    issue = await client.fetch_issue("PROJ-1")

    assert issue.key == "PROJ-1"
    assert issue.id == "10001"
    assert issue.type == "Story"
    assert issue.title == "Add filter"
    assert issue.description == "Let users filter by date"


@pytest.mark.asyncio
async def test_fetch_issue_without_description(settings, stub_jira):
    stub_jira.issues["PROJ-1"] = _issue_payload(None)
    client = IssueClient(settings, transport=stub_jira.transport)

    issue = await client.fetch_issue("PROJ-1")

    assert issue.description == ""


@pytest.mark.asyncio
async def test_requests_use_basic_auth_and_api_v3(settings, stub_jira):
    stub_jira.issues["PROJ-1"] = _issue_payload(None)
    client = IssueClient(settings, transport=stub_jira.transport)

    await client.fetch_issue("PROJ-1")

    request = stub_jira.requests[0]
    expected = base64.b64encode(b"bot@example.com:jira-token").decode()
    assert request.headers["Authorization"] == f"Basic {expected}"
    assert str(request.url) == "https://example.atlassian.net/rest/api/3/issue/PROJ-1"


@pytest.mark.asyncio
async def test_create_issue_wraps_description_in_adf(settings, stub_jira):
    client = IssueClient(settings, transport=stub_jira.transport)

    key = await client.create_issue("PROJ", "T1", "Task", description="D1")

    assert key == "PROJ-101"
    (body,) = stub_jira.bodies("POST", "/rest/api/3/issue")
    assert body["fields"]["project"] == {"key": "PROJ"}
    assert body["fields"]["summary"] == "T1"
    assert body["fields"]["issuetype"] == {"name": "Task"}
    assert body["fields"]["description"]["content"][0]["content"][0]["text"] == "D1"


@pytest.mark.asyncio
async def test_create_issue_without_description_omits_field(settings, stub_jira):
    client = IssueClient(settings, transport=stub_jira.transport)

    await client.create_issue("PROJ", "Login works", "Test")

    (body,) = stub_jira.bodies("POST", "/rest/api/3/issue")
    assert "description" not in body["fields"]


@pytest.mark.asyncio
async def test_create_issue_without_key_in_response_fails(settings):
    transport = httpx.MockTransport(lambda request: httpx.Response(201, json={"id": "1"}))
    client = IssueClient(settings, transport=transport)

    with pytest.raises(IssueTrackerError):
        await client.create_issue("PROJ", "T1", "Task")


@pytest.mark.asyncio
async def test_link_issues_direction(settings, stub_jira):
    client = IssueClient(settings, transport=stub_jira.transport)

    await client.link_issues("PROJ-101", "PROJ-1")

    (body,) = stub_jira.bodies("POST", "/rest/api/3/issueLink")
    assert body == {
        "type": {"name": "Relates"},
        "inwardIssue": {"key": "PROJ-101"},
        "outwardIssue": {"key": "PROJ-1"},
    }


@pytest.mark.asyncio
async def test_update_description_replaces_field(settings, stub_jira):
    client = IssueClient(settings, transport=stub_jira.transport)

    await client.update_description("PROJ-1", "New text")

    (request,) = stub_jira.calls("PUT", "/rest/api/3/issue/PROJ-1")
    assert json.loads(request.content) == {
        "fields": {
            "description": {
                "type": "doc",
                "version": 1,
                "content": [{"type": "paragraph", "content": [{"type": "text", "text": "New text"}]}],
            }
        }
    }


@pytest.mark.asyncio
async def test_non_2xx_raises_issue_tracker_error(settings, stub_jira):
    client = IssueClient(settings, transport=stub_jira.transport)

    with pytest.raises(IssueTrackerError) as exc_info:
        await client.fetch_issue("NOPE-1")

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_transport_error_raises_issue_tracker_error(settings):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = IssueClient(settings, transport=httpx.MockTransport(refuse))

    with pytest.raises(IssueTrackerError) as exc_info:
        await client.link_issues("PROJ-2", "PROJ-1")

    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_issue_key_is_escaped_as_one_path_segment(settings, stub_jira):
    client = IssueClient(settings, transport=stub_jira.transport)

    with pytest.raises(IssueTrackerError):
        await client.fetch_issue("PROJ-1?expand=changelog")
    await client.update_description("../user/x", "New text")

    fetch, update = stub_jira.requests
    assert fetch.url.raw_path == b"/rest/api/3/issue/PROJ-1%3Fexpand%3Dchangelog"
    assert fetch.url.query == b""
    assert update.url.raw_path == b"/rest/api/3/issue/..%2Fuser%2Fx"
