from __future__ import annotations

from typing import Any, Optional
from urllib.parse import quote

import httpx

from app_logging.activity_logger import ActivityLogger
from config.settings import Settings
from issue_tracker.adf import first_text_run, paragraph_document
from schemas.issue import Issue

logger = ActivityLogger("issue_client")


class IssueTrackerError(Exception):
    """A Jira call failed: transport error or non-2xx response."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _issue_path(key: str) -> str:
    """Issue resource path with the key escaped as a single path segment."""
    return f"/issue/{quote(key, safe='')}"


class IssueClient:
    """
    Jira Cloud REST API v3 client.

    Basic credentials are built once from the configured email + API token.
    Every operation is a single HTTP call; failures surface as IssueTrackerError.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = settings.jira_api_url
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            auth=(settings.jira_email, settings.jira_api_token),
            headers={"Accept": "application/json", "Content-Type": "application/json"},
            transport=transport,
        )

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self.client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("jira_request_failed", exc=exc, method=method, path=path)
            raise IssueTrackerError(f"Jira {method} {path} failed: {exc}") from exc

        if response.is_error:
            logger.error(
                "jira_request_rejected",
                method=method,
                path=path,
                status_code=response.status_code,
                response_text=response.text[:2000],
            )
            raise IssueTrackerError(
                f"Jira {method} {path} returned {response.status_code}",
                status_code=response.status_code,
            )
        return response

    # ── Operations ────────────────────────────────────────────────────────────

    async def fetch_issue(self, key: str) -> Issue:
        response = await self._request("GET", _issue_path(key))
        data = response.json()
        fields = data.get("fields") or {}
        issue_type = fields.get("issuetype") or {}

        return Issue(
            key=data.get("key", key),
            id=str(data.get("id", "")),
            type=issue_type.get("name", "") if isinstance(issue_type, dict) else "",
            title=fields.get("summary") or "",
            description=first_text_run(fields.get("description")),
        )

    async def create_issue(
        self,
        project_key: str,
        summary: Optional[str],
        issue_type: str,
        description: Optional[str] = None,
    ) -> str:
        """Create an issue and return its key."""
        fields: dict[str, Any] = {
            "project": {"key": project_key},
            "summary": summary,
            "issuetype": {"name": issue_type},
        }
        if description is not None:
            fields["description"] = paragraph_document(description)

        response = await self._request("POST", "/issue", json={"fields": fields})
        new_key = response.json().get("key")
        if not new_key:
            raise IssueTrackerError("Jira create issue response carried no key")

        logger.info(
            "jira_issue_created",
            issue_key=new_key,
            project_key=project_key,
            issue_type=issue_type,
        )
        return new_key

    async def link_issues(self, from_key: str, to_key: str, relation: str = "Relates") -> None:
        """Link from_key (inward) to to_key (outward)."""
        await self._request(
            "POST",
            "/issueLink",
            json={
                "type": {"name": relation},
                "inwardIssue": {"key": from_key},
                "outwardIssue": {"key": to_key},
            },
        )
        logger.info("jira_issues_linked", from_key=from_key, to_key=to_key, relation=relation)

    async def update_description(self, key: str, description: str) -> None:
        await self._request(
            "PUT",
            _issue_path(key),
            json={"fields": {"description": paragraph_document(description)}},
        )
        logger.info("jira_description_updated", issue_key=key)

    async def close(self) -> None:
        await self.client.aclose()
