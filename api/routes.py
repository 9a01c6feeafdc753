"""Agile assist endpoints: issue lookup, AI generation and Jira write-back."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from api.deps import get_app_settings, get_generation_client, get_issue_client
from api.errors import BadRequest, upstream_call
from config.settings import Settings
from issue_tracker.client import IssueClient
from llm.generation_client import GenerationClient
from prompts.agile_prompts import build_prompt
from schemas.issue import GeneratedTestCase, Issue, is_issue_key, project_key_of
from schemas.requests import (
    AnalyzeRequest,
    AnalyzeResponse,
    CreateTasksRequest,
    CreateTasksResponse,
    CreateTestCasesRequest,
    SuccessResponse,
    UpdateDescriptionRequest,
)

router = APIRouter()


def format_test_steps(test_case: GeneratedTestCase) -> Optional[str]:
    """Render test steps as numbered "action -> expected" lines, or None when there are none."""
    if not test_case.steps:
        return None
    lines = []
    for number, step in enumerate(test_case.steps, start=1):
        line = f"{number}. {step.action or ''}"
        if step.expected:
            line += f" -> {step.expected}"
        lines.append(line)
    return "\n".join(lines)


# ── Issue lookup ──────────────────────────────────────────────────────────────


@router.get("/issue/")
async def get_issue_without_key():
    raise BadRequest("Missing issue key")


@router.get("/issue/{issue_key}", response_model=Issue)
async def get_issue(
    issue_key: str,
    issues: IssueClient = Depends(get_issue_client),
) -> Issue:
    if not issue_key.strip():
        raise BadRequest("Missing issue key")
    if not is_issue_key(issue_key):
        raise BadRequest("Invalid payload")

    async with upstream_call("Failed to fetch issue", "fetch_issue_failed", issue_key=issue_key):
        return await issues.fetch_issue(issue_key)


# ── AI generation ─────────────────────────────────────────────────────────────


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(
    request: AnalyzeRequest,
    generator: GenerationClient = Depends(get_generation_client),
) -> AnalyzeResponse:
    prompt = build_prompt(request.title, request.description, request.type, request.action)

    async with upstream_call("AI failure", "analyze_failed", action=request.action):
        output = await generator.generate(prompt, prompt_template_name=request.action)
    return AnalyzeResponse(output=output)


# ── Jira write-back ───────────────────────────────────────────────────────────


@router.post("/create-tasks", response_model=CreateTasksResponse)
async def create_tasks(
    request: CreateTasksRequest,
    issues: IssueClient = Depends(get_issue_client),
    settings: Settings = Depends(get_app_settings),
) -> CreateTasksResponse:
    """
    Create one Jira issue per task and link each to the parent issue.

    Runs sequentially and stops at the first failure; issues created before
    the failure are left in place.
    """
    project_key = project_key_of(request.issue_key)
    created: list[str] = []

    async with upstream_call(
        "Task creation failed",
        "create_tasks_failed",
        issue_key=request.issue_key,
        created=created,
    ):
        for task in request.tasks:
            new_key = await issues.create_issue(
                project_key,
                summary=task.title,
                issue_type=settings.jira_task_issue_type,
                description=task.description,
            )
            created.append(new_key)
            await issues.link_issues(new_key, request.issue_key, settings.jira_link_type)

    return CreateTasksResponse(success=True, created=created)


@router.post("/create-testcases", response_model=SuccessResponse)
async def create_testcases(
    request: CreateTestCasesRequest,
    issues: IssueClient = Depends(get_issue_client),
    settings: Settings = Depends(get_app_settings),
) -> SuccessResponse:
    project_key = project_key_of(request.issue_key)
    created: list[str] = []

    async with upstream_call(
        "Test case creation failed",
        "create_testcases_failed",
        issue_key=request.issue_key,
        created=created,
    ):
        for test_case in request.test_cases:
            new_key = await issues.create_issue(
                project_key,
                summary=test_case.title,
                issue_type=settings.jira_test_issue_type,
                description=format_test_steps(test_case),
            )
            created.append(new_key)
            await issues.link_issues(new_key, request.issue_key, settings.jira_link_type)

    return SuccessResponse(success=True)


@router.post("/update-description", response_model=SuccessResponse)
async def update_description(
    request: UpdateDescriptionRequest,
    issues: IssueClient = Depends(get_issue_client),
) -> SuccessResponse:
    async with upstream_call(
        "Description update failed",
        "update_description_failed",
        issue_key=request.issue_key,
    ):
        await issues.update_description(request.issue_key, request.description)
    return SuccessResponse(success=True)

