from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

ISSUE_KEY_PATTERN = r"^[A-Za-z][A-Za-z0-9_]*-\d+$"


class Issue(BaseModel):
    key: str = Field(..., description="Jira issue key, e.g. PROJ-123")
    id: str
    type: str = ""
    title: str = ""
    description: str = ""


class Step(BaseModel):
    model_config = ConfigDict(extra="allow")

    action: Optional[str] = None
    expected: Optional[str] = None


class GeneratedTask(BaseModel):
    """A task as produced by the `tasks` prompt. Fields are forwarded to Jira unchecked."""

    model_config = ConfigDict(extra="allow")

    title: Optional[str] = None
    description: Optional[str] = None


class GeneratedTestCase(BaseModel):
    """A test case as produced by the `testcases` prompt."""

    model_config = ConfigDict(extra="allow")

    title: Optional[str] = None
    steps: Optional[list[Step]] = None


def project_key_of(issue_key: str) -> str:
    """Project prefix of an issue key: "PROJ-123" -> "PROJ"."""
    return issue_key.split("-")[0]


def is_issue_key(value: str) -> bool:
    return re.fullmatch(ISSUE_KEY_PATTERN, value) is not None
