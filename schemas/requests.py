from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from schemas.issue import ISSUE_KEY_PATTERN, GeneratedTask, GeneratedTestCase


class AnalyzeRequest(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    type: Optional[str] = None
    action: str = Field(..., min_length=1)


class AnalyzeResponse(BaseModel):
    output: str


class CreateTasksRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    issue_key: str = Field(..., pattern=ISSUE_KEY_PATTERN, alias="issueKey")
    tasks: list[GeneratedTask]


class CreateTasksResponse(BaseModel):
    success: bool = True
    created: list[str] = Field(default_factory=list)


class CreateTestCasesRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    issue_key: str = Field(..., pattern=ISSUE_KEY_PATTERN, alias="issueKey")
    test_cases: list[GeneratedTestCase] = Field(..., alias="testCases")


class UpdateDescriptionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    issue_key: str = Field(..., pattern=ISSUE_KEY_PATTERN, alias="issueKey")
    description: str = Field(..., min_length=1)


class SuccessResponse(BaseModel):
    success: bool = True
