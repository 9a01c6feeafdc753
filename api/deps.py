from __future__ import annotations

from fastapi import Request

from config.settings import Settings
from issue_tracker.client import IssueClient
from llm.generation_client import GenerationClient


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_issue_client(request: Request) -> IssueClient:
    return request.app.state.issue_client


def get_generation_client(request: Request) -> GenerationClient:
    return request.app.state.generation_client
