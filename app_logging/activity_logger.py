from __future__ import annotations

from typing import Any, Optional

import structlog


class ActivityLogger:
    """
    Structured activity logger bound to one component.

    Events are snake_case names with keyword fields, rendered by the structlog
    pipeline set up in config.logging_config:
    {
        "timestamp": "2025-01-01T00:00:00Z",
        "level":     "info",
        "event":     "jira_issue_created",
        "component": "issue_client",
        "issue_key": "PROJ-123",   (optional)
        ...extra_fields
    }
    """

    def __init__(self, component: str) -> None:
        self.component = component
        self._logger = structlog.get_logger(component=component)

    # ── Public interface ──────────────────────────────────────────────────────

    def info(self, event: str, **kwargs: Any) -> None:
        self._logger.info(event, **kwargs)

    def warning(self, event: str, **kwargs: Any) -> None:
        self._logger.warning(event, **kwargs)

    def error(
        self,
        event: str,
        exc: Optional[BaseException] = None,
        **kwargs: Any,
    ) -> None:
        if exc:
            kwargs.setdefault("error_type", type(exc).__name__)
            kwargs.setdefault("error_message", str(exc))
        self._logger.error(event, **kwargs)

    def debug(self, event: str, **kwargs: Any) -> None:
        self._logger.debug(event, **kwargs)
