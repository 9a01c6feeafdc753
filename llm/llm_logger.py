from __future__ import annotations

import time
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from langchain_core.messages import HumanMessage, SystemMessage
from pydantic import BaseModel, Field

from app_logging.activity_logger import ActivityLogger

_activity = ActivityLogger("llm_logger")


class LLMCallRecord(BaseModel):
    """Pydantic schema for a single LLM invocation log entry."""

    call_id: str = Field(default_factory=lambda: str(uuid.uuid4()))

    # Request
    model_id: str
    prompt_template_name: str
    system_prompt: Optional[str] = None
    human_prompt: str
    prompt_token_count: Optional[int] = None

    # Response
    raw_response: str = ""
    completion_token_count: Optional[int] = None
    total_token_count: Optional[int] = None
    finish_reason: Optional[str] = None

    # Performance
    latency_ms: float = 0.0
    invoked_at: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    # Error
    error_occurred: bool = False
    error_type: Optional[str] = None
    error_message: Optional[str] = None


class LLMLogger:
    """
    Logs every LLM invocation as an activity event and, when a path is set,
    as a JSON line in that file.

    Usage:
        response, record = await llm_logger.ainvoke_and_log(llm, messages, ...)
    """

    def __init__(self, log_path: str = "") -> None:
        self._log_path = Path(log_path) if log_path else None
        if self._log_path:
            self._log_path.parent.mkdir(parents=True, exist_ok=True)

    def log_call(self, record: LLMCallRecord) -> str:
        """Emit the record and return its call_id."""
        if self._log_path:
            with open(self._log_path, "a", encoding="utf-8") as f:
                f.write(record.model_dump_json() + "\n")

        fields = dict(
            call_id=record.call_id,
            model_id=record.model_id,
            prompt_template_name=record.prompt_template_name,
            latency_ms=round(record.latency_ms, 1),
            tokens=record.total_token_count,
        )
        if record.error_occurred:
            _activity.error(
                "llm_call_failed",
                error_type=record.error_type,
                error_message=record.error_message,
                **fields,
            )
        else:
            _activity.info("llm_call_completed", **fields)
        return record.call_id

    async def ainvoke_and_log(
        self,
        llm: Any,
        messages: list,
        model_id: str,
        prompt_template_name: str,
    ) -> tuple[Any, LLMCallRecord]:
        """
        Invoke the LLM, capture all metadata, log the result.
        Returns (response, record). Invocation errors are logged, then re-raised.
        """
        start = time.monotonic()
        response: Any = None
        failure: Optional[Exception] = None
        raw_response = ""
        finish_reason: Optional[str] = None
        prompt_tokens: Optional[int] = None
        completion_tokens: Optional[int] = None
        total_tokens: Optional[int] = None

        try:
            response = await llm.ainvoke(messages)
            raw_response = str(getattr(response, "content", response) or "")

            usage = getattr(response, "usage_metadata", None)
            if usage:
                prompt_tokens = usage.get("input_tokens")
                completion_tokens = usage.get("output_tokens")
                total_tokens = usage.get("total_tokens")

            metadata = getattr(response, "response_metadata", None)
            if metadata:
                finish_reason = metadata.get("finish_reason")
        except Exception as exc:
            failure = exc
        latency_ms = (time.monotonic() - start) * 1000

        human_prompt_text = ""
        system_prompt_text = None
        for m in messages:
            if isinstance(m, HumanMessage):
                human_prompt_text = str(m.content)
            elif isinstance(m, SystemMessage):
                system_prompt_text = str(m.content)

        record = LLMCallRecord(
            model_id=model_id,
            prompt_template_name=prompt_template_name,
            system_prompt=system_prompt_text,
            human_prompt=human_prompt_text,
            raw_response=raw_response,
            prompt_token_count=prompt_tokens,
            completion_token_count=completion_tokens,
            total_token_count=total_tokens,
            finish_reason=finish_reason,
            latency_ms=latency_ms,
            error_occurred=failure is not None,
            error_type=type(failure).__name__ if failure else None,
            error_message=str(failure) if failure else None,
        )
        self.log_call(record)

        if failure is not None:
            raise failure
        return response, record
