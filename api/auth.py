from __future__ import annotations

from typing import Awaitable, Callable, Iterable, Optional

from fastapi import FastAPI, Request, Response

from api.errors import error_response
from app_logging.activity_logger import ActivityLogger

logger = ActivityLogger("api")


def has_bearer_format(authorization: Optional[str]) -> bool:
    """
    True when the Authorization header is absent or of the form "Bearer ...".

    Format check only: the token itself is never verified.
    """
    return authorization is None or authorization.startswith("Bearer ")


def install_auth_gate(app: FastAPI, prefix: str, exempt: Iterable[str] = ()) -> None:
    """
    Reject requests under `prefix` whose Authorization header has the wrong format.

    Runs as HTTP middleware, ahead of routing and body parsing, so a bad header
    gets 401 whatever the body looks like. Paths in `exempt` are relative to
    `prefix` and skip the check.
    """
    exempt_paths = {prefix + path for path in exempt}

    @app.middleware("http")
    async def check_auth_format(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        path = request.url.path
        if (
            path.startswith(prefix + "/")
            and path not in exempt_paths
            and not has_bearer_format(request.headers.get("authorization"))
        ):
            logger.info("request_rejected", path=path, status_code=401, reason="Invalid auth format")
            return error_response(401, "Invalid auth format")
        return await call_next(request)
