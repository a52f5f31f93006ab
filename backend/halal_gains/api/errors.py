import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from halal_gains.services.exceptions import (
    AuthenticationRequired,
    ChatError,
    Conflict,
    EmptyMessage,
    PermissionDenied,
    RecordNotFound,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: list[tuple[type[ChatError], int]] = [
    (AuthenticationRequired, status.HTTP_401_UNAUTHORIZED),
    (PermissionDenied, status.HTTP_403_FORBIDDEN),
    (RecordNotFound, status.HTTP_404_NOT_FOUND),
    (Conflict, status.HTTP_409_CONFLICT),
    (EmptyMessage, status.HTTP_422_UNPROCESSABLE_ENTITY),
]


def status_for(exc: ChatError) -> int:
    for error_type, code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


async def chat_error_handler(request: Request, exc: ChatError) -> JSONResponse:
    code = status_for(exc)
    logger.debug("%s %s -> %s: %s", request.method, request.url.path, code, exc.detail)
    return JSONResponse(status_code=code, content={"detail": exc.detail})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ChatError, chat_error_handler)
