"""异常到 HTTP 响应的映射

ValidationError / 请求体校验失败 -> 400
NotFoundError -> 404
StorageError / 其他未处理异常 -> 500

响应体统一为 {"message": ..., "error": ...}，error 仅在有附加信息时出现。
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse
from taskboard.core.exceptions import (
    NotFoundError,
    StorageError,
    TaskboardError,
    ValidationError,
)

log = structlog.get_logger()


def error_response(status_code: int, message: str, error: str | None = None) -> JSONResponse:
    """构造统一格式的错误响应"""
    content = {"message": message}
    if error:
        content["error"] = error
    return JSONResponse(status_code=status_code, content=content)


async def _handle_taskboard_error(request: Request, exc: TaskboardError) -> JSONResponse:
    if isinstance(exc, ValidationError):
        status_code = 400
    elif isinstance(exc, NotFoundError):
        status_code = 404
    else:
        status_code = 500

    if isinstance(exc, StorageError):
        await log.aerror(
            "storage_error",
            message=exc.message,
            error=exc.detail,
        )
    return error_response(status_code, exc.message, exc.detail)


async def _handle_request_validation(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    fields = sorted(
        {".".join(str(p) for p in err["loc"] if p not in ("body", "query")) for err in exc.errors()}
    )
    return error_response(
        400,
        "Invalid request",
        f"invalid or missing: {', '.join(f for f in fields if f) or 'body'}",
    )


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    await log.aexception("unhandled_error", error_type=type(exc).__name__)
    return error_response(500, "Internal server error", str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    """注册异常处理器"""
    app.add_exception_handler(TaskboardError, _handle_taskboard_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.add_exception_handler(Exception, _handle_unexpected)
