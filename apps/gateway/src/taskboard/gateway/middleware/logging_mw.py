"""LoggingMiddleware -- 请求日志与任务追踪

每个 HTTP 请求：
1. 生成 ULID request_id，与 method / path 一起绑定到 structlog contextvars
2. 路径为 /api/tasks/{task_id} 时额外绑定 task_id，同一任务的日志可按 task_id 检索
3. 记录 request_started / request_completed（含 status_code、duration_ms）
4. 在 X-Request-ID 响应头中返回 request_id
"""

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from ulid import ULID

_TASK_PATH_PREFIX = "/api/tasks/"

log = structlog.get_logger()


def task_id_from_path(path: str) -> str | None:
    """从 /api/tasks/{task_id} 路径中取出 task_id，其他路径返回 None"""
    if not path.startswith(_TASK_PATH_PREFIX):
        return None
    return path[len(_TASK_PATH_PREFIX):].split("/", 1)[0] or None


class LoggingMiddleware(BaseHTTPMiddleware):
    """请求级日志中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = str(ULID())
        path = request.url.path

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=path,
        )
        if task_id := task_id_from_path(path):
            structlog.contextvars.bind_contextvars(task_id=task_id)

        await log.ainfo("request_started")
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            await log.aexception(
                "request_failed",
                duration_ms=_elapsed_ms(started),
            )
            raise

        await log.ainfo(
            "request_completed",
            status_code=response.status_code,
            duration_ms=_elapsed_ms(started),
        )

        response.headers["X-Request-ID"] = request_id
        return response


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)
