"""健康检查路由

GET /health: Liveness 检查，永远返回 200。
GET /ready: Readiness 检查，验证 SQLite 连通性并报告 WAL 模式。
"""

import structlog
from fastapi import APIRouter, Request
from starlette.responses import JSONResponse
from taskboard.core.store.sqlite_init import verify_wal_mode

log = structlog.get_logger()

router = APIRouter()


@router.get("/health")
async def health():
    """Liveness 检查 -- 永远返回 200"""
    return {"status": "ok"}


@router.get("/ready")
async def ready(request: Request):
    """Readiness 检查 -- 验证存储可用性"""
    checks = {}
    all_ok = True

    try:
        store_group = request.app.state.store_group
        wal_enabled = await verify_wal_mode(store_group.conn)
        checks["sqlite"] = "ok"
        # 非 WAL 只影响读写并发，不判定为未就绪
        checks["wal_mode"] = "ok" if wal_enabled else "disabled"
    except Exception as e:
        log.warning("readiness_check_failed", check="sqlite", error=str(e))
        checks["sqlite"] = f"error: {str(e)}"
        all_ok = False

    event_hub = getattr(request.app.state, "event_hub", None)
    checks["stream_subscribers"] = event_hub.subscriber_count if event_hub else 0

    return JSONResponse(
        status_code=200 if all_ok else 503,
        content={
            "status": "ready" if all_ok else "not_ready",
            "checks": checks,
        },
    )
