"""服务入口 -- python -m taskboard.gateway

按 TASKBOARD_HOST / TASKBOARD_PORT 启动 uvicorn。
"""

import uvicorn

from .config import load_gateway_config


def main() -> None:
    config = load_gateway_config()
    uvicorn.run(
        "taskboard.gateway.main:app",
        host=config.host,
        port=config.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
