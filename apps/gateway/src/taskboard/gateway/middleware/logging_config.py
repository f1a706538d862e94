"""structlog 配置模块

日志格式与级别由 GatewayConfig 提供（TASKBOARD_LOG_FORMAT / TASKBOARD_LOG_LEVEL）。
structlog 与标准库 logging（uvicorn、aiosqlite）共用同一条处理器链，输出到 stderr。
"""

import logging
import sys

import structlog

# 请求日志由 LoggingMiddleware 输出，uvicorn 访问日志重复；aiosqlite 每条语句一条 DEBUG
_QUIET_LOGGERS = ("uvicorn.access", "aiosqlite")


def _renderer(log_format: str) -> list[structlog.types.Processor]:
    if log_format == "json":
        return [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    return [structlog.dev.ConsoleRenderer()]


def setup_logging(log_format: str = "dev", log_level: str = "INFO") -> None:
    """初始化 structlog 配置，可重复调用

    Args:
        log_format: "json" 输出一行一个 JSON 对象；其他值使用 dev 控制台渲染
        log_level: 根 logger 级别，无法识别时使用 INFO
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_renderer(log_format),
            ],
            foreign_pre_chain=shared_processors,
        )
    )

    level = logging.getLevelName(log_level.upper())
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level if isinstance(level, int) else logging.INFO)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, root_logger.level))
