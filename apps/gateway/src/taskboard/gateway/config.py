"""GatewayConfig -- HTTP 服务配置加载

从环境变量加载监听地址、CORS 策略与日志配置。
CORS 默认关闭，需显式配置来源列表（"*" 表示允许所有来源）。
"""

import os
from typing import Literal

import structlog
from pydantic import BaseModel, Field

log = structlog.get_logger()


class GatewayConfig(BaseModel):
    """Gateway 配置 -- 从环境变量加载

    环境变量:
        TASKBOARD_HOST: 监听地址（默认 127.0.0.1）
        TASKBOARD_PORT: 监听端口（默认 5000）
        TASKBOARD_CORS_ORIGINS: 允许的来源，逗号分隔（默认空，不启用 CORS）
        TASKBOARD_CORS_ALLOW_CREDENTIALS: 是否允许携带凭据（默认 false）
        TASKBOARD_LOG_FORMAT: 日志格式 dev | json（默认 dev）
        TASKBOARD_LOG_LEVEL: 日志级别（默认 INFO）
    """

    host: str = Field(default="127.0.0.1", description="监听地址")
    port: int = Field(default=5000, ge=1, le=65535, description="监听端口")
    cors_origins: list[str] = Field(
        default_factory=list,
        description="CORS 允许来源，空列表表示不启用 CORS",
    )
    cors_allow_credentials: bool = Field(default=False, description="CORS 是否允许凭据")
    log_format: Literal["dev", "json"] = Field(default="dev", description="日志渲染格式")
    log_level: str = Field(default="INFO", description="根 logger 级别")


def load_gateway_config() -> GatewayConfig:
    """从环境变量加载 Gateway 配置

    非法的端口或日志格式记录警告并使用默认值，不阻塞启动。

    Returns:
        GatewayConfig 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("TASKBOARD_HOST"):
        kwargs["host"] = val

    if val := os.environ.get("TASKBOARD_PORT"):
        try:
            port = int(val)
            if not 1 <= port <= 65535:
                raise ValueError(val)
            kwargs["port"] = port
        except ValueError:
            log.warning(
                "invalid_port_config",
                env_var="TASKBOARD_PORT",
                value=val,
                fallback=5000,
            )

    if val := os.environ.get("TASKBOARD_CORS_ORIGINS"):
        kwargs["cors_origins"] = [o.strip() for o in val.split(",") if o.strip()]

    if val := os.environ.get("TASKBOARD_CORS_ALLOW_CREDENTIALS"):
        kwargs["cors_allow_credentials"] = val.lower() in ("1", "true", "yes")

    if val := os.environ.get("TASKBOARD_LOG_FORMAT"):
        if val in ("dev", "json"):
            kwargs["log_format"] = val
        else:
            log.warning(
                "invalid_log_format_config",
                env_var="TASKBOARD_LOG_FORMAT",
                value=val,
                fallback="dev",
            )

    if val := os.environ.get("TASKBOARD_LOG_LEVEL"):
        kwargs["log_level"] = val.upper()

    return GatewayConfig(**kwargs)
