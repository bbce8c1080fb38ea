"""
进程级配置

从环境变量读取 HTTP 服务参数。handler 的业务配置（插件、错误目录、
allow-list 等）不在这里，见 eventgate.core.handler.HandlerConfig。
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Tuple

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 48920


def _get_int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_list_env(name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    value = os.getenv(name)
    if value is None:
        return default
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True, slots=True)
class ServerSettings:
    """HTTP 服务参数"""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    cors_origins: Tuple[str, ...] = field(default_factory=lambda: ("*",))
    log_level: str = "INFO"


def load_settings() -> ServerSettings:
    """从环境变量加载 ServerSettings

    EVENTGATE_HOST / EVENTGATE_PORT / EVENTGATE_CORS_ORIGINS（逗号分隔）/ EVENTGATE_LOG_LEVEL
    """
    return ServerSettings(
        host=os.getenv("EVENTGATE_HOST", DEFAULT_HOST),
        port=_get_int_env("EVENTGATE_PORT", DEFAULT_PORT),
        cors_origins=_get_list_env("EVENTGATE_CORS_ORIGINS", ("*",)),
        log_level=os.getenv("EVENTGATE_LOG_LEVEL", "INFO").upper(),
    )


__all__ = ["ServerSettings", "load_settings", "DEFAULT_HOST", "DEFAULT_PORT"]
