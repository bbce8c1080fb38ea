"""
统一日志配置模块

基于 loguru，为 eventgate 各组件提供带 component 标识的 logger。

环境变量:
    EVENTGATE_LOG_LEVEL: 全局日志级别 (TRACE/DEBUG/INFO/WARNING/ERROR/CRITICAL)
    EVENTGATE_LOG_LEVEL_<COMPONENT>: 组件日志级别，如 EVENTGATE_LOG_LEVEL_SERVER_HTTP
    EVENTGATE_LOG_CONSOLE: 是否输出到控制台 (true/false)
    EVENTGATE_LOG_FILE: 是否输出到文件 (true/false，默认 false)
    EVENTGATE_LOG_JSON: 是否输出 JSON 格式 (true/false)
    EVENTGATE_LOG_DIR: 日志目录路径

Usage:
    from eventgate.logging_config import get_logger

    logger = get_logger("core.handler")
    logger.info("Handler built for {} objects", 3)
"""
from __future__ import annotations

import os
import re
import sys
import threading
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from loguru import logger as _loguru_logger


class LogLevel(str, Enum):
    """日志级别枚举"""
    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def _get_bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


def _get_log_level() -> LogLevel:
    level_str = os.getenv("EVENTGATE_LOG_LEVEL", "INFO").upper()
    try:
        return LogLevel(level_str)
    except ValueError:
        return LogLevel.INFO


def _get_component_level(component: str) -> Optional[LogLevel]:
    env_name = f"EVENTGATE_LOG_LEVEL_{component.upper().replace('.', '_')}"
    level_str = os.getenv(env_name)
    if level_str:
        try:
            return LogLevel(level_str.upper())
        except ValueError:
            return None
    return None


LOG_LEVEL = _get_log_level()
LOG_DIR = Path(os.getenv("EVENTGATE_LOG_DIR", "log"))
LOG_CONSOLE = _get_bool_env("EVENTGATE_LOG_CONSOLE", True)
LOG_FILE = _get_bool_env("EVENTGATE_LOG_FILE", False)
LOG_JSON = _get_bool_env("EVENTGATE_LOG_JSON", False)
LOG_MAX_SIZE = os.getenv("EVENTGATE_LOG_MAX_SIZE", "10 MB")
LOG_RETENTION = os.getenv("EVENTGATE_LOG_RETENTION", "7 days")

FORMAT_CONSOLE = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[component]: <20}</cyan> | "
    "<level>{message}</level>"
)
FORMAT_FILE = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
    "{extra[component]: <20} | {message}"
)
FORMAT_CONSOLE_SIMPLE = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<level>{message}</level>"
)

# 敏感信息过滤模式
REDACT_PATTERNS = [
    re.compile(r'(password|passwd|pwd)["\']?\s*[:=]\s*["\']?[^"\'\s]+', re.I),
    re.compile(r'(token|api_key|apikey|secret)["\']?\s*[:=]\s*["\']?[^"\'\s]+', re.I),
    re.compile(r'(authorization|auth)["\']?\s*[:=]\s*["\']?[^"\'\s]+', re.I),
]

_default_configured = False
_configured_components: set[str] = set()
_configured_console_roots: set[str] = set()
_setup_lock = threading.Lock()


def redact_sensitive(message: str) -> str:
    """过滤敏感信息"""
    for pattern in REDACT_PATTERNS:
        message = pattern.sub(r'\1=***REDACTED***', message)
    return message


def _redact_patcher(record: dict) -> None:
    record["message"] = redact_sensitive(record["message"])


def configure_default_logger(level: str = "INFO") -> None:
    """配置默认的 loguru logger 格式

    在进程启动时调用一次（serve() 会自动调用）。
    """
    global _default_configured
    if _default_configured:
        return

    with _setup_lock:
        if not _configured_components:
            _loguru_logger.remove()
    _loguru_logger.add(
        sys.stdout,
        format=FORMAT_CONSOLE_SIMPLE,
        level=level,
        colorize=True,
        filter=lambda record: "component" not in record["extra"],
    )
    _default_configured = True


def setup_logging(
    component: str = "main",
    level: Optional[LogLevel] = None,
    force: bool = False,
) -> None:
    """配置组件的日志输出

    Args:
        component: 组件名称
        level: 日志级别，None 使用组件环境变量或全局级别
        force: 是否强制重新配置
    """
    with _setup_lock:
        _setup_logging_impl(component, level, force)


def _setup_logging_impl(
    component: str,
    level: Optional[LogLevel],
    force: bool,
) -> None:
    if component in _configured_components and not force:
        return

    # 参数 > 组件环境变量 > 全局
    if level is None:
        level = _get_component_level(component) or LOG_LEVEL

    # 首次配置时移除 loguru 自带的 stderr handler
    if not _configured_components and not _default_configured:
        _loguru_logger.remove()

    if LOG_CONSOLE:
        root = component.split(".")[0]
        if root not in _configured_console_roots:
            _loguru_logger.add(
                sys.stdout,
                format=FORMAT_CONSOLE,
                level=level.value,
                colorize=True,
                filter=lambda record, r=root: str(record["extra"].get("component", "")).startswith(r),
            )
            _configured_console_roots.add(root)

    if LOG_FILE:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        log_file = LOG_DIR / f"{component.replace('.', '_')}.log"
        _loguru_logger.add(
            str(log_file),
            format=FORMAT_FILE,
            level=level.value,
            rotation=LOG_MAX_SIZE,
            retention=LOG_RETENTION,
            encoding="utf-8",
            filter=lambda record, c=component: record["extra"].get("component", "") == c,
        )

    if LOG_JSON:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        json_file = LOG_DIR / f"{component.replace('.', '_')}.json"
        _loguru_logger.add(
            str(json_file),
            serialize=True,
            level=level.value,
            rotation=LOG_MAX_SIZE,
            retention=LOG_RETENTION,
            filter=lambda record, c=component: record["extra"].get("component", "") == c,
        )

    _configured_components.add(component)


def get_logger(component: str) -> Any:
    """获取带组件标识的 logger

    Args:
        component: 组件名称，如 "core.handler", "server.http"

    Returns:
        绑定了组件名称、并过滤敏感信息的 loguru logger
    """
    if component not in _configured_components:
        setup_logging(component)

    return _loguru_logger.bind(component=component).patch(_redact_patcher)


def intercept_standard_logging() -> None:
    """拦截标准库 logging，重定向到 loguru

    uvicorn / fastapi 使用标准库 logging。
    """
    import logging

    class InterceptHandler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            try:
                level = _loguru_logger.level(record.levelname).name
            except ValueError:
                level = record.levelno

            frame, depth = sys._getframe(6), 6
            while frame and frame.f_code.co_filename == logging.__file__:
                frame = frame.f_back
                depth += 1

            _loguru_logger.opt(depth=depth, exception=record.exc_info).log(
                level, record.getMessage()
            )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for name in ["uvicorn", "uvicorn.error", "uvicorn.access", "fastapi"]:
        logging.getLogger(name).handlers = [InterceptHandler()]


def format_log_text(value: Any, max_len: Optional[int] = None) -> str:
    """格式化日志文本，超长截断

    Args:
        value: 要格式化的值
        max_len: 最大长度，默认从环境变量 EVENTGATE_LOG_CONTENT_MAX 读取
    """
    s = "" if value is None else str(value)

    if max_len is None:
        try:
            max_len = int(os.getenv("EVENTGATE_LOG_CONTENT_MAX", "200"))
        except (ValueError, TypeError):
            max_len = 200
    if max_len <= 0:
        max_len = 200

    if len(s) > max_len:
        return s[:max_len] + "...(truncated)"
    return s


__all__ = [
    "LogLevel",
    "LOG_LEVEL",
    "LOG_DIR",
    "get_logger",
    "setup_logging",
    "configure_default_logger",
    "intercept_standard_logging",
    "format_log_text",
    "redact_sensitive",
    "FORMAT_CONSOLE",
    "FORMAT_FILE",
    "FORMAT_CONSOLE_SIMPLE",
]
