"""与具体 HTTP 框架无关的 http_handler：Event -> HttpResult。"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Optional, Tuple

from eventgate.core.contracts import Handler, LoggerLike
from eventgate.core.handler import HandlerConfig, handler_factory
from eventgate.logging_config import get_logger
from eventgate.server.responses import HttpResult, response_error, response_fatal_error, response_not_error

HttpHandler = Callable[..., Awaitable[HttpResult]]


def wrap_handler(handler: Handler, *, logger: LoggerLike | None = None) -> HttpHandler:
    """把 Event 处理函数包装为返回 HttpResult 的函数，异常一律映射为 500"""
    logger = logger if logger is not None else get_logger("server.http")

    async def http_handler(
        body: Any,
        object_name: str,
        action_name: str,
        action_type: Optional[str] = None,
    ) -> HttpResult:
        try:
            event = await handler(body, object_name, action_name, action_type)
            if event.error:
                return response_error(event)
            return response_not_error(event)
        except Exception as exc:
            return response_fatal_error(exc, logger)

    return http_handler


def http_handler_factory(
    config: HandlerConfig,
    *,
    logger: LoggerLike | None = None,
) -> Tuple[Handler, HttpHandler]:
    """返回 (handler, http_handler)，两者共用同一条管线"""
    handler = handler_factory(config, logger=logger)
    return handler, wrap_handler(handler, logger=logger)


__all__ = ["HttpHandler", "wrap_handler", "http_handler_factory"]
