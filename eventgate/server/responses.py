"""
响应映射

把 Event（result 或 error）以及逃逸出管线的异常映射为统一的 HTTP 响应信封。
除 response_fatal_error 会写一条日志外，均为纯函数。
"""
from __future__ import annotations

import sys
import traceback
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from eventgate._types.errors import ResponseStatus
from eventgate._types.events import UNSET
from eventgate.core.contracts import LoggerLike
from eventgate.logging_config import get_logger

JSON_HEADERS = {"Content-Type": "application/json"}


@dataclass(slots=True)
class HttpResult:
    """HTTP 响应信封"""

    status_code: int
    body: Any = None
    headers: Dict[str, str] = field(default_factory=lambda: dict(JSON_HEADERS))


def _error_body(error: Any) -> Dict[str, Any]:
    to_dict = getattr(error, "to_dict", None)
    return {"error": to_dict() if callable(to_dict) else error}


def _error_status(error: Any, default: int) -> int:
    status = getattr(error, "status", None)
    if status is None and isinstance(error, dict):
        status = error.get("status")
    return int(status) if status else default


def response(status: int = ResponseStatus.OK, body: Any = None) -> HttpResult:
    return HttpResult(status_code=int(status), body=body, headers=dict(JSON_HEADERS))


def response_error(event: Any) -> HttpResult:
    """error.status 优先，否则 500；body 为 {"error": ...}"""
    error = event.error
    return response(_error_status(error, ResponseStatus.ERROR), _error_body(error))


def response_not_error(event: Any) -> HttpResult:
    """成功路径映射

    error 存在时与 response_error 一致；否则 result 原样作为 body
    （列表、None、对象、基本类型都不做转换，缺失的 result 视为 None）。
    """
    error = getattr(event, "error", None)
    if error:
        return response_error(event)

    result = getattr(event, "result", None)
    if result is UNSET:
        result = None
    return response(_error_status(error, ResponseStatus.OK), result)


def _safe_str(value: Any) -> str:
    try:
        return str(value)
    except Exception:
        return f"<unprintable {type(value).__name__}>"


def _exception_message(exc: BaseException) -> str:
    # 无消息的异常（如 KeyError()）退回到类名
    message = _safe_str(exc)
    if message:
        return message
    return type(exc).__name__


def response_fatal_error(exc: BaseException, logger: Optional[LoggerLike] = None) -> HttpResult:
    """兜底：任何逃逸出管线的异常都映射为 500，并记录一条日志

    不会抛出异常。
    """
    message = _exception_message(exc)
    event = getattr(exc, "event", None)
    correlation_id = getattr(event, "uid", None)
    try:
        stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    except Exception:
        stack = ""

    try:
        log = logger if logger is not None else get_logger("server.responses")
        log.error(
            "Fatal pipeline error: context={}, correlation_id={}, message={}\n{}",
            None,
            correlation_id,
            message,
            stack,
        )
    except Exception as log_exc:
        sys.stderr.write(f"eventgate: failed to log fatal error {message!r}: {_safe_str(log_exc)}\n")

    return response(ResponseStatus.ERROR, {"error": message})


__all__ = [
    "HttpResult",
    "JSON_HEADERS",
    "response",
    "response_error",
    "response_not_error",
    "response_fatal_error",
]
