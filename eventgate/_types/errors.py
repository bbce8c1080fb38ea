"""
统一错误定义

提供 HTTP 状态码分类（ResponseStatus）、错误目录条目（ErrorDef）
以及挂在 Event 上的结构化错误（EventError）。

Usage:
    from eventgate._types import ResponseStatus, ErrorDef, EventError

    errors = {
        "conflict": ErrorDef(name="conflict", status=409, message="already exists"),
    }
    event.fail("conflict", details={"id": 1})
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Mapping, Optional


class ResponseStatus(IntEnum):
    """固定的响应状态码分类

    错误对象可以携带自己的 status，覆盖对应分支的默认值。
    """
    OK = 200
    NO_ACCESS = 403
    NOT_FOUND = 404
    ERROR = 500


@dataclass(frozen=True, slots=True)
class ErrorDef:
    """错误目录条目（由调用方提供）"""

    name: str
    status: int = ResponseStatus.ERROR
    message: str = ""


@dataclass(frozen=True, slots=True)
class EventError:
    """挂在 Event 上的结构化错误"""

    name: str
    status: int = ResponseStatus.ERROR
    message: str = ""
    details: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_def(cls, error_def: ErrorDef, details: Optional[Mapping[str, Any]] = None) -> "EventError":
        return cls(
            name=error_def.name,
            status=int(error_def.status),
            message=error_def.message,
            details=dict(details or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        """转换为 JSON 响应体中的形式"""
        return {
            "name": self.name,
            "status": self.status,
            "message": self.message,
            "details": dict(self.details),
        }


# 内置错误名称（调用方的错误目录可以覆盖同名条目）
OBJECT_NOT_FOUND = "objectNotFound"
ACTION_NOT_ALLOWED = "actionNotAllowed"
OPTION_NOT_ALLOWED = "optionNotAllowed"
INVALID_BODY = "invalidBody"
GENERIC_ERROR = "error"

BUILTIN_ERRORS: Dict[str, ErrorDef] = {
    OBJECT_NOT_FOUND: ErrorDef(OBJECT_NOT_FOUND, ResponseStatus.NOT_FOUND, "object is not known"),
    ACTION_NOT_ALLOWED: ErrorDef(ACTION_NOT_ALLOWED, ResponseStatus.NO_ACCESS, "action is not allowed for object"),
    OPTION_NOT_ALLOWED: ErrorDef(OPTION_NOT_ALLOWED, ResponseStatus.NO_ACCESS, "option is not allowed"),
    INVALID_BODY: ErrorDef(INVALID_BODY, 400, "request body must be a JSON object"),
    GENERIC_ERROR: ErrorDef(GENERIC_ERROR, ResponseStatus.ERROR, "unexpected error"),
}


def resolve_error(
    name: str,
    catalog: Mapping[str, ErrorDef],
    details: Optional[Mapping[str, Any]] = None,
) -> EventError:
    """按名称在错误目录中查找并构造 EventError

    查找顺序：调用方目录 > 内置目录。未知名称按 500 处理，保留原名称。
    """
    error_def = catalog.get(name) or BUILTIN_ERRORS.get(name)
    if error_def is None:
        error_def = ErrorDef(name=name, status=ResponseStatus.ERROR, message=name)
    return EventError.from_def(error_def, details)


__all__ = [
    "ResponseStatus",
    "ErrorDef",
    "EventError",
    "BUILTIN_ERRORS",
    "OBJECT_NOT_FOUND",
    "ACTION_NOT_ALLOWED",
    "OPTION_NOT_ALLOWED",
    "INVALID_BODY",
    "GENERIC_ERROR",
    "resolve_error",
]
