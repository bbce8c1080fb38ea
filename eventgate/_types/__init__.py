"""
eventgate 统一类型定义

提供错误、异常、事件与配置模型的统一导出。

Usage:
    from eventgate._types import (
        ResponseStatus, ErrorDef, EventError,
        Event, RawEvent, RawAction, UNSET,
        ActionRedirect, Transformation, PluginList, PluginGroups,
        RoutingError, EventErrorException,
    )
"""

from .errors import (
    ResponseStatus,
    ErrorDef,
    EventError,
    BUILTIN_ERRORS,
    OBJECT_NOT_FOUND,
    ACTION_NOT_ALLOWED,
    OPTION_NOT_ALLOWED,
    INVALID_BODY,
    GENERIC_ERROR,
    resolve_error,
)

from .exceptions import (
    EventGateError,
    ConfigurationError,
    RoutingError,
    EventStateError,
    EventErrorException,
)

from .models import (
    TransformFn,
    ObjectInfo,
    EntityRelation,
    ActionRedirect,
    Transformation,
    PluginList,
    PluginGroups,
    PluginSet,
)

from .events import (
    UNSET,
    RawEvent,
    RawAction,
    Event,
    FrozenDict,
    FrozenList,
)

__all__ = [
    # 错误
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
    # 异常
    "EventGateError",
    "ConfigurationError",
    "RoutingError",
    "EventStateError",
    "EventErrorException",
    # 配置模型
    "TransformFn",
    "ObjectInfo",
    "EntityRelation",
    "ActionRedirect",
    "Transformation",
    "PluginList",
    "PluginGroups",
    "PluginSet",
    # 事件
    "UNSET",
    "RawEvent",
    "RawAction",
    "Event",
    "FrozenDict",
    "FrozenList",
]
