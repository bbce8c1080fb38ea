"""
异常定义

- EventGateError: 所有异常的基类
- ConfigurationError: 构造 handler 时发现的配置错误
- RoutingError: 找不到 (object, action) 对应的插件
- EventStateError: 非法修改 Event（冻结后赋值 / result 与 error 同时存在）
- EventErrorException: 携带错误名称的异常，由 Action Processor 转换为 Event.error
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional


class EventGateError(Exception):
    """eventgate 异常基类"""


class ConfigurationError(EventGateError):
    """handler 配置错误（构造期抛出）"""


class RoutingError(EventGateError):
    """没有插件绑定到请求的 (object, action)"""

    def __init__(self, object_name: str, action_name: str):
        super().__init__(f"no plugin registered for object '{object_name}' action '{action_name}'")
        self.object_name = object_name
        self.action_name = action_name


class EventStateError(EventGateError):
    """Event 状态非法"""


class EventErrorException(EventGateError):
    """携带领域错误名称的异常

    插件或 hook 抛出后，由 Action Processor 按错误目录转换为 Event.error，
    不会以 500 的形式到达传输层。
    """

    def __init__(self, name: str, details: Optional[Mapping[str, Any]] = None, message: str = ""):
        super().__init__(message or name)
        self.name = name
        self.details: Dict[str, Any] = dict(details or {})


__all__ = [
    "EventGateError",
    "ConfigurationError",
    "RoutingError",
    "EventStateError",
    "EventErrorException",
]
