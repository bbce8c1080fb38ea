"""
eventgate - 通用事件派发适配器

把 HTTP 请求 (object, action, action_type, body) 转换为规范化 Event，
经可插拔的动作管线处理后映射回 HTTP 响应。

Usage:
    from eventgate import HandlerConfig, create_app
    from eventgate.sdk import action_plugin

    @action_plugin("widget", "create")
    async def create_widget(event):
        return {"id": 1, **event.body}

    app, handler = create_app(HandlerConfig(plugins=[create_widget]))
"""

__version__ = "0.1.0"

from eventgate._types import (
    ActionRedirect,
    ConfigurationError,
    EntityRelation,
    ErrorDef,
    Event,
    EventError,
    EventErrorException,
    ObjectInfo,
    PluginGroups,
    PluginList,
    ResponseStatus,
    RoutingError,
    Transformation,
)
from eventgate.core import HandlerConfig, handler_factory
from eventgate.server import (
    add_handler_to_app,
    create_app,
    http_handler_factory,
    load_routing_config,
    serve,
)

__all__ = [
    "__version__",
    "ActionRedirect",
    "ConfigurationError",
    "EntityRelation",
    "ErrorDef",
    "Event",
    "EventError",
    "EventErrorException",
    "ObjectInfo",
    "PluginGroups",
    "PluginList",
    "ResponseStatus",
    "RoutingError",
    "Transformation",
    "HandlerConfig",
    "handler_factory",
    "add_handler_to_app",
    "create_app",
    "http_handler_factory",
    "load_routing_config",
    "serve",
]
