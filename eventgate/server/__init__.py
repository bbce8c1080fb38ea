"""
eventgate HTTP 传输层
"""

from eventgate.server.responses import (
    HttpResult,
    response,
    response_error,
    response_fatal_error,
    response_not_error,
)
from eventgate.server.http_handler import HttpHandler, http_handler_factory, wrap_handler
from eventgate.server.app import add_handler_to_app, create_app, serve
from eventgate.server.config_schema import (
    ConfigValidationError,
    RoutingConfigSchema,
    load_routing_config,
    validate_routing_config,
)

__all__ = [
    "HttpResult",
    "response",
    "response_error",
    "response_fatal_error",
    "response_not_error",
    "HttpHandler",
    "http_handler_factory",
    "wrap_handler",
    "add_handler_to_app",
    "create_app",
    "serve",
    "ConfigValidationError",
    "RoutingConfigSchema",
    "load_routing_config",
    "validate_routing_config",
]
