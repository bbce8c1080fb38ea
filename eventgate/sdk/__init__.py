"""
eventgate 插件 SDK

Usage:
    from eventgate.sdk import ActionPlugin, action_plugin, EventErrorException
"""

from eventgate._types.exceptions import EventErrorException
from eventgate.sdk.base import ActionPlugin, FunctionPlugin
from eventgate.sdk.decorators import action_plugin

__all__ = [
    "ActionPlugin",
    "FunctionPlugin",
    "action_plugin",
    "EventErrorException",
]
