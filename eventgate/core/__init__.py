"""
eventgate 核心管线

预处理 -> 构造 Event -> 契约 before -> 派发插件 -> 契约 after。
"""

from eventgate.core.contracts import (
    ActionProcessor,
    ContractProvider,
    CustomEventPreprocessor,
    EventFactory,
    EventPreprocessor,
    EventProcessor,
    Handler,
    LoggerLike,
    Plugin,
)
from eventgate.core.preprocessor import DefaultEventPreprocessor, build_redirect_table
from eventgate.core.factory import DefaultEventFactory
from eventgate.core.contract_provider import DefaultContractProvider
from eventgate.core.action_processor import TableActionProcessor, build_route_table, coerce_plugin_set
from eventgate.core.processor import PipelineEventProcessor
from eventgate.core.handler import HandlerConfig, handler_factory

__all__ = [
    # 契约
    "ActionProcessor",
    "ContractProvider",
    "CustomEventPreprocessor",
    "EventFactory",
    "EventPreprocessor",
    "EventProcessor",
    "Handler",
    "LoggerLike",
    "Plugin",
    # 默认实现
    "DefaultEventPreprocessor",
    "DefaultEventFactory",
    "DefaultContractProvider",
    "TableActionProcessor",
    "PipelineEventProcessor",
    "build_redirect_table",
    "build_route_table",
    "coerce_plugin_set",
    # Handler Factory
    "HandlerConfig",
    "handler_factory",
]
