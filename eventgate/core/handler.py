"""
Handler Factory

把声明式配置（插件、错误目录、对象元数据、实体关系、allow-list、
重定向、契约、全局 hook）绑定成一个可复用的异步请求处理函数。

Usage:
    from eventgate.core import HandlerConfig, handler_factory

    handler = handler_factory(HandlerConfig(plugins=[create_widget]))
    event = await handler({"name": "x"}, "widget", "create")
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Collection, Mapping, Optional, Sequence, Type

from eventgate._types.errors import ErrorDef
from eventgate._types.events import Event
from eventgate._types.models import EntityRelation, ObjectInfo, Transformation, TransformFn
from eventgate.core.action_processor import PluginsParam, TableActionProcessor
from eventgate.core.contract_provider import DefaultContractProvider
from eventgate.core.contracts import CustomEventPreprocessor, Handler, LoggerLike
from eventgate.core.factory import DefaultEventFactory
from eventgate.core.preprocessor import DefaultEventPreprocessor, RedirectEntry
from eventgate.core.processor import PipelineEventProcessor
from eventgate.logging_config import get_logger


@dataclass(slots=True)
class HandlerConfig:
    """
    handler 的声明式配置，构造期读取一次，之后只读。

    Attributes:
        plugins: 插件列表、PluginList / PluginGroups，或 {插件集合名: [插件]}
        errors: 错误目录 {名称: ErrorDef}
        objects_info: 对象元数据 {对象名: ObjectInfo}
        relations: 实体关系
        event_class: Event 子类
        allowed_actions: {对象名: [动作名]}，None 表示不限制
        allowed_options: 允许的 option 名称，None 表示不限制
        action_redirect: 动作重定向
        custom_event_preprocessor: 异步 body 预处理函数
        contracts: {对象名: Transformation}
        fn_before_every: 全局 before hook
        fn_after_all: 全局 after hook
    """

    plugins: PluginsParam
    errors: Mapping[str, ErrorDef] = field(default_factory=dict)
    objects_info: Mapping[str, ObjectInfo] = field(default_factory=dict)
    relations: Sequence[EntityRelation] = ()
    event_class: Type[Event] = Event
    allowed_actions: Optional[Mapping[str, Collection[str]]] = None
    allowed_options: Optional[Collection[str]] = None
    action_redirect: Sequence[RedirectEntry] = ()
    custom_event_preprocessor: Optional[CustomEventPreprocessor] = None
    contracts: Mapping[str, Transformation] = field(default_factory=dict)
    fn_before_every: Optional[TransformFn] = None
    fn_after_all: Optional[TransformFn] = None


def handler_factory(config: HandlerConfig, *, logger: LoggerLike | None = None) -> Handler:
    """构造请求处理函数

    协作者按固定顺序各构造一次：Action Processor -> Event Factory ->
    Event Preprocessor -> Contract Provider，再组合成 Event Processor。

    Raises:
        ConfigurationError: 配置不合法（插件绑定冲突、重定向成环等）
    """
    logger = logger if logger is not None else get_logger("core.handler")

    action_processor = TableActionProcessor(config.plugins, logger=logger)
    event_factory = DefaultEventFactory(
        config.errors,
        config.objects_info,
        config.relations,
        config.event_class,
    )
    event_preprocessor = DefaultEventPreprocessor(
        config.allowed_actions,
        config.allowed_options,
        config.action_redirect,
        config.custom_event_preprocessor,
        logger=logger,
    )
    contract_provider = DefaultContractProvider(
        config.contracts,
        config.fn_before_every,
        config.fn_after_all,
    )
    event_processor = PipelineEventProcessor(
        contract_provider,
        action_processor,
        event_factory,
        logger=logger,
    )
    logger.info(
        "Handler built: routes={}, redirects={}, contracts={}",
        len(action_processor.routes()),
        len(config.action_redirect),
        len(config.contracts),
    )

    async def handle(
        body: Any,
        object_name: str,
        action_name: str,
        action_type: Optional[str] = None,
    ) -> Event:
        raw_event, raw_action = await event_preprocessor.make_raw_event(
            body, object_name, action_name, action_type
        )
        return await event_processor.process_request(raw_event, raw_action)

    return handle


__all__ = ["HandlerConfig", "handler_factory"]
