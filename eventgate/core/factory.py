"""Event 工厂默认实现。"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional, Sequence, Type

from eventgate._types.errors import ErrorDef
from eventgate._types.events import Event, RawAction, RawEvent
from eventgate._types.exceptions import ConfigurationError
from eventgate._types.models import EntityRelation, ObjectInfo


class DefaultEventFactory:
    """
    由 (RawEvent, RawAction) 构造 Event。

    - 挂上对象元数据、与该对象相关的实体关系、错误目录
    - 预处理阶段的校验错误在这里按错误目录解析为 Event.error
    """

    def __init__(
        self,
        errors: Optional[Mapping[str, ErrorDef]] = None,
        objects_info: Optional[Mapping[str, ObjectInfo]] = None,
        relations: Sequence[EntityRelation] = (),
        event_class: Type[Event] = Event,
    ) -> None:
        if not (isinstance(event_class, type) and issubclass(event_class, Event)):
            raise ConfigurationError(f"event_class must be a subclass of Event, got {event_class!r}")
        self._errors = MappingProxyType(dict(errors or {}))
        self._objects_info = dict(objects_info or {})
        self._relations = tuple(relations)
        self._event_class = event_class

    async def create(self, raw_event: RawEvent, raw_action: RawAction) -> Event:
        object_name = raw_action.object_name
        event = self._event_class(
            object_name=object_name,
            action_name=raw_action.action_name,
            action_type=raw_action.action_type,
            body=raw_event.body,
            options=raw_event.options,
            requested=raw_action.requested,
            object_info=self._objects_info.get(object_name),
            relations=tuple(r for r in self._relations if r.touches(object_name)),
            errors=self._errors,
        )
        if raw_event.error_name is not None:
            event.fail(raw_event.error_name, raw_event.error_details)
        return event


__all__ = ["DefaultEventFactory"]
