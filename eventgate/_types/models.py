"""
配置模型

handler 构造期使用的只读配置对象：对象元数据、实体关系、动作重定向、
契约（Transformation）以及插件集合的两种形态。
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Dict, FrozenSet, Mapping, Optional, Sequence, Tuple, Union

if TYPE_CHECKING:
    from eventgate._types.events import Event
    from eventgate.core.contracts import Plugin


# Hook 函数：接收 Event 原地修改，可以是同步或异步函数
TransformFn = Callable[["Event"], Union[None, Awaitable[None]]]


@dataclass(frozen=True, slots=True)
class ObjectInfo:
    """对象元数据（对核心不透明，原样挂到 Event 上）"""

    name: str
    fields: Tuple[str, ...] = ()
    meta: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class EntityRelation:
    """实体关系（对核心不透明）"""

    source: str
    target: str
    kind: str = "one_to_many"
    meta: Dict[str, Any] = field(default_factory=dict)

    def touches(self, object_name: str) -> bool:
        return object_name in (self.source, self.target)


@dataclass(frozen=True, slots=True)
class ActionRedirect:
    """把 (from_object, from_action) 重定向到 (to_object, to_action)"""

    from_object: str
    from_action: str
    to_object: str
    to_action: str

    @property
    def source(self) -> Tuple[str, str]:
        return (self.from_object, self.from_action)

    @property
    def target(self) -> Tuple[str, str]:
        return (self.to_object, self.to_action)


@dataclass(frozen=True, slots=True)
class Transformation:
    """对象级契约

    Attributes:
        before: dispatch 之前执行
        after: dispatch 之后执行
        actions: 仅对这些 action 生效，None 表示对所有 action 生效
    """

    before: Optional[TransformFn] = None
    after: Optional[TransformFn] = None
    actions: Optional[FrozenSet[str]] = None

    def applies_to(self, action_name: str) -> bool:
        return self.actions is None or action_name in self.actions


@dataclass(frozen=True, slots=True)
class PluginList:
    """扁平插件列表，每个插件自己声明绑定的 (object, action)"""

    plugins: Tuple["Plugin", ...]


@dataclass(frozen=True, slots=True)
class PluginGroups:
    """按插件集合名称分组的插件"""

    groups: Mapping[str, Sequence["Plugin"]]


PluginSet = Union[PluginList, PluginGroups]


__all__ = [
    "TransformFn",
    "ObjectInfo",
    "EntityRelation",
    "ActionRedirect",
    "Transformation",
    "PluginList",
    "PluginGroups",
    "PluginSet",
]
