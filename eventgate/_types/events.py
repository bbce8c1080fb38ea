"""
Event 模型

Event 是流经整条管线的规范化单元，每个请求创建一个，请求结束即丢弃。

不变式：
- result 与 error 互斥：fail() 会丢弃已有 result；error 存在时给 result 赋值会抛出 EventStateError
- process_request 返回后 Event 被冻结，任何属性赋值都会抛出 EventStateError；
  body / options / context / result 中的 dict 与 list 同时变为只读，修改同样抛出 EventStateError
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from .errors import ErrorDef, EventError, resolve_error
from .exceptions import EventStateError
from .models import EntityRelation, ObjectInfo


class _Unset:
    """区分 result 缺失与 result 为 None"""

    _instance: Optional["_Unset"] = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


def _read_only(self: Any, *args: Any, **kwargs: Any) -> Any:
    raise EventStateError(f"{type(self).__name__} is read-only")


class FrozenDict(dict):
    """冻结后的 dict，可序列化、可与普通 dict 比较，但不可修改"""

    __setitem__ = __delitem__ = __ior__ = _read_only
    clear = pop = popitem = setdefault = update = _read_only

    def __reduce__(self) -> Any:
        return (dict, (dict(self),))


class FrozenList(list):
    """冻结后的 list"""

    __setitem__ = __delitem__ = __iadd__ = __imul__ = _read_only
    append = extend = insert = pop = remove = clear = sort = reverse = _read_only

    def __reduce__(self) -> Any:
        return (list, (list(self),))


def deep_freeze(value: Any) -> Any:
    """递归地把 dict / list / set 换成只读版本，其余值原样返回"""
    if isinstance(value, dict):
        return FrozenDict((k, deep_freeze(v)) for k, v in value.items())
    if isinstance(value, list):
        return FrozenList(deep_freeze(v) for v in value)
    if isinstance(value, tuple) and not hasattr(value, "_fields"):
        return tuple(deep_freeze(v) for v in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(value)
    return value


@dataclass(frozen=True, slots=True)
class RawEvent:
    """预处理器输出的原始事件内容"""

    body: Dict[str, Any]
    options: Dict[str, Any] = field(default_factory=dict)
    error_name: Optional[str] = None
    error_details: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class RawAction:
    """预处理器输出的路由信息（重定向之后）"""

    object_name: str
    action_name: str
    action_type: Optional[str] = None
    requested_object: Optional[str] = None
    requested_action: Optional[str] = None

    @property
    def requested(self) -> Tuple[str, str]:
        return (
            self.requested_object or self.object_name,
            self.requested_action or self.action_name,
        )


@dataclass(eq=False)
class Event:
    """规范化事件"""

    object_name: str
    action_name: str
    action_type: Optional[str] = None
    body: Dict[str, Any] = field(default_factory=dict)
    options: Dict[str, Any] = field(default_factory=dict)
    result: Any = UNSET
    error: Optional[EventError] = None
    uid: str = field(default_factory=lambda: uuid.uuid4().hex)
    requested: Optional[Tuple[str, str]] = None
    object_info: Optional[ObjectInfo] = None
    relations: Tuple[EntityRelation, ...] = ()
    context: Dict[str, Any] = field(default_factory=dict)
    errors: Mapping[str, ErrorDef] = field(default_factory=dict, repr=False)
    _frozen: bool = field(default=False, init=False, repr=False)

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_frozen", False):
            raise EventStateError(f"event {self.uid} is frozen, cannot set '{name}'")
        if name == "result" and value is not UNSET and getattr(self, "error", None) is not None:
            raise EventStateError(f"event {self.uid} already carries error '{self.error.name}'")
        object.__setattr__(self, name, value)

    @property
    def has_result(self) -> bool:
        return self.result is not UNSET

    @property
    def frozen(self) -> bool:
        return self._frozen

    def fail(self, name: str, details: Optional[Mapping[str, Any]] = None) -> EventError:
        """按错误目录中的名称设置 error（会丢弃已有 result）"""
        error = resolve_error(name, self.errors, details)
        self.set_error(error)
        return error

    def set_error(self, error: EventError) -> None:
        self.result = UNSET
        self.error = error

    def freeze(self) -> None:
        """冻结 Event：属性不可再赋值，body / options / context / result 变为只读副本"""
        if self._frozen:
            return
        for name in ("body", "options", "context", "result"):
            object.__setattr__(self, name, deep_freeze(getattr(self, name)))
        object.__setattr__(self, "_frozen", True)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "uid": self.uid,
            "object_name": self.object_name,
            "action_name": self.action_name,
            "action_type": self.action_type,
            "body": self.body,
            "options": self.options,
            "result": None if self.result is UNSET else self.result,
            "error": self.error.to_dict() if self.error is not None else None,
        }


__all__ = [
    "UNSET",
    "RawEvent",
    "RawAction",
    "Event",
    "FrozenDict",
    "FrozenList",
    "deep_freeze",
]
