"""
插件基类模块

提供 Plugin 协议的两种现成实现：
- ActionPlugin: 类形式，子类声明 object_names / action_names 并实现 handle
- FunctionPlugin: 包装普通函数（通常由 @action_plugin 生成）
"""
from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, ClassVar, FrozenSet, Tuple

if TYPE_CHECKING:
    from eventgate._types.events import Event


class ActionPlugin:
    """插件都可以继承这个基类

    Attributes:
        name: 插件名称，默认为类名
        object_names: 绑定的对象名称
        action_names: 绑定的动作名称（与 object_names 做笛卡尔积）

    Example:
        class WidgetPlugin(ActionPlugin):
            object_names = ("widget",)
            action_names = ("create", "update")

            async def handle(self, object_name, action_name, event):
                return {"id": 1, **event.body}
    """

    name: str = ""
    object_names: ClassVar[Tuple[str, ...]] = ()
    action_names: ClassVar[Tuple[str, ...]] = ()

    def __init__(self) -> None:
        if not self.name:
            self.name = type(self).__name__

    @property
    def bindings(self) -> FrozenSet[Tuple[str, str]]:
        return frozenset(
            (object_name, action_name)
            for object_name in self.object_names
            for action_name in self.action_names
        )

    async def handle(self, object_name: str, action_name: str, event: "Event") -> Any:
        raise NotImplementedError(f"{self.name} does not implement handle()")


@dataclass(frozen=True, slots=True)
class FunctionPlugin:
    """函数插件

    fn 的签名可以是 fn(event) 或 fn(object_name, action_name, event)，同步异步均可。
    """

    name: str
    fn: Callable[..., Any]
    bindings: FrozenSet[Tuple[str, str]] = field(default_factory=frozenset)

    def handle(self, object_name: str, action_name: str, event: "Event") -> Any:
        if _positional_arity(self.fn) == 1:
            return self.fn(event)
        return self.fn(object_name, action_name, event)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self.fn(*args, **kwargs)


def _positional_arity(fn: Callable[..., Any]) -> int:
    try:
        params = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        return 3
    return sum(
        1 for p in params
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
        and p.default is p.empty
    )


__all__ = ["ActionPlugin", "FunctionPlugin"]
