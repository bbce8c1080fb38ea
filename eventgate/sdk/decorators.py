"""
插件装饰器模块
"""
from __future__ import annotations

from typing import Any, Callable, Iterable, Tuple

from eventgate.sdk.base import FunctionPlugin


def action_plugin(
    object_name: str,
    *actions: str,
    name: str | None = None,
    also: Iterable[Tuple[str, str]] = (),
) -> Callable[[Callable[..., Any]], FunctionPlugin]:
    """
    把函数声明为处理 (object_name, action) 的插件。

    Args:
        object_name: 对象名称
        actions: 一个或多个动作名称
        name: 插件名称，默认为函数名
        also: 额外绑定的 (object, action)

    Example:
        @action_plugin("widget", "create")
        async def create_widget(event):
            return {"id": 1, **event.body}
    """
    if not actions:
        raise ValueError("action_plugin requires at least one action name")

    def decorator(fn: Callable[..., Any]) -> FunctionPlugin:
        bindings = {(object_name, action) for action in actions}
        bindings.update((obj, action) for obj, action in also)
        return FunctionPlugin(
            name=name or getattr(fn, "__name__", "plugin"),
            fn=fn,
            bindings=frozenset(bindings),
        )

    return decorator


__all__ = ["action_plugin"]
