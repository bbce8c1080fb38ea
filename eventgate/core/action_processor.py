"""动作处理器默认实现：(object, action) -> 插件。"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from eventgate._types.events import UNSET, Event
from eventgate._types.exceptions import ConfigurationError, EventErrorException, RoutingError
from eventgate._types.models import PluginGroups, PluginList, PluginSet
from eventgate.core.contracts import LoggerLike, Plugin
from eventgate.logging_config import get_logger

PluginsParam = Union[PluginSet, Sequence[Plugin], Mapping[str, Sequence[Plugin]]]


@dataclass(slots=True, frozen=True)
class PluginRoute:
    """查找表中的一项"""

    plugin: Plugin
    group: Optional[str] = None


def coerce_plugin_set(plugins: PluginsParam) -> PluginSet:
    """把 list / dict 形式的插件配置统一为 PluginList / PluginGroups"""
    if isinstance(plugins, (PluginList, PluginGroups)):
        return plugins
    if isinstance(plugins, Mapping):
        return PluginGroups(groups=dict(plugins))
    if isinstance(plugins, (list, tuple)):
        return PluginList(plugins=tuple(plugins))
    raise ConfigurationError(f"unsupported plugins configuration: {type(plugins).__name__}")


def _iter_plugins(plugin_set: PluginSet) -> Iterable[Tuple[Optional[str], Plugin]]:
    if isinstance(plugin_set, PluginList):
        for plugin in plugin_set.plugins:
            yield None, plugin
    else:
        for group, members in plugin_set.groups.items():
            for plugin in members:
                yield group, plugin


def build_route_table(plugin_set: PluginSet) -> Dict[Tuple[str, str], PluginRoute]:
    """构造 (object, action) 查找表

    Raises:
        ConfigurationError: 两个插件绑定到同一个 (object, action)
    """
    table: Dict[Tuple[str, str], PluginRoute] = {}
    for group, plugin in _iter_plugins(plugin_set):
        for binding in plugin.bindings:
            key = (binding[0], binding[1])
            existing = table.get(key)
            if existing is not None and existing.plugin is not plugin:
                raise ConfigurationError(
                    f"plugins '{existing.plugin.name}' and '{plugin.name}' are both bound to {key}"
                )
            table[key] = PluginRoute(plugin=plugin, group=group)
    return table


class TableActionProcessor:
    """
    基于查找表的动作处理器。

    - 插件抛出 EventErrorException 时转换为 Event.error
    - 查找不到插件时抛出 RoutingError（由传输层映射为 500）
    """

    def __init__(self, plugins: PluginsParam, logger: LoggerLike | None = None) -> None:
        self._routes = build_route_table(coerce_plugin_set(plugins))
        self._logger = logger if logger is not None else get_logger("core.actions")
        self._logger.debug("Action table built: {} routes", len(self._routes))

    def routes(self) -> List[Tuple[str, str]]:
        return sorted(self._routes)

    def resolve(self, object_name: str, action_name: str) -> PluginRoute:
        route = self._routes.get((object_name, action_name))
        if route is None:
            raise RoutingError(object_name, action_name)
        return route

    async def process(self, event: Event) -> None:
        route = self.resolve(event.object_name, event.action_name)
        self._logger.debug(
            "Dispatching event: uid={}, object={}, action={}, plugin={}, group={}",
            event.uid,
            event.object_name,
            event.action_name,
            route.plugin.name,
            route.group or "",
        )
        try:
            result: Any = route.plugin.handle(event.object_name, event.action_name, event)
            if inspect.isawaitable(result):
                result = await result
        except EventErrorException as exc:
            event.fail(exc.name, exc.details)
            self._logger.info(
                "Plugin reported error: uid={}, plugin={}, error={}",
                event.uid,
                route.plugin.name,
                exc.name,
            )
            return

        if event.error is not None:
            return
        # 插件自己写了 event.result 且返回 None 时保留其写入的值
        if result is None and event.result is not UNSET:
            return
        event.result = result


__all__ = ["TableActionProcessor", "PluginRoute", "build_route_table", "coerce_plugin_set"]
