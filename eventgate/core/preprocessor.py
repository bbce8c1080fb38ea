"""事件预处理器默认实现：重定向 + allow-list + 自定义 body 规范化。"""

from __future__ import annotations

from typing import Any, Collection, Dict, Iterable, Mapping, Optional, Tuple, Union

from eventgate._types.errors import ACTION_NOT_ALLOWED, INVALID_BODY, OBJECT_NOT_FOUND, OPTION_NOT_ALLOWED
from eventgate._types.events import RawAction, RawEvent
from eventgate._types.exceptions import ConfigurationError
from eventgate._types.models import ActionRedirect
from eventgate.core.contracts import CustomEventPreprocessor, LoggerLike
from eventgate.logging_config import format_log_text, get_logger

# body 中承载 options 的字段
OPTIONS_KEY = "options"

RedirectEntry = Union[ActionRedirect, Mapping[str, Mapping[str, str]]]


def _coerce_redirect(item: RedirectEntry) -> ActionRedirect:
    if isinstance(item, ActionRedirect):
        return item
    try:
        source = item["from"]
        target = item["to"]
        return ActionRedirect(
            from_object=source["object"],
            from_action=source["action"],
            to_object=target["object"],
            to_action=target["action"],
        )
    except (KeyError, TypeError) as exc:
        raise ConfigurationError(f"invalid action redirect entry: {item!r}") from exc


def build_redirect_table(redirects: Iterable[RedirectEntry]) -> Dict[Tuple[str, str], Tuple[str, str]]:
    """构造重定向表，链式重定向在构造期展开

    Raises:
        ConfigurationError: 同一来源有多个目标，或重定向成环
    """
    direct: Dict[Tuple[str, str], Tuple[str, str]] = {}
    for item in redirects:
        redirect = _coerce_redirect(item)
        existing = direct.get(redirect.source)
        if existing is not None and existing != redirect.target:
            raise ConfigurationError(
                f"conflicting redirects for {redirect.source}: {existing} and {redirect.target}"
            )
        direct[redirect.source] = redirect.target

    resolved: Dict[Tuple[str, str], Tuple[str, str]] = {}
    for source in direct:
        seen = {source}
        target = direct[source]
        while target in direct:
            if target in seen:
                raise ConfigurationError(f"action redirect cycle detected starting at {source}")
            seen.add(target)
            target = direct[target]
        resolved[source] = target
    return resolved


def _normalize_options(raw: Any) -> Optional[Dict[str, Any]]:
    """options 可以是对象，也可以是 flag 名称列表；其他类型返回 None"""
    if raw is None:
        return {}
    if isinstance(raw, Mapping):
        return dict(raw)
    if isinstance(raw, (list, tuple)) and all(isinstance(name, str) for name in raw):
        return {name: True for name in raw}
    return None


class DefaultEventPreprocessor:
    """
    默认事件预处理器。

    处理顺序：
    1. 按重定向表替换 (object, action)
    2. 拆出 body["options"]
    3. 校验对象、动作、选项的 allow-list（作用于重定向后的目标）
    4. 调用自定义 body 预处理函数

    校验失败不会抛出，而是写入 RawEvent.error_name，由 Event Factory 转为 Event.error。
    """

    def __init__(
        self,
        allowed_actions: Optional[Mapping[str, Collection[str]]] = None,
        allowed_options: Optional[Collection[str]] = None,
        action_redirect: Iterable[RedirectEntry] = (),
        custom_event_preprocessor: Optional[CustomEventPreprocessor] = None,
        logger: LoggerLike | None = None,
    ) -> None:
        self._allowed_actions: Optional[Dict[str, frozenset[str]]] = None
        if allowed_actions is not None:
            self._allowed_actions = {obj: frozenset(actions) for obj, actions in allowed_actions.items()}
        self._allowed_options = frozenset(allowed_options) if allowed_options is not None else None
        self._redirects = build_redirect_table(action_redirect)
        self._custom = custom_event_preprocessor
        self._logger = logger if logger is not None else get_logger("core.preprocessor")

    def resolve_redirect(self, object_name: str, action_name: str) -> Tuple[str, str]:
        return self._redirects.get((object_name, action_name), (object_name, action_name))

    async def make_raw_event(
        self,
        body: Any,
        object_name: str,
        action_name: str,
        action_type: Optional[str] = None,
    ) -> Tuple[RawEvent, RawAction]:
        target_object, target_action = self.resolve_redirect(object_name, action_name)
        if (target_object, target_action) != (object_name, action_name):
            self._logger.debug(
                "Redirecting action: {}/{} -> {}/{}",
                object_name,
                action_name,
                target_object,
                target_action,
            )
        raw_action = RawAction(
            object_name=target_object,
            action_name=target_action,
            action_type=action_type,
            requested_object=object_name,
            requested_action=action_name,
        )

        if body is None:
            body = {}
        if not isinstance(body, Mapping):
            return self._reject(
                {}, {}, INVALID_BODY, {"actual_type": type(body).__name__}
            ), raw_action

        payload = dict(body)
        options = _normalize_options(payload.pop(OPTIONS_KEY, None))
        if options is None:
            return self._reject(
                payload, {}, INVALID_BODY, {"field": OPTIONS_KEY}
            ), raw_action

        if self._allowed_actions is not None:
            actions = self._allowed_actions.get(target_object)
            if actions is None:
                return self._reject(
                    payload, options, OBJECT_NOT_FOUND, {"object": target_object}
                ), raw_action
            if target_action not in actions:
                return self._reject(
                    payload,
                    options,
                    ACTION_NOT_ALLOWED,
                    {"object": target_object, "action": target_action},
                ), raw_action

        if self._allowed_options is not None:
            rejected = sorted(name for name in options if name not in self._allowed_options)
            if rejected:
                return self._reject(
                    payload, options, OPTION_NOT_ALLOWED, {"options": rejected}
                ), raw_action

        if self._custom is not None:
            payload = await self._custom(payload)
            if not isinstance(payload, dict):
                raise TypeError(
                    f"custom event preprocessor must return dict, got {type(payload).__name__}"
                )

        return RawEvent(body=payload, options=options), raw_action

    def _reject(
        self,
        body: Dict[str, Any],
        options: Dict[str, Any],
        error_name: str,
        details: Dict[str, Any],
    ) -> RawEvent:
        self._logger.info(
            "Request rejected before dispatch: error={}, details={}, body={}",
            error_name,
            details,
            format_log_text(body),
        )
        return RawEvent(body=body, options=options, error_name=error_name, error_details=details)


__all__ = ["DefaultEventPreprocessor", "build_redirect_table", "OPTIONS_KEY"]
