"""事件管线抽象契约（Protocol）。"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Collection, Dict, Optional, Protocol, Tuple

from eventgate._types.events import Event, RawAction, RawEvent


class LoggerLike(Protocol):
    """
    logger 兼容接口。

    兼容 loguru Logger 和标准 logging.Logger。
    """

    def debug(self, __message: str, *args: object, **kwargs: object) -> object: ...

    def info(self, __message: str, *args: object, **kwargs: object) -> object: ...

    def warning(self, __message: str, *args: object, **kwargs: object) -> object: ...

    def error(self, __message: str, *args: object, **kwargs: object) -> object: ...

    def exception(self, __message: str, *args: object, **kwargs: object) -> object: ...


class Plugin(Protocol):
    """处理 (object, action) 的插件。handle 可以是同步或异步函数。"""

    name: str

    @property
    def bindings(self) -> Collection[Tuple[str, str]]: ...

    def handle(self, object_name: str, action_name: str, event: Event) -> Any: ...


class EventPreprocessor(Protocol):
    """重定向、allow-list 校验、自定义 body 规范化。"""

    async def make_raw_event(
        self,
        body: Any,
        object_name: str,
        action_name: str,
        action_type: Optional[str] = None,
    ) -> Tuple[RawEvent, RawAction]: ...


class EventFactory(Protocol):
    """由原始部件构造规范化 Event。"""

    async def create(self, raw_event: RawEvent, raw_action: RawAction) -> Event: ...


class ContractProvider(Protocol):
    """dispatch 前后的契约 hook。"""

    async def before(self, event: Event) -> None: ...

    async def after(self, event: Event) -> None: ...


class ActionProcessor(Protocol):
    """把 Event 派发给绑定的插件，写入 result 或 error。"""

    async def process(self, event: Event) -> None: ...


class EventProcessor(Protocol):
    """单个请求的完整生命周期。"""

    async def process_request(self, raw_event: RawEvent, raw_action: RawAction) -> Event: ...


# 自定义 body 预处理：接收 body，返回新的 body
CustomEventPreprocessor = Callable[[Dict[str, Any]], Awaitable[Dict[str, Any]]]

# handler_factory 产出的请求处理函数
Handler = Callable[..., Awaitable[Event]]
