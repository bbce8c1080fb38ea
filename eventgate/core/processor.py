"""事件处理器：单个请求的编排，不含业务逻辑。"""

from __future__ import annotations

import time

from eventgate._types.events import Event, RawAction, RawEvent
from eventgate.core.contracts import ActionProcessor, ContractProvider, EventFactory, LoggerLike
from eventgate.logging_config import get_logger


class PipelineEventProcessor:
    """Factory -> Contracts(before) -> Action Processor -> Contracts(after)"""

    def __init__(
        self,
        contract_provider: ContractProvider,
        action_processor: ActionProcessor,
        event_factory: EventFactory,
        logger: LoggerLike | None = None,
    ) -> None:
        self._contracts = contract_provider
        self._actions = action_processor
        self._factory = event_factory
        self._logger = logger if logger is not None else get_logger("core.processor")

    async def process_request(self, raw_event: RawEvent, raw_action: RawAction) -> Event:
        started_at = time.perf_counter()
        event = await self._factory.create(raw_event, raw_action)

        # 预处理阶段已判定失败：不执行 hook，也不派发
        if event.error is not None:
            event.freeze()
            return event

        try:
            await self._contracts.before(event)
            if event.error is None:
                await self._actions.process(event)
            await self._contracts.after(event)
        except Exception as exc:
            # 让传输层日志能关联到请求
            if getattr(exc, "event", None) is None:
                try:
                    exc.event = event  # type: ignore[attr-defined]
                except AttributeError:
                    pass
            raise
        finally:
            event.freeze()

        self._logger.debug(
            "Event processed: uid={}, object={}, action={}, error={}, latency_ms={:.2f}",
            event.uid,
            event.object_name,
            event.action_name,
            event.error.name if event.error is not None else "",
            (time.perf_counter() - started_at) * 1000.0,
        )
        return event


__all__ = ["PipelineEventProcessor"]
