"""契约（before / after hook）提供者默认实现。"""

from __future__ import annotations

import inspect
from typing import Mapping, Optional

from eventgate._types.events import Event
from eventgate._types.exceptions import ConfigurationError
from eventgate._types.models import Transformation, TransformFn


async def _apply(fn: Optional[TransformFn], event: Event) -> None:
    if fn is None:
        return
    result = fn(event)
    if inspect.isawaitable(result):
        await result


class DefaultContractProvider:
    """
    执行对象级契约与全局 hook。

    顺序：
    - before: fn_before_every -> 对象 before（对象级定制可以覆盖全局默认值）
    - after: 对象 after -> fn_after_all（全局收尾最后执行）
    """

    def __init__(
        self,
        contracts: Optional[Mapping[str, Transformation]] = None,
        fn_before_every: Optional[TransformFn] = None,
        fn_after_all: Optional[TransformFn] = None,
    ) -> None:
        contracts = dict(contracts or {})
        for object_name, transformation in contracts.items():
            if not isinstance(transformation, Transformation):
                raise ConfigurationError(
                    f"contract for object '{object_name}' must be a Transformation, "
                    f"got {type(transformation).__name__}"
                )
        self._contracts = contracts
        self._before_every = fn_before_every
        self._after_all = fn_after_all

    def contract_for(self, event: Event) -> Optional[Transformation]:
        contract = self._contracts.get(event.object_name)
        if contract is None or not contract.applies_to(event.action_name):
            return None
        return contract

    async def before(self, event: Event) -> None:
        await _apply(self._before_every, event)
        contract = self.contract_for(event)
        if contract is not None:
            await _apply(contract.before, event)

    async def after(self, event: Event) -> None:
        contract = self.contract_for(event)
        if contract is not None:
            await _apply(contract.after, event)
        await _apply(self._after_all, event)


__all__ = ["DefaultContractProvider"]
