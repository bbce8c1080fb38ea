"""
test_contract_provider.py: ordering of global and per-object hooks.
"""
import pytest

from eventgate._types import ConfigurationError, Event, Transformation
from eventgate.core.contract_provider import DefaultContractProvider


def _tracer(label, key):
    def hook(event):
        event.context.setdefault(key, []).append(label)
    return hook


def _async_tracer(label, key):
    async def hook(event):
        event.context.setdefault(key, []).append(label)
    return hook


@pytest.mark.unit
async def test_before_runs_global_then_object():
    provider = DefaultContractProvider(
        {"user": Transformation(before=_tracer("O", "before"))},
        fn_before_every=_async_tracer("G", "before"),
    )
    event = Event(object_name="user", action_name="create")
    await provider.before(event)
    assert event.context["before"] == ["G", "O"]


@pytest.mark.unit
async def test_after_runs_object_then_global():
    provider = DefaultContractProvider(
        {"user": Transformation(after=_async_tracer("O", "after"))},
        fn_after_all=_tracer("G", "after"),
    )
    event = Event(object_name="user", action_name="create")
    await provider.after(event)
    assert event.context["after"] == ["O", "G"]


@pytest.mark.unit
async def test_object_hook_can_override_global_default():
    def default_limit(event):
        event.options["limit"] = 10

    def user_limit(event):
        event.options["limit"] = 50

    provider = DefaultContractProvider(
        {"user": Transformation(before=user_limit)},
        fn_before_every=default_limit,
    )
    event = Event(object_name="user", action_name="list")
    await provider.before(event)
    assert event.options["limit"] == 50


@pytest.mark.unit
async def test_action_filter_limits_contract():
    provider = DefaultContractProvider(
        {"user": Transformation(before=_tracer("O", "before"), actions=frozenset({"create"}))},
    )
    skipped = Event(object_name="user", action_name="read")
    await provider.before(skipped)
    assert "before" not in skipped.context

    applied = Event(object_name="user", action_name="create")
    await provider.before(applied)
    assert applied.context["before"] == ["O"]


@pytest.mark.unit
async def test_other_objects_only_get_global_hooks():
    provider = DefaultContractProvider(
        {"user": Transformation(before=_tracer("O", "before"))},
        fn_before_every=_tracer("G", "before"),
    )
    event = Event(object_name="widget", action_name="read")
    await provider.before(event)
    assert event.context["before"] == ["G"]


@pytest.mark.unit
async def test_no_hooks_is_a_no_op():
    provider = DefaultContractProvider()
    event = Event(object_name="widget", action_name="read")
    await provider.before(event)
    await provider.after(event)
    assert event.context == {}


@pytest.mark.unit
def test_contract_must_be_transformation():
    with pytest.raises(ConfigurationError):
        DefaultContractProvider({"user": {"before": print}})
