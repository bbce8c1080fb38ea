"""
test_event.py: Event invariants: error catalog lookup, result/error
exclusivity and freezing.
"""
import copy
import json

import pytest

from eventgate._types import (
    BUILTIN_ERRORS,
    UNSET,
    ErrorDef,
    Event,
    EventStateError,
    resolve_error,
)


@pytest.mark.unit
def test_fail_uses_caller_catalog(error_catalog):
    event = Event(object_name="user", action_name="create", errors=error_catalog)
    error = event.fail("conflict", {"id": 5})
    assert event.error is error
    assert error.status == 409
    assert error.message == "already exists"
    assert error.details == {"id": 5}


@pytest.mark.unit
def test_caller_catalog_overrides_builtin(error_catalog):
    error = resolve_error("actionNotAllowed", error_catalog)
    assert error.message == "nope"
    assert resolve_error("actionNotAllowed", {}).message == BUILTIN_ERRORS["actionNotAllowed"].message


@pytest.mark.unit
def test_unknown_error_name_maps_to_500():
    error = resolve_error("mystery", {})
    assert error.name == "mystery"
    assert error.status == 500


@pytest.mark.unit
def test_fail_discards_result():
    event = Event(object_name="user", action_name="create", result={"id": 1})
    event.fail("conflict")
    assert event.result is UNSET
    assert not event.has_result


@pytest.mark.unit
def test_result_cannot_be_set_after_error():
    event = Event(object_name="user", action_name="create")
    event.fail("conflict")
    with pytest.raises(EventStateError):
        event.result = {"id": 1}


@pytest.mark.unit
def test_frozen_event_rejects_mutation():
    event = Event(object_name="user", action_name="create")
    event.result = [1, 2]
    event.freeze()
    assert event.frozen
    with pytest.raises(EventStateError):
        event.result = [3]
    with pytest.raises(EventStateError):
        event.fail("conflict")
    assert event.result == [1, 2]


@pytest.mark.unit
def test_uid_is_unique_per_event():
    first = Event(object_name="a", action_name="b")
    second = Event(object_name="a", action_name="b")
    assert first.uid != second.uid


@pytest.mark.unit
def test_to_dict_reports_missing_result_as_none():
    event = Event(object_name="a", action_name="b", errors={"x": ErrorDef("x", 418)})
    assert event.to_dict()["result"] is None
    event.fail("x")
    assert event.to_dict()["error"]["status"] == 418


@pytest.mark.unit
def test_freeze_makes_nested_containers_read_only():
    event = Event(object_name="a", action_name="b", body={"items": [{"id": 1}]})
    event.result = [{"id": 1}]
    event.freeze()

    with pytest.raises(EventStateError):
        event.body["items"][0]["id"] = 2
    with pytest.raises(EventStateError):
        event.result += [{"id": 2}]
    with pytest.raises(EventStateError):
        event.result[0].setdefault("name", "x")
    assert event.body == {"items": [{"id": 1}]}
    assert event.to_dict()["result"] == [{"id": 1}]


@pytest.mark.unit
def test_frozen_containers_stay_json_serializable():
    event = Event(object_name="a", action_name="b", result={"tags": ["x"], "n": None})
    event.freeze()
    assert json.loads(json.dumps(event.result)) == {"tags": ["x"], "n": None}
    assert copy.deepcopy(event.result) == {"tags": ["x"], "n": None}
