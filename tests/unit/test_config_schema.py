"""
test_config_schema.py: loading the declarative routing config from TOML/JSON.
"""
import json

import pytest

from eventgate._types import ActionRedirect, ErrorDef
from eventgate.core import HandlerConfig, handler_factory
from eventgate.server.config_schema import (
    ConfigValidationError,
    load_routing_config,
    validate_routing_config,
)

ROUTING_TOML = """
allowed_options = ["dryRun"]

[allowed_actions]
user = ["create", "read"]

[errors.conflict]
status = 409
message = "already exists"

[[action_redirect]]
from = { object = "user", action = "fetch" }
to = { object = "user", action = "read" }
"""


@pytest.mark.unit
def test_load_toml_routing_config(tmp_path):
    path = tmp_path / "routing.toml"
    path.write_text(ROUTING_TOML, encoding="utf-8")

    schema = load_routing_config(path)
    kwargs = schema.to_handler_kwargs()

    assert kwargs["errors"] == {"conflict": ErrorDef(name="conflict", status=409, message="already exists")}
    assert kwargs["allowed_actions"] == {"user": ["create", "read"]}
    assert kwargs["allowed_options"] == ["dryRun"]
    assert kwargs["action_redirect"] == [ActionRedirect("user", "fetch", "user", "read")]


@pytest.mark.unit
def test_load_json_routing_config(tmp_path):
    path = tmp_path / "routing.json"
    path.write_text(json.dumps({"allowed_actions": {"widget": ["read"]}}), encoding="utf-8")
    schema = load_routing_config(path)
    assert schema.allowed_actions == {"widget": ["read"]}
    assert schema.allowed_options is None


@pytest.mark.unit
async def test_loaded_config_drives_handler(tmp_path, spy_logger, user_plugin, calls):
    path = tmp_path / "routing.toml"
    path.write_text(ROUTING_TOML, encoding="utf-8")
    kwargs = load_routing_config(path).to_handler_kwargs()
    handler = handler_factory(HandlerConfig(plugins=[user_plugin], **kwargs), logger=spy_logger)

    redirected = await handler({}, "user", "fetch")
    assert redirected.result == {"user": "read"}

    rejected = await handler({"options": {"force": True}}, "user", "create")
    assert rejected.error.name == "optionNotAllowed"
    assert calls == [("user", "read")]


@pytest.mark.unit
def test_invalid_status_reports_field():
    with pytest.raises(ConfigValidationError) as info:
        validate_routing_config({"errors": {"conflict": {"status": 42}}})
    assert info.value.field == "errors.conflict.status"
    assert info.value.to_dict()["error"] == "ConfigValidationError"


@pytest.mark.unit
def test_self_redirect_is_rejected():
    with pytest.raises(ConfigValidationError):
        validate_routing_config({
            "action_redirect": [
                {"from": {"object": "a", "action": "x"}, "to": {"object": "a", "action": "x"}},
            ],
        })


@pytest.mark.unit
def test_unknown_section_is_rejected():
    with pytest.raises(ConfigValidationError):
        validate_routing_config({"plugins": ["x"]})


@pytest.mark.unit
def test_blank_action_name_is_rejected():
    with pytest.raises(ConfigValidationError):
        validate_routing_config({"allowed_actions": {"user": [" "]}})


@pytest.mark.unit
def test_unreadable_file_is_config_error(tmp_path):
    path = tmp_path / "broken.toml"
    path.write_text("allowed_options = [", encoding="utf-8")
    with pytest.raises(ConfigValidationError):
        load_routing_config(path)
    with pytest.raises(ConfigValidationError):
        load_routing_config(tmp_path / "missing.toml")
