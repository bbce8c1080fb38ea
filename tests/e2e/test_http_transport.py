"""
test_http_transport.py: full flow through the FastAPI transport.

POST /{object}/{action}[/{action_type}] -> handler -> response mapper ->
JSONResponse, including the structured 500 for pipeline rejections and the
plain-text 500 when writing the response itself fails.
"""
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from eventgate.core import HandlerConfig
from eventgate.sdk import action_plugin
from eventgate.server import add_handler_to_app, create_app
from eventgate.server.http_handler import wrap_handler
from eventgate.settings import ServerSettings


@action_plugin("blob", "dump")
def dump_blob(event):
    return object()


@pytest.fixture
def client(spy_logger, widget_plugin, user_plugin):
    config = HandlerConfig(
        plugins={"catalog": [widget_plugin, dump_blob], "accounts": [user_plugin]},
        allowed_actions={
            "widget": ["read", "list", "flag", "empty", "create"],
            "user": ["create", "read"],
            "blob": ["dump"],
        },
    )
    app, _ = create_app(config, settings=ServerSettings(), logger=spy_logger)
    return TestClient(app)


@pytest.mark.e2e
def test_object_result(client):
    resp = client.post("/widget/read", json={"name": "x"})
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("application/json")
    assert resp.json() == {"id": 1, "action_type": None, "name": "x"}


@pytest.mark.e2e
def test_action_type_route(client):
    resp = client.post("/widget/read/summary", json={})
    assert resp.status_code == 200
    assert resp.json()["action_type"] == "summary"


@pytest.mark.e2e
def test_list_null_and_primitive_results(client):
    assert client.post("/widget/list", json={}).json() == [{"id": 3}, {"id": 1}, {"id": 2}]

    empty = client.post("/widget/empty", json={})
    assert empty.status_code == 200
    assert empty.json() is None

    assert client.post("/widget/flag", json={}).json() is True


@pytest.mark.e2e
def test_empty_body_is_accepted(client):
    resp = client.post("/widget/read")
    assert resp.status_code == 200
    assert resp.json()["id"] == 1


@pytest.mark.e2e
def test_disallowed_action_is_structured_403(client, calls):
    resp = client.post("/user/delete", json={})
    assert resp.status_code == 403
    body = resp.json()
    assert body["error"]["name"] == "actionNotAllowed"
    assert body["error"]["status"] == 403
    assert calls == []


@pytest.mark.e2e
def test_unknown_object_is_404(client):
    resp = client.post("/ghost/read", json={})
    assert resp.status_code == 404
    assert resp.json()["error"]["name"] == "objectNotFound"


@pytest.mark.e2e
def test_missing_plugin_is_fatal_500(client, spy_logger):
    resp = client.post("/widget/create", json={"name": "x"})
    assert resp.status_code == 500
    assert resp.headers["content-type"].startswith("application/json")
    assert resp.json() == {"error": "no plugin registered for object 'widget' action 'create'"}
    spy_logger.error.assert_called_once()


@pytest.mark.e2e
def test_invalid_json_is_400(client):
    resp = client.post(
        "/widget/read",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["name"] == "invalidBody"


@pytest.mark.e2e
def test_unserializable_result_falls_back_to_plain_text(client):
    resp = client.post("/blob/dump", json={})
    assert resp.status_code == 500
    assert resp.headers["content-type"].startswith("text/plain")
    assert resp.text.startswith("Handler failed, ")


@pytest.mark.e2e
def test_get_is_not_routed(client):
    assert client.get("/widget/read").status_code == 405


@pytest.mark.e2e
def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.e2e
async def test_add_handler_returns_inner_handler(spy_logger, widget_plugin):
    app = FastAPI()
    handler = add_handler_to_app(app, HandlerConfig(plugins=[widget_plugin]), logger=spy_logger)

    event = await handler({"name": "direct"}, "widget", "read")
    assert event.result["name"] == "direct"


@pytest.mark.e2e
def test_add_handler_with_prefix(spy_logger, widget_plugin):
    app = FastAPI()
    add_handler_to_app(app, HandlerConfig(plugins=[widget_plugin]), prefix="/api", logger=spy_logger)

    client = TestClient(app)
    assert client.post("/api/widget/read", json={"name": "http"}).json()["name"] == "http"
    assert client.post("/api/widget/read/full", json={}).json()["action_type"] == "full"


@pytest.mark.e2e
async def test_wrapped_handler_never_raises(spy_logger):
    async def exploding(body, object_name, action_name, action_type=None):
        raise RuntimeError("pipeline broke")

    http_handler = wrap_handler(exploding, logger=spy_logger)
    result = await http_handler({}, "widget", "read")
    assert result.status_code == 500
    assert result.body == {"error": "pipeline broke"}
    spy_logger.error.assert_called_once()


@pytest.mark.e2e
async def test_wrapped_handler_names_messageless_exception(spy_logger):
    async def lookup(body, object_name, action_name, action_type=None):
        raise KeyError()

    http_handler = wrap_handler(lookup, logger=spy_logger)
    result = await http_handler({}, "widget", "read")
    assert result.status_code == 500
    assert result.body == {"error": "KeyError"}
