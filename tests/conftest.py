"""Shared pytest configuration and fixtures for eventgate tests."""
import os
import sys
from unittest.mock import MagicMock

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '../')))

from eventgate._types import ErrorDef
from eventgate.sdk import action_plugin


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast in-process tests")
    config.addinivalue_line("markers", "e2e: tests that go through the HTTP transport")


@pytest.fixture
def spy_logger():
    """LoggerLike stand-in that records every call."""
    return MagicMock()


@pytest.fixture
def error_catalog():
    return {
        "conflict": ErrorDef(name="conflict", status=409, message="already exists"),
        "actionNotAllowed": ErrorDef(name="actionNotAllowed", status=403, message="nope"),
    }


@pytest.fixture
def calls():
    """Records (object, action) pairs that reached a plugin."""
    return []


@pytest.fixture
def widget_plugin(calls):
    @action_plugin("widget", "read", "list", "flag", "empty")
    async def widget(object_name, action_name, event):
        calls.append((object_name, action_name))
        if action_name == "list":
            return [{"id": 3}, {"id": 1}, {"id": 2}]
        if action_name == "flag":
            return True
        if action_name == "empty":
            return None
        return {"id": 1, "action_type": event.action_type, **event.body}

    return widget


@pytest.fixture
def user_plugin(calls):
    @action_plugin("user", "create", "delete", "read")
    def user(object_name, action_name, event):
        calls.append((object_name, action_name))
        return {"user": action_name}

    return user
