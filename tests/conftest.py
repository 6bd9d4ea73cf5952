"""Shared fixtures for lambdaurl tests."""

import json
import logging

import pytest

import lambdaurl.adapters.aws_lambda as aws_lambda
from lambdaurl.config import CONFIG_ENV_VAR, CONFIG_FILE_ENV_VAR, reset_config


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep wrap_handler from reconfiguring the root logger during tests."""
    monkeypatch.setenv(CONFIG_ENV_VAR, json.dumps({"logging": {"configure": False}}))
    monkeypatch.delenv(CONFIG_FILE_ENV_VAR, raising=False)
    monkeypatch.setattr(aws_lambda, "_logging_configured", False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level after a test reconfigures them."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield root_logger
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


class MockLambdaContext:
    """Mock Lambda context object."""

    def __init__(self, request_id="test-request-id-123"):
        self.aws_request_id = request_id
        self.function_name = "test-function"
        self.memory_limit_in_mb = 512


def make_event(method="GET", path="/", headers=None, body=""):
    """Build a Function URL style inbound event."""
    return {
        "requestContext": {"http": {"method": method, "path": path}},
        "headers": headers if headers is not None else {},
        "body": body,
    }
