"""Tests for the local development server."""

import sys
import types

import pytest
from aiohttp import test_utils
from yarl import URL

from lambdaurl.adapters.aws_lambda import wrap_handler
from lambdaurl.local_server import LocalContext, create_app, import_target


def echo_handler(w, r):
    w.header().set("Content-Type", "text/plain")
    w.header().set("X-Method", r.method)
    w.header().set("X-Seen-Header", r.headers.get("X-Test") or "")
    w.set_status(200)
    w.write(r.path.encode("utf-8") + b"|" + r.body.read())


class TestLocalServer:
    """Test requests routed through the aiohttp application."""

    @pytest.mark.asyncio
    async def test_routes_request_to_lambda_function(self):
        """Test that any path and method reach the wrapped handler."""
        app = create_app(wrap_handler(echo_handler))

        async with test_utils.TestClient(test_utils.TestServer(app)) as client:
            response = await client.post(
                "/items/42?ignored=1", data=b"payload", headers={"X-Test": "1"}
            )
            text = await response.text()

        assert response.status == 200
        assert text == "/items/42|payload"
        assert response.headers["Content-Type"].startswith("text/plain")
        assert response.headers["X-Method"] == "POST"
        assert response.headers["X-Seen-Header"] == "1"

    @pytest.mark.asyncio
    async def test_parse_error_returns_400(self):
        """Test that a malformed path becomes a 400 without calling the handler."""
        called = []
        app = create_app(wrap_handler(lambda w, r: called.append(r)))

        async with test_utils.TestClient(test_utils.TestServer(app)) as client:
            response = await client.request("GET", URL("/items/%zz", encoded=True))
            payload = await response.json()

        assert response.status == 400
        assert "escape" in payload["error"]
        assert called == []

    @pytest.mark.asyncio
    async def test_binary_body_passes_through_unchanged(self):
        """Test that non UTF-8 request bytes reach the handler intact."""

        def binary_echo(w, r):
            w.set_status(200)
            w.write(r.body.read())

        payload = b"\xff\xfe\x00binary\x80"
        app = create_app(wrap_handler(binary_echo))

        async with test_utils.TestClient(test_utils.TestServer(app)) as client:
            response = await client.post("/upload", data=payload)
            body = await response.read()

        assert response.status == 200
        assert body == payload

    @pytest.mark.asyncio
    async def test_handler_exception_returns_502(self):
        """Test that an invocation error becomes a 502 response."""

        def failing_handler(w, r):
            raise RuntimeError("boom")

        app = create_app(wrap_handler(failing_handler))

        async with test_utils.TestClient(test_utils.TestServer(app)) as client:
            response = await client.get("/")
            payload = await response.json()

        assert response.status == 502
        assert "RuntimeError: boom" in payload["error"]

    @pytest.mark.asyncio
    async def test_unset_status_served_as_200(self):
        """Test that a zero status code is served as 200 locally."""
        app = create_app(wrap_handler(lambda w, r: w.write(b"no status")))

        async with test_utils.TestClient(test_utils.TestServer(app)) as client:
            response = await client.get("/")
            text = await response.text()

        assert response.status == 200
        assert text == "no status"


class TestLocalContext:
    """Test LocalContext."""

    def test_request_ids_are_unique(self):
        """Test that each context gets its own request ID."""
        assert LocalContext().aws_request_id != LocalContext().aws_request_id

    def test_function_name(self):
        """Test the default function name."""
        context = LocalContext()

        assert context.function_name == "local"
        assert context.memory_limit_in_mb is None


class TestImportTarget:
    """Test import_target function."""

    def test_imports_attribute(self, monkeypatch):
        """Test importing module:attribute."""
        module = types.ModuleType("lambdaurl_test_target")
        module.lambda_handler = object()
        monkeypatch.setitem(sys.modules, "lambdaurl_test_target", module)

        assert import_target("lambdaurl_test_target:lambda_handler") is module.lambda_handler

    @pytest.mark.parametrize("target", ["no_colon", ":attr", "module:"])
    def test_rejects_malformed_target(self, target):
        """Test that targets not in module:attribute form are rejected."""
        with pytest.raises(ValueError, match="module:function"):
            import_target(target)

    def test_missing_attribute(self, monkeypatch):
        """Test that a missing attribute raises AttributeError."""
        monkeypatch.setitem(sys.modules, "lambdaurl_empty_target", types.ModuleType("lambdaurl_empty_target"))

        with pytest.raises(AttributeError):
            import_target("lambdaurl_empty_target:missing")
