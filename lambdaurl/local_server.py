"""Serve a wrapped Lambda function locally (no Lambda needed).

Usage::

    python -m lambdaurl.local_server myapp.main:lambda_handler

Every HTTP request is converted into a Function URL style event and passed
to the target function, and the returned response event is written back.
"""

import asyncio
import importlib
import json
import logging
import sys
import time
import uuid
from typing import Any, Dict, Optional

from aiohttp import web

from lambdaurl.adapters.aws_lambda import LambdaFunction
from lambdaurl.config import load_config
from lambdaurl.exceptions import RequestParseError
from lambdaurl.logging_utils import configure_json_logging

logger = logging.getLogger(__name__)

LAMBDA_FUNCTION_KEY = web.AppKey("lambda_function", object)


class LocalContext:
    """Stand-in for the Lambda context object."""

    def __init__(self, function_name: str = "local") -> None:
        self.aws_request_id = str(uuid.uuid4())
        self.function_name = function_name
        self.memory_limit_in_mb: Optional[int] = None


async def build_event(request: web.Request) -> Dict[str, Any]:
    """Convert an aiohttp request into a Function URL style event.

    Repeated headers keep their last value, matching the platform's
    single-valued header map.
    """
    body = await request.read()
    return {
        "requestContext": {
            "http": {
                "method": request.method,
                "path": request.raw_path.split("?", 1)[0],
            }
        },
        "headers": {key: value for key, value in request.headers.items()},
        "body": body.decode("utf-8", "surrogateescape"),
    }


def _error_response(status: int, message: str) -> web.Response:
    return web.Response(
        text=json.dumps({"error": message}),
        status=status,
        content_type="application/json",
    )


async def handle_request(request: web.Request) -> web.Response:
    """Invoke the configured Lambda function for one HTTP request."""
    start_time = time.perf_counter()
    lambda_function: LambdaFunction = request.app[LAMBDA_FUNCTION_KEY]
    context = LocalContext()

    event = await build_event(request)

    try:
        # Lambda functions block, keep the event loop free
        result = await asyncio.to_thread(lambda_function, event, context)
    except RequestParseError as e:
        logger.warning(
            f"Invalid request path: {e}",
            extra={"request_id": context.aws_request_id},
        )
        return _error_response(400, str(e))
    except Exception as e:
        logger.error(
            f"Invocation failed: {e}",
            extra={"request_id": context.aws_request_id, "error_type": type(e).__name__},
            exc_info=True,
        )
        return _error_response(502, f"Invocation failed: {type(e).__name__}: {e}")

    status = result.get("statusCode") or 200
    logger.info(
        "Local invocation processed",
        extra={
            "request_id": context.aws_request_id,
            "status_code": status,
            "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
        },
    )

    return web.Response(
        body=result.get("body", "").encode("utf-8", "surrogateescape"),
        status=status,
        headers=result.get("headers", {}),
    )


def create_app(lambda_function: LambdaFunction) -> web.Application:
    """Create an aiohttp application routing every request to ``lambda_function``."""
    app = web.Application()
    app[LAMBDA_FUNCTION_KEY] = lambda_function
    app.router.add_route("*", "/{tail:.*}", handle_request)
    return app


def import_target(target: str) -> LambdaFunction:
    """Import ``module:attribute`` and return the attribute.

    Raises:
        ValueError: If ``target`` is not in ``module:attribute`` form
        ImportError: If the module cannot be imported
        AttributeError: If the attribute does not exist
    """
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise ValueError(f"Target must look like 'module:function', got {target!r}")

    module = importlib.import_module(module_name)
    return getattr(module, attribute)


def main(argv: Optional[list] = None) -> None:
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 1:
        print("Usage: python -m lambdaurl.local_server module:function", file=sys.stderr)
        sys.exit(2)

    # Importing the target may run wrap_handler, which configures logging too
    lambda_function = import_target(argv[0])

    config = load_config()
    configure_json_logging(level=config.logging.level, pretty=True)

    host = config.local_server.host
    port = config.local_server.port

    logger.info(
        "Local server running",
        extra={"url": f"http://{host}:{port}/", "target": argv[0]},
    )
    web.run_app(create_app(lambda_function), host=host, port=port, print=None)


if __name__ == "__main__":
    main()
