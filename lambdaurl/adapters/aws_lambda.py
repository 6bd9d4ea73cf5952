"""AWS Lambda Function URL adapter.

Lets a handler written against the generic request/response-sink interface
run as a Lambda function::

    def handler(w, r):
        w.header().set("Content-Type", "text/plain")
        w.set_status(200)
        w.write(b"ok")

    lambda_handler = wrap_handler(handler)
"""

import io
import logging
import time
from typing import Any, Callable, Dict, Optional, Protocol

from lambdaurl.config import load_config
from lambdaurl.events import BODY_ENCODING, BODY_ERRORS, InboundEvent, OutboundEvent
from lambdaurl.exceptions import RequestParseError
from lambdaurl.headers import collapse_to_first, expand_single_valued
from lambdaurl.interfaces import Request, ResponseSink, parse_request_url
from lambdaurl.logging_utils import (
    configure_json_logging,
    format_request_log,
    format_response_log,
)
from lambdaurl.recorder import ResponseRecorder


class LambdaContext(Protocol):
    """Protocol for AWS Lambda context object.

    This defines the subset of the Lambda context the adapter reads for
    logging.
    """

    aws_request_id: str
    function_name: Optional[str]
    memory_limit_in_mb: Optional[int]


Handler = Callable[[ResponseSink, Request], Any]
LambdaFunction = Callable[[Dict[str, Any], Optional[LambdaContext]], Dict[str, Any]]

logger = logging.getLogger(__name__)

# Set once the root logger has been configured for this process
_logging_configured = False


def _configure_logging() -> None:
    global _logging_configured

    if _logging_configured:
        return

    logging_config = load_config().logging
    if logging_config.configure:
        configure_json_logging(level=logging_config.level, pretty=logging_config.pretty)
    _logging_configured = True


def to_request(event: InboundEvent) -> Request:
    """Translate an inbound event into a generic request.

    The body string is wrapped verbatim; no base64 or charset handling is
    applied.

    Args:
        event: Validated inbound event

    Returns:
        New request object

    Raises:
        RequestParseError: If the event path is not a well-formed URL
    """
    url = parse_request_url(event.path)

    return Request(
        method=event.method,
        url=url,
        headers=expand_single_valued(event.headers),
        body=io.BytesIO(event.body.encode(BODY_ENCODING, BODY_ERRORS)),
    )


def to_outbound_event(recorder: ResponseRecorder) -> OutboundEvent:
    """Translate a populated recorder into the outbound event.

    Multi-valued headers are collapsed to their first value.

    Args:
        recorder: Recorder the handler has finished writing to

    Returns:
        Outbound event
    """
    return OutboundEvent(
        status_code=recorder.status_code,
        headers=collapse_to_first(recorder.header()),
        body=recorder.body_bytes().decode(BODY_ENCODING, BODY_ERRORS),
    )


def wrap_handler(handler: Handler) -> LambdaFunction:
    """Wrap a generic handler as a Lambda Function URL handler.

    A request whose path cannot be parsed raises :class:`RequestParseError`
    without calling ``handler``; the Lambda runtime reports it as the
    invocation error. Exceptions raised by ``handler`` propagate unchanged.

    Args:
        handler: Callable taking ``(response_sink, request)``

    Returns:
        Function with the Lambda ``(event, context)`` signature
    """
    _configure_logging()

    def lambda_handler(
        event: Dict[str, Any], context: Optional[LambdaContext] = None
    ) -> Dict[str, Any]:
        start_time = time.perf_counter()
        request_id = getattr(context, "aws_request_id", None) or "unknown"

        inbound = InboundEvent.from_event(event)

        logger.info(
            "Lambda invocation started",
            extra=format_request_log(
                request_id=request_id,
                http_method=inbound.method,
                request_path=inbound.path,
                headers=inbound.headers,
                body_size=len(inbound.body),
                lambda_context=context,
            ),
        )

        try:
            request = to_request(inbound)
        except RequestParseError as e:
            logger.warning(
                f"Rejected request path: {e}",
                extra={"request_id": request_id, "request_path": inbound.path},
            )
            raise

        recorder = ResponseRecorder()
        try:
            handler(recorder, request)
        except Exception as e:
            logger.error(
                f"Handler raised {type(e).__name__}: {e}",
                extra={"request_id": request_id, "error_type": type(e).__name__},
                exc_info=True,
            )
            raise

        outbound = to_outbound_event(recorder)

        logger.info(
            "Lambda invocation completed",
            extra=format_response_log(
                request_id=request_id,
                status_code=outbound.status_code,
                headers=outbound.headers,
                body_size=len(recorder.body_bytes()),
                duration_ms=(time.perf_counter() - start_time) * 1000,
            ),
        )

        return outbound.to_event()

    return lambda_handler
