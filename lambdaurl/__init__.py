"""Run generic request/response handlers as AWS Lambda Function URL handlers."""

from lambdaurl.adapters.aws_lambda import wrap_handler
from lambdaurl.events import InboundEvent, OutboundEvent
from lambdaurl.exceptions import ConfigurationError, LambdaURLError, RequestParseError
from lambdaurl.headers import Header
from lambdaurl.interfaces import Request, ResponseSink
from lambdaurl.recorder import ResponseRecorder

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "Header",
    "InboundEvent",
    "LambdaURLError",
    "OutboundEvent",
    "Request",
    "RequestParseError",
    "ResponseRecorder",
    "ResponseSink",
    "wrap_handler",
]
