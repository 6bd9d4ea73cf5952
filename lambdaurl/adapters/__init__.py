"""Cloud provider adapters for lambdaurl.

Each adapter translates a platform-specific event into the generic
:class:`~lambdaurl.interfaces.Request`, runs a handler against it, and translates
the recorded response back into the platform's response shape.
"""

from .aws_lambda import to_outbound_event, to_request, wrap_handler

__all__ = ["to_outbound_event", "to_request", "wrap_handler"]
