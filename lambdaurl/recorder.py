"""In-memory implementation of :class:`~lambdaurl.interfaces.ResponseSink`."""

import io

from lambdaurl.headers import Header


class ResponseRecorder:
    """Buffers status code, headers and body written by a handler.

    One recorder is created per invocation and read once after the handler
    returns. ``status_code`` stays ``0`` until the handler sets it; no
    default status is assumed.
    """

    def __init__(self) -> None:
        self.status_code: int = 0
        self.header_map = Header()
        self.body = io.BytesIO()

    def header(self) -> Header:
        return self.header_map

    def write(self, data: bytes) -> int:
        return self.body.write(data)

    def set_status(self, status_code: int) -> None:
        # last call wins
        self.status_code = status_code

    def body_bytes(self) -> bytes:
        return self.body.getvalue()
