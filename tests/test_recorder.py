"""Tests for ResponseRecorder."""

from lambdaurl.headers import Header
from lambdaurl.recorder import ResponseRecorder


class TestResponseRecorder:
    """Test ResponseRecorder buffering."""

    def test_initial_state(self):
        """Test that a new recorder is empty with status 0."""
        recorder = ResponseRecorder()

        assert recorder.status_code == 0
        assert len(recorder.header()) == 0
        assert recorder.body_bytes() == b""

    def test_header_returns_same_instance(self):
        """Test that header() always returns the same mapping."""
        recorder = ResponseRecorder()

        first = recorder.header()
        first.set("X-Test", "1")

        assert recorder.header() is first
        assert isinstance(first, Header)
        assert recorder.header().get("X-Test") == "1"

    def test_write_appends_and_returns_length(self):
        """Test that write appends bytes and reports them all accepted."""
        recorder = ResponseRecorder()

        assert recorder.write(b"hello, ") == 7
        assert recorder.write(bytearray(b"world")) == 5
        assert recorder.write(b"") == 0

        assert recorder.body_bytes() == b"hello, world"

    def test_write_does_not_set_status(self):
        """Test that writing a body does not assign a default status."""
        recorder = ResponseRecorder()
        recorder.write(b"body")

        assert recorder.status_code == 0

    def test_set_status_last_write_wins(self):
        """Test that later set_status calls overwrite earlier ones."""
        recorder = ResponseRecorder()
        recorder.set_status(200)
        recorder.set_status(404)

        assert recorder.status_code == 404

    def test_recorders_do_not_share_state(self):
        """Test that each recorder has its own headers and body."""
        first = ResponseRecorder()
        second = ResponseRecorder()
        first.header().set("X-Test", "1")
        first.write(b"data")

        assert "X-Test" not in second.header()
        assert second.body_bytes() == b""
