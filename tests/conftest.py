import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from unittest import mock

import pytest


class _StubHandler(BaseHTTPRequestHandler):
    """Answers POST /status/<code> with that status code."""

    def do_POST(self):
        self.server.requests.append(
            (self.command, self.path, self.headers.get("Content-Length"))
        )
        try:
            code = int(self.path.rsplit("/", 1)[-1])
        except ValueError:
            code = 400
        self.send_response(code)
        if 300 <= code < 400:
            self.send_header("Location", "/redirected")
        self.send_header("Content-Length", "0")
        self.end_headers()

    def do_GET(self):
        self.server.requests.append((self.command, self.path, None))
        self.send_response(200)
        self.send_header("Content-Length", "0")
        self.end_headers()

    def log_message(self, format, *args):
        pass


@pytest.fixture
def stub_server():
    server = ThreadingHTTPServer(("127.0.0.1", 0), _StubHandler)
    server.requests = []
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield server
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)


@pytest.fixture
def stub_url(stub_server):
    host, port = stub_server.server_address[:2]

    def _url(code: int) -> str:
        return f"http://{host}:{port}/status/{code}"

    return _url


def make_response(status):
    response = mock.MagicMock()
    response.status = status
    response.__enter__.return_value = response
    return response


@pytest.fixture
def fake_opener():
    def _opener(status=None, side_effect=None):
        opener = mock.Mock()
        if side_effect is not None:
            opener.open.side_effect = side_effect
        else:
            opener.open.return_value = make_response(status)
        return opener

    return _opener
