"""
Tests for the dev server service — liveness probe and browser hand-off.
"""

import sys
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer

import pytest

from lwcpreview.core.services.dev_server import DevServerService


class _NotFoundHandler(BaseHTTPRequestHandler):
    def do_GET(self):
        self.send_response(404)
        self.end_headers()

    def log_message(self, format, *args):
        pass


@pytest.fixture
def http_server():
    server = HTTPServer(("127.0.0.1", 0), _NotFoundHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_address[1]}"
    server.shutdown()
    server.server_close()


class TestIsRunning:
    def test_any_http_answer_counts(self, http_server, channel):
        assert DevServerService(http_server, "sfdx", channel).is_running()

    def test_refused_connection(self, channel):
        server = HTTPServer(("127.0.0.1", 0), _NotFoundHandler)
        port = server.server_address[1]
        server.server_close()
        service = DevServerService(f"http://127.0.0.1:{port}", "sfdx", channel, probe_timeout=0.5)
        assert not service.is_running()

    def test_bad_url(self, channel):
        assert not DevServerService("not a url", "sfdx", channel).is_running()


class TestOpenBrowser:
    def test_uses_injected_opener(self, channel):
        opened = []
        service = DevServerService("http://localhost:3333", "sfdx", channel, open_browser=opened.append)
        service.open_browser("http://localhost:3333/lwc/preview/c/foo")
        assert opened == ["http://localhost:3333/lwc/preview/c/foo"]


class TestStart:
    def test_missing_executable(self, channel):
        service = DevServerService("http://localhost:3333", "lwcpreview-no-such-sfdx", channel)
        execution = service.start()
        outcome = execution.wait(timeout=5)
        assert outcome.exit_code == 127
        assert service.execution is execution
        assert "force:lightning:lwc:start" in execution.command


class _ScriptedServer(DevServerService):
    """Dev server whose start command is a Python one-liner."""

    def __init__(self, channel, code: str):
        self.opened_urls: list[str] = []
        super().__init__("http://localhost:3333", "sfdx", channel, open_browser=self.opened_urls.append)
        self._code = code

    def command(self) -> list[str]:
        return [sys.executable, "-c", self._code]


class TestWaitUntilUp:
    def test_not_started(self, channel):
        assert DevServerService("http://localhost:3333", "sfdx", channel).wait_until_up(0) is False

    def test_up_line_seen(self, channel):
        server = _ScriptedServer(channel, "print('Server up on http://localhost:3333', flush=True)")
        server.start(open_browser_url="http://localhost:3333/lwc/preview/c/foo")
        assert server.wait_until_up(timeout=30) is True
        assert server.opened_urls == ["http://localhost:3333/lwc/preview/c/foo"]

    def test_exit_before_up(self, channel):
        server = _ScriptedServer(channel, "import sys; print('EADDRINUSE'); sys.exit(1)")
        execution = server.start()
        assert server.wait_until_up(timeout=30) is False
        assert execution.wait(timeout=30).exit_code == 1

    def test_missing_executable_settles_immediately(self, channel):
        service = DevServerService("http://localhost:3333", "lwcpreview-no-such-sfdx", channel)
        service.start()
        assert service.wait_until_up(timeout=5) is False
        assert channel.count_containing("isn't installed") == 1

