"""Shared fixtures: a scripted local HTTP server, a fake client and a recording logger."""

import json
import socket
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Dict, List, Optional, Tuple

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from linkedin_ads.core.config import AppConfig, HTTPConfig, LinkedInConfig
from linkedin_ads.core.protocols import Response

LINKEDIN_ENV_VARS = (
    "LINKEDIN_ACCESS_TOKEN",
    "LINKEDIN_ACCOUNT_ID",
    "LINKEDIN_BASE_URL",
    "LINKEDIN_API_VERSION",
    "LINKEDIN_HTTP_TIMEOUT",
    "LINKEDIN_HTTP_MAX_RETRIES",
    "LINKEDIN_HTTP_RETRY_DELAY",
    "LINKEDIN_HTTP_MAX_RETRY_DELAY",
    "LINKEDIN_HTTP_USER_AGENT",
    "LINKEDIN_ADS_CONFIG",
    "LOG_LEVEL",
)


class RecordedRequest:
    def __init__(self, method: str, path: str, headers: Dict[str, str], body: bytes):
        self.method = method
        self.path = path
        self.headers = headers
        self.body = body


class ScriptedServer:
    """Local HTTP server answering with a scripted list of responses.

    Once the script runs out, the last response is repeated. Headers may be
    a dict or a list of (name, value) pairs when a name repeats. ``delay``
    holds every answer back by that many seconds.
    """

    def __init__(self):
        self.script: List[Tuple[int, Any, Dict[str, str]]] = [(200, {"elements": []}, {})]
        self.requests: List[RecordedRequest] = []
        self.delay = 0.0
        self._lock = threading.Lock()
        self._httpd = ThreadingHTTPServer(("127.0.0.1", 0), self._handler_class())
        self._thread = threading.Thread(target=self._httpd.serve_forever, daemon=True)

    @property
    def url(self) -> str:
        host, port = self._httpd.server_address[:2]
        return f"http://{host}:{port}"

    def respond_with(self, *responses: Tuple) -> None:
        """Set the script; each entry is (status, body[, headers])."""
        script = []
        for entry in responses:
            status, body = entry[0], entry[1]
            headers = entry[2] if len(entry) > 2 else {}
            script.append((status, body, headers))
        self.script = script

    @property
    def hits(self) -> int:
        return len(self.requests)

    def _next_response(self) -> Tuple[int, Any, Dict[str, str]]:
        with self._lock:
            index = min(len(self.requests) - 1, len(self.script) - 1)
            return self.script[index]

    def _handler_class(self):
        server = self

        class Handler(BaseHTTPRequestHandler):
            def _handle(self):
                length = int(self.headers.get("Content-Length") or 0)
                body = self.rfile.read(length) if length else b""
                with server._lock:
                    server.requests.append(
                        RecordedRequest(
                            self.command, self.path, CaseInsensitiveDict(self.headers.items()), body
                        )
                    )
                status, payload, headers = server._next_response()
                if server.delay:
                    time.sleep(server.delay)

                pairs = list(headers.items() if isinstance(headers, dict) else headers)
                if isinstance(payload, (dict, list)):
                    raw = json.dumps(payload).encode("utf-8")
                    if not any(name.lower() == "content-type" for name, _ in pairs):
                        pairs.insert(0, ("Content-Type", "application/json"))
                elif isinstance(payload, bytes):
                    raw = payload
                else:
                    raw = str(payload or "").encode("utf-8")

                self.send_response(status)
                for key, value in pairs:
                    self.send_header(key, value)
                self.send_header("Content-Length", str(len(raw)))
                self.end_headers()
                self.wfile.write(raw)

            do_GET = _handle
            do_POST = _handle
            do_PUT = _handle
            do_PATCH = _handle
            do_DELETE = _handle

            def log_message(self, format, *args):
                pass

        return Handler

    def start(self) -> "ScriptedServer":
        self._thread.start()
        return self

    def stop(self) -> None:
        self._httpd.shutdown()
        self._httpd.server_close()


@pytest.fixture
def server():
    scripted = ScriptedServer().start()
    yield scripted
    scripted.stop()


@pytest.fixture
def closed_port_url() -> str:
    """URL of a local port nobody listens on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}/adAccounts"


class CountingSession(requests.Session):
    """requests Session counting the attempts it sends."""

    def __init__(self):
        super().__init__()
        self.trust_env = False
        self.calls = 0

    def request(self, *args, **kwargs):
        self.calls += 1
        return super().request(*args, **kwargs)


@pytest.fixture
def session():
    counting = CountingSession()
    yield counting
    counting.close()


def fast_http_config(**overrides) -> HTTPConfig:
    values = dict(timeout=2.0, max_retries=2, retry_delay=0.001, max_retry_delay=0.005)
    values.update(overrides)
    return HTTPConfig(**values)


class FakeHTTPClient:
    """HTTPClient double returning canned responses or raising canned errors."""

    def __init__(self, response: Optional[Response] = None, error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    @classmethod
    def json(cls, payload: Any, status_code: int = 200) -> "FakeHTTPClient":
        body = json.dumps(payload).encode("utf-8")
        return cls(Response(status_code, {"Content-Type": ["application/json"]}, body))

    def get(self, url, headers=None, ctx=None) -> Response:
        self.calls.append({"url": url, "headers": headers, "ctx": ctx})
        if self.error is not None:
            raise self.error
        return self.response


class RecordingLogger:
    """Logger collaborator keeping every call for assertions."""

    def __init__(self):
        self.records: List[Tuple[str, str, Dict[str, str]]] = []

    def info(self, ctx, message, tags):
        self.records.append(("info", message, dict(tags)))

    def warn(self, ctx, message, tags):
        self.records.append(("warn", message, dict(tags)))

    def error(self, ctx, message, tags):
        self.records.append(("error", message, dict(tags)))

    @property
    def errors(self) -> List[Tuple[str, Dict[str, str]]]:
        return [(message, tags) for level, message, tags in self.records if level == "error"]


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every variable the configuration layer reads."""
    for name in LINKEDIN_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(
        linkedin=LinkedInConfig(access_token="test-token", account_id="512345678"),
        http=fast_http_config(),
    )
