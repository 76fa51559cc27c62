"""
Shared fixtures: a mock iDRAC Redfish server backed by JSON response files.
"""

import base64
import json
import ssl
import threading
import time
from collections.abc import Mapping
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from types import MappingProxyType
from urllib.parse import urlsplit

import pytest
import structlog

from idrac_redfish import Client

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "responses"
TLS_DIR = Path(__file__).parent / "fixtures" / "tls"

USERNAME = "admin"
PASSWORD = "secret"

OVERSIZED_BODY_LENGTH = 1_500_000
SLOW_BODY_CHUNKS = 20
SLOW_CHUNK_INTERVAL_SECONDS = 0.1

DEFAULT_ENDPOINTS = {
    "/redfish/v1": "root_1.json",
    "/redfish/v1/": "root_1.json",
    "/redfish/v1/Systems/": "computer_system_collection_1.json",
    "/redfish/v1/Systems/System.Embedded.1/": "computer_system_1.json",
    "/redfish/v1/Systems/System.Embedded.2/": "computer_system_2.json",
}


def read_fixture(name: str) -> bytes:
    return (FIXTURES_DIR / name).read_bytes()


class RedfishRequestHandler(BaseHTTPRequestHandler):
    mock: "MockRedfishServer"

    def do_GET(self):  # noqa: N802
        path = urlsplit(self.path).path
        self.mock.requests.append(path)

        if not self._authorized():
            self._send(401, read_fixture("access_denied_error_1.json"))
            return

        if path.endswith("/empty_response"):
            # drop the connection without a status line
            self.close_connection = True
            return

        if path.endswith("/replay_request"):
            body = {
                "method": self.command,
                "path": self.path,
                "headers": {k.lower(): v for k, v in self.headers.items()},
            }
            self._send(200, json.dumps(body).encode())
            return

        if path.endswith("/oversized_response"):
            self._send(200, b"x" * OVERSIZED_BODY_LENGTH)
            return

        if path.endswith("/slow_response"):
            self._drip(200, SLOW_BODY_CHUNKS)
            return

        name = self.mock.path_map.get(path)
        if name is None:
            self._send(404, read_fixture("not_found_error_1.json"))
            return
        self._send(200, read_fixture(name))

    def do_POST(self):  # noqa: N802
        self._send(400, b"Bad Request, expecting GET")

    def _authorized(self) -> bool:
        header = self.headers.get("Authorization", "")
        if not header.startswith("Basic "):
            return False
        try:
            decoded = base64.b64decode(header[len("Basic "):]).decode()
        except (ValueError, UnicodeDecodeError):
            return False
        return decoded == f"{USERNAME}:{PASSWORD}"

    def _send(self, status: int, body: bytes) -> None:
        self.send_response(status)
        self.send_header("Content-Type", "application/json;charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def _drip(self, status: int, chunks: int) -> None:
        self.send_response(status)
        self.send_header("Content-Type", "application/json;charset=utf-8")
        self.send_header("Content-Length", str(chunks))
        self.end_headers()
        for _ in range(chunks):
            self.wfile.write(b"x")
            time.sleep(SLOW_CHUNK_INTERVAL_SECONDS)

    def log_message(self, format, *args):  # noqa: A002
        return


class QuietHTTPServer(ThreadingHTTPServer):
    daemon_threads = True

    def handle_error(self, request, client_address):
        # clients that stop reading early reset the connection
        return


class MockRedfishServer:
    """HTTP server answering GETs from a fixed path -> fixture file mapping.

    Paths are matched exactly; anything unmapped gets the not-found fixture.
    Requests without admin:secret Basic credentials get the access-denied
    fixture. With ``tls=True`` the server speaks HTTPS using a self-signed
    certificate from fixtures/tls.
    """

    def __init__(self, path_map: Mapping[str, str], tls: bool = False) -> None:
        self.path_map = MappingProxyType(dict(path_map))
        self.requests: list[str] = []
        self.protocol = "https" if tls else "http"
        handler = type("Handler", (RedfishRequestHandler,), {"mock": self})
        self.httpd = QuietHTTPServer(("127.0.0.1", 0), handler)
        if tls:
            # self-signed, so clients that verify certificates reject it
            context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
            context.load_cert_chain(TLS_DIR / "server.crt", TLS_DIR / "server.key")
            self.httpd.socket = context.wrap_socket(self.httpd.socket, server_side=True)
        self.thread = threading.Thread(target=self.httpd.serve_forever, daemon=True)

    @property
    def host(self) -> str:
        return self.httpd.server_address[0]

    @property
    def port(self) -> int:
        return self.httpd.server_address[1]

    def start(self) -> "MockRedfishServer":
        self.thread.start()
        return self

    def close(self) -> None:
        self.httpd.shutdown()
        self.httpd.server_close()


@pytest.fixture
def mock_server_factory():
    servers = []

    def factory(path_map: Mapping[str, str] = DEFAULT_ENDPOINTS, tls: bool = False) -> MockRedfishServer:
        server = MockRedfishServer(path_map, tls=tls).start()
        servers.append(server)
        return server

    yield factory
    for server in servers:
        server.close()


@pytest.fixture
def mock_server(mock_server_factory):
    return mock_server_factory()


@pytest.fixture
def client_factory():
    def factory(server: MockRedfishServer, username: str = USERNAME, password: str = PASSWORD) -> Client:
        client = Client()
        client.set_host(server.host)
        client.set_port(server.port)
        client.set_protocol(server.protocol)
        client.set_username(username)
        client.set_password(password)
        return client

    return factory


@pytest.fixture
def client(mock_server, client_factory):
    return client_factory(mock_server)


@pytest.fixture
def fixture_bytes():
    return read_fixture


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()
