from __future__ import annotations

import time

import httpx
import structlog

from .errors import EmptyResponseError, ResponseStatusError, TransportError

# Upper bound on the number of body bytes read from a single response.
RECEIVER_DATA_LIMIT = 1_000_000

CONNECT_TIMEOUT_SECONDS = 10.0
REQUEST_TIMEOUT_SECONDS = 30.0
# Wall-clock budget for a whole request, body included.
REQUEST_DEADLINE_SECONDS = 30.0

DEFAULT_HEADERS = {
    "Accept": "application/json;charset=utf-8",
    "Cache-Control": "no-cache",
}

logger = structlog.get_logger(__name__)


class Transport:
    """Performs a single authenticated request against a Redfish endpoint.

    A new ``httpx.Client`` is opened for every call and closed before
    returning; no connection state survives between requests and nothing
    is retried.
    """

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        verify: bool = False,
        data_limit: int = RECEIVER_DATA_LIMIT,
    ) -> None:
        self.base_url = base_url
        self.auth = httpx.BasicAuth(username, password)
        self.verify = verify
        self.data_limit = data_limit
        self.timeout = httpx.Timeout(REQUEST_TIMEOUT_SECONDS, connect=CONNECT_TIMEOUT_SECONDS)
        self.deadline = REQUEST_DEADLINE_SECONDS

    def build_url(self, path: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.base_url}{path}"

    def fetch(
        self,
        path: str,
        method: str = "GET",
        content_type: str | None = None,
        payload: bytes | None = None,
    ) -> bytes:
        url = self.build_url(path)
        headers = dict(DEFAULT_HEADERS)
        if content_type:
            headers["Content-Type"] = content_type
        logger.debug("request", method=method, url=url)
        started = time.monotonic()

        with httpx.Client(auth=self.auth, verify=self.verify, timeout=self.timeout) as client:
            try:
                with client.stream(method, url, headers=headers, content=payload or None) as response:
                    logger.debug("response", url=url, status=response.status_code)
                    try:
                        body = self._read_body(response, url, started)
                    except httpx.HTTPError as exc:
                        raise TransportError(f"non-EOF error at url {url}: {exc}") from exc
            except httpx.RemoteProtocolError as exc:
                # the server went away before sending a status line
                raise EmptyResponseError(url) from exc
            except httpx.HTTPError as exc:
                raise TransportError(f"{method} {url}: {exc}") from exc

        if response.status_code != 200:
            raise ResponseStatusError(response.status_code, body.decode("utf-8", errors="replace"))
        return body

    def _read_body(self, response: httpx.Response, url: str, started: float) -> bytes:
        body = bytearray()
        for chunk in response.iter_bytes():
            if time.monotonic() - started > self.deadline:
                raise TransportError(f"request to {url} exceeded the {self.deadline:g}s deadline")
            remaining = self.data_limit - len(body)
            if remaining <= 0:
                break
            body.extend(chunk[:remaining])
        return bytes(body)
