from __future__ import annotations


class RedfishClientError(Exception):
    """Base class for all client errors."""


class ConfigurationError(RedfishClientError):
    pass


class TransportError(RedfishClientError):
    """Raised when a request could not be completed."""


class ResponseStatusError(TransportError):
    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"error: status code {status_code}: {body}")


class EmptyResponseError(TransportError):
    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"response: <nil>, verify url: {url}")


class DecodeError(RedfishClientError):
    """Raised when a payload cannot be decoded into a resource."""

    def __init__(self, message: str, payload: bytes | str = b"") -> None:
        if isinstance(payload, bytes):
            payload = payload.decode("utf-8", errors="replace")
        self.payload = payload
        super().__init__(f"{message}, server response: {payload}")
