from __future__ import annotations

from dataclasses import dataclass, field

from ..errors import DecodeError
from .base import parse_response
from .odata import ODataAnnotation, ODataEnvelope


@dataclass
class Resource:
    """A Redfish document without a dedicated model; the raw payload is kept as-is."""

    odata: ODataAnnotation = field(default_factory=ODataAnnotation)
    raw: bytes = b""

    def __str__(self) -> str:
        return self.raw.decode("utf-8", errors="replace")

    @classmethod
    def from_bytes(cls, data: bytes, strict: bool = True) -> Resource:
        """Wrap ``data``, reading its OData annotations.

        With ``strict=False`` a payload whose envelope cannot be parsed is
        still returned, carrying an empty annotation.
        """
        try:
            envelope = parse_response(ODataEnvelope, data)
        except DecodeError:
            if strict:
                raise
            return cls(raw=data)
        return cls(odata=ODataAnnotation.from_envelope(envelope), raw=data)

    @classmethod
    def from_string(cls, text: str, strict: bool = True) -> Resource:
        return cls.from_bytes(text.encode("utf-8"), strict=strict)
