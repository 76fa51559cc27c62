"""
OData instance annotations carried by every Redfish document.

See "Instance Annotations" in the OData JSON Format Version 4.01
specification.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import Field

from .base import NullableStr, RedfishModel


class ODataEnvelope(RedfishModel):
    odata_id: NullableStr = Field(default="", alias="@odata.id")
    odata_type: NullableStr = Field(default="", alias="@odata.type")
    odata_context: NullableStr = Field(default="", alias="@odata.context")


@dataclass
class ODataAnnotation:
    id: str = ""
    type: str = ""
    context: str = ""

    @classmethod
    def from_envelope(cls, envelope: ODataEnvelope) -> ODataAnnotation:
        return cls(
            id=envelope.odata_id,
            type=envelope.odata_type,
            context=envelope.odata_context,
        )
