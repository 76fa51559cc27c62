from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import Field

from ..errors import DecodeError
from .base import Counter, NullableStr, RedfishModel, parse_response
from .odata import ODataAnnotation, ODataEnvelope


class ExpandQueryFeatures(RedfishModel):
    ExpandAll: bool = False
    Levels: bool = False
    Links: bool = False
    MaxLevels: Counter = 0
    NoLinks: bool = False


class ProtocolFeatures(RedfishModel):
    ExcerptQuery: bool = False
    FilterQuery: bool = False
    OnlyMemberQuery: bool = False
    SelectQuery: bool = False
    ExpandQuery: ExpandQueryFeatures = Field(default_factory=ExpandQueryFeatures)


class RootLinks(RedfishModel):
    Sessions: ODataEnvelope = Field(default_factory=ODataEnvelope)


class DellRootOem(RedfishModel):
    IsBranded: Counter = 0
    ManagerMACAddress: NullableStr = ""
    ServiceTag: NullableStr = ""


class RootOem(RedfishModel):
    Dell: DellRootOem = Field(default_factory=DellRootOem)


class InfoResponse(ODataEnvelope):
    """Service root document as served by iDRAC at /redfish/v1/."""

    Id: NullableStr = ""
    Name: NullableStr = ""
    Description: NullableStr = ""
    Product: NullableStr = ""
    RedfishVersion: NullableStr = ""
    ProtocolFeaturesSupported: ProtocolFeatures = Field(default_factory=ProtocolFeatures)
    AccountService: ODataEnvelope = Field(default_factory=ODataEnvelope)
    CertificateService: ODataEnvelope = Field(default_factory=ODataEnvelope)
    Chassis: ODataEnvelope = Field(default_factory=ODataEnvelope)
    EventService: ODataEnvelope = Field(default_factory=ODataEnvelope)
    Fabrics: ODataEnvelope = Field(default_factory=ODataEnvelope)
    JobService: ODataEnvelope = Field(default_factory=ODataEnvelope)
    JsonSchemas: ODataEnvelope = Field(default_factory=ODataEnvelope)
    Managers: ODataEnvelope = Field(default_factory=ODataEnvelope)
    Registries: ODataEnvelope = Field(default_factory=ODataEnvelope)
    SessionService: ODataEnvelope = Field(default_factory=ODataEnvelope)
    Systems: ODataEnvelope = Field(default_factory=ODataEnvelope)
    Tasks: ODataEnvelope = Field(default_factory=ODataEnvelope)
    TelemetryService: ODataEnvelope = Field(default_factory=ODataEnvelope)
    UpdateService: ODataEnvelope = Field(default_factory=ODataEnvelope)
    Links: RootLinks = Field(default_factory=RootLinks)
    Oem: RootOem = Field(default_factory=RootOem)


@dataclass
class Info:
    """Basic information about a Redfish endpoint, taken from the service root."""

    odata: ODataAnnotation = field(default_factory=ODataAnnotation)
    product: str = ""
    service_tag: str = ""
    manager_mac_address: str = ""
    redfish_version: str = ""

    @classmethod
    def from_bytes(cls, data: bytes) -> Info:
        response = parse_response(InfoResponse, data)
        # An empty document parses cleanly, but it is not a service root.
        if not response.RedfishVersion:
            raise DecodeError("error parsing the received response: missing RedfishVersion", data)
        return cls(
            odata=ODataAnnotation.from_envelope(response),
            product=response.Product,
            service_tag=response.Oem.Dell.ServiceTag,
            manager_mac_address=response.Oem.Dell.ManagerMACAddress,
            redfish_version=response.RedfishVersion,
        )

    @classmethod
    def from_string(cls, text: str) -> Info:
        return cls.from_bytes(text.encode("utf-8"))
