from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import Field

from .base import Counter, NullableStr, parse_response
from .computer_system import ComputerSystem
from .odata import ODataAnnotation, ODataEnvelope


class ComputerSystemCollectionResponse(ODataEnvelope):
    Name: NullableStr = ""
    Description: NullableStr = ""
    members_count: Counter = Field(default=0, alias="Members@odata.count")
    Members: list[ODataEnvelope] = Field(default_factory=list)


@dataclass
class ComputerSystemCollectionCounters:
    computer_systems: int = 0


@dataclass
class ComputerSystemCollection:
    """Links to the systems behind a manager.

    ``computer_systems`` stays empty until the collection is expanded,
    see :func:`idrac_redfish.expander.expand_computer_systems`.
    """

    odata: ODataAnnotation = field(default_factory=ODataAnnotation)
    name: str = ""
    description: str = ""
    counters: ComputerSystemCollectionCounters = field(default_factory=ComputerSystemCollectionCounters)
    members: list[ODataAnnotation] = field(default_factory=list)
    computer_systems: list[ComputerSystem] = field(default_factory=list)

    @classmethod
    def from_bytes(cls, data: bytes) -> ComputerSystemCollection:
        response = parse_response(ComputerSystemCollectionResponse, data)
        return cls(
            odata=ODataAnnotation.from_envelope(response),
            name=response.Name,
            description=response.Description,
            counters=ComputerSystemCollectionCounters(computer_systems=response.members_count),
            members=[ODataAnnotation.from_envelope(member) for member in response.Members],
        )

    @classmethod
    def from_string(cls, text: str) -> ComputerSystemCollection:
        return cls.from_bytes(text.encode("utf-8"))
