from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import Field

from ..errors import DecodeError
from .base import Counter, NullableStr, RedfishModel, parse_response
from .odata import ODataAnnotation, ODataEnvelope


class StatusShape(RedfishModel):
    Health: NullableStr = ""
    HealthRollup: NullableStr = ""
    State: NullableStr = ""


class ProcessorSummaryShape(RedfishModel):
    Count: Counter = 0
    LogicalProcessorCount: Counter = 0
    Model: NullableStr = ""
    Status: StatusShape = Field(default_factory=StatusShape)


class MemorySummaryShape(RedfishModel):
    MemoryMirroring: NullableStr = ""
    # integer on some firmware releases, float on others
    TotalSystemMemoryGiB: Any = None
    Status: StatusShape = Field(default_factory=StatusShape)


class ActionShape(RedfishModel):
    target: NullableStr = ""
    allowable_values: list[str] = Field(default_factory=list, alias="ResetType@Redfish.AllowableValues")


class BootShape(RedfishModel):
    BootOptions: ODataEnvelope = Field(default_factory=ODataEnvelope)
    BootOrder: list[str] = Field(default_factory=list)
    boot_order_count: Counter = Field(default=0, alias="BootOrder@odata.count")
    BootSourceOverrideEnabled: NullableStr = ""
    BootSourceOverrideMode: NullableStr = ""
    BootSourceOverrideTarget: NullableStr = ""
    UefiTargetBootSourceOverride: NullableStr = ""
    override_target_allowable_values: list[str] = Field(
        default_factory=list, alias="BootSourceOverrideTarget@Redfish.AllowableValues"
    )


class LinksShape(RedfishModel):
    Chassis: list[ODataEnvelope] = Field(default_factory=list)
    chassis_count: Counter = Field(default=0, alias="Chassis@odata.count")
    CooledBy: list[ODataEnvelope] = Field(default_factory=list)
    cooled_by_count: Counter = Field(default=0, alias="CooledBy@odata.count")
    ManagedBy: list[ODataEnvelope] = Field(default_factory=list)
    managed_by_count: Counter = Field(default=0, alias="ManagedBy@odata.count")
    PoweredBy: list[ODataEnvelope] = Field(default_factory=list)
    powered_by_count: Counter = Field(default=0, alias="PoweredBy@odata.count")


class HostWatchdogTimerShape(RedfishModel):
    FunctionEnabled: bool = False
    TimeoutAction: NullableStr = ""
    Status: StatusShape = Field(default_factory=StatusShape)


class TrustedModuleShape(RedfishModel):
    FirmwareVersion: NullableStr = ""
    InterfaceType: NullableStr = ""
    Status: StatusShape = Field(default_factory=StatusShape)


class DellSystemShape(ODataEnvelope):
    BIOSReleaseDate: NullableStr = ""
    BaseBoardChassisSlot: NullableStr = ""
    ChassisModel: NullableStr = ""
    ChassisName: NullableStr = ""
    ChassisServiceTag: NullableStr = ""
    ExpressServiceCode: NullableStr = ""
    LastSystemInventoryTime: NullableStr = ""
    LastUpdateTime: NullableStr = ""
    MaxCPUSockets: Counter = 0
    MaxDIMMSlots: Counter = 0
    MaxPCIeSlots: Counter = 0
    MemoryOperationMode: NullableStr = ""
    NodeID: NullableStr = ""
    PopulatedDIMMSlots: Counter = 0
    PopulatedPCIeSlots: Counter = 0
    PowerCapEnabledState: NullableStr = ""
    ServerAllocationWatts: Any = None
    SystemGeneration: NullableStr = ""
    SystemID: Counter = 0
    SystemRevision: NullableStr = ""
    UUID: NullableStr = ""
    smbiosGUID: NullableStr = ""


class DellSystemOem(RedfishModel):
    DellSystem: DellSystemShape = Field(default_factory=DellSystemShape)


class SystemOem(RedfishModel):
    Dell: DellSystemOem = Field(default_factory=DellSystemOem)


class ComputerSystemResponse(ODataEnvelope):
    Id: NullableStr = ""
    UUID: NullableStr = ""
    Name: NullableStr = ""
    AssetTag: NullableStr = ""
    BiosVersion: NullableStr = ""
    Manufacturer: NullableStr = ""
    Model: NullableStr = ""
    PartNumber: NullableStr = ""
    SKU: NullableStr = ""
    SerialNumber: NullableStr = ""
    SystemType: NullableStr = ""
    Description: NullableStr = ""
    HostName: NullableStr = ""
    IndicatorLED: NullableStr = ""
    PowerState: NullableStr = ""
    pcie_devices_count: Counter = Field(default=0, alias="PCIeDevices@odata.count")
    pcie_functions_count: Counter = Field(default=0, alias="PCIeFunctions@odata.count")
    hosting_roles_count: Counter = Field(default=0, alias="HostingRoles@odata.count")
    Status: StatusShape = Field(default_factory=StatusShape)
    ProcessorSummary: ProcessorSummaryShape = Field(default_factory=ProcessorSummaryShape)
    MemorySummary: MemorySummaryShape = Field(default_factory=MemorySummaryShape)
    Actions: dict[str, Optional[ActionShape]] = Field(default_factory=dict)
    Boot: BootShape = Field(default_factory=BootShape)
    Links: LinksShape = Field(default_factory=LinksShape)

    # Not projected onto ComputerSystem.
    Bios: ODataEnvelope = Field(default_factory=ODataEnvelope)
    EthernetInterfaces: ODataEnvelope = Field(default_factory=ODataEnvelope)
    Memory: ODataEnvelope = Field(default_factory=ODataEnvelope)
    NetworkInterfaces: ODataEnvelope = Field(default_factory=ODataEnvelope)
    Processors: ODataEnvelope = Field(default_factory=ODataEnvelope)
    SecureBoot: ODataEnvelope = Field(default_factory=ODataEnvelope)
    SimpleStorage: ODataEnvelope = Field(default_factory=ODataEnvelope)
    Storage: ODataEnvelope = Field(default_factory=ODataEnvelope)
    PCIeDevices: list[ODataEnvelope] = Field(default_factory=list)
    PCIeFunctions: list[ODataEnvelope] = Field(default_factory=list)
    HostingRoles: list[Any] = Field(default_factory=list)
    TrustedModules: list[TrustedModuleShape] = Field(default_factory=list)
    HostWatchdogTimer: HostWatchdogTimerShape = Field(default_factory=HostWatchdogTimerShape)
    Oem: SystemOem = Field(default_factory=SystemOem)


@dataclass
class HealthStatus:
    health: str = ""
    health_rollup: str = ""
    state: str = ""

    @classmethod
    def from_shape(cls, shape: StatusShape) -> HealthStatus:
        return cls(health=shape.Health, health_rollup=shape.HealthRollup, state=shape.State)


@dataclass
class ComputerSystemCounters:
    boot_order: int = 0
    hosting_roles: int = 0
    chassis: int = 0
    cooled_by: int = 0
    managed_by: int = 0
    powered_by: int = 0
    pcie_devices: int = 0
    pcie_functions: int = 0
    total_processors: int = 0
    logical_processors: int = 0
    total_system_memory: int = 0


@dataclass
class ComputerSystemActionEndpoint:
    """A write-capable endpoint advertised by the system. Listed, never invoked.

    Every key of the Actions map becomes an endpoint, including the ``Oem``
    container, which carries an empty ``target``.
    """

    action: str
    target: str
    allowed_values: list[str] = field(default_factory=list)


@dataclass
class ComputerSystem:
    id: str = ""
    odata: ODataAnnotation = field(default_factory=ODataAnnotation)
    bios_version: str = ""
    manufacturer: str = ""
    model: str = ""
    part_number: str = ""
    sku: str = ""
    description: str = ""
    asset_tag: str = ""
    name: str = ""
    serial_number: str = ""
    system_type: str = ""
    uuid: str = ""
    counters: ComputerSystemCounters = field(default_factory=ComputerSystemCounters)
    status: HealthStatus = field(default_factory=HealthStatus)
    hostname: str = ""
    indicator_led: str = ""
    power_state: str = ""
    processor_model: str = ""
    processor_status: HealthStatus = field(default_factory=HealthStatus)
    memory_mirroring: str = ""
    memory_status: HealthStatus = field(default_factory=HealthStatus)
    action_endpoints: list[ComputerSystemActionEndpoint] = field(default_factory=list)

    @classmethod
    def from_bytes(cls, data: bytes) -> ComputerSystem:
        response = parse_response(ComputerSystemResponse, data)
        counters = ComputerSystemCounters(
            boot_order=response.Boot.boot_order_count,
            hosting_roles=response.hosting_roles_count,
            chassis=response.Links.chassis_count,
            cooled_by=response.Links.cooled_by_count,
            managed_by=response.Links.managed_by_count,
            powered_by=response.Links.powered_by_count,
            pcie_devices=response.pcie_devices_count,
            pcie_functions=response.pcie_functions_count,
            total_processors=response.ProcessorSummary.Count,
            logical_processors=response.ProcessorSummary.LogicalProcessorCount,
            total_system_memory=memory_gib(response.MemorySummary.TotalSystemMemoryGiB, data),
        )
        return cls(
            id=response.Id,
            odata=ODataAnnotation.from_envelope(response),
            bios_version=response.BiosVersion,
            manufacturer=response.Manufacturer,
            model=response.Model,
            part_number=response.PartNumber,
            sku=response.SKU,
            description=response.Description,
            asset_tag=response.AssetTag,
            name=response.Name,
            serial_number=response.SerialNumber,
            system_type=response.SystemType,
            uuid=response.UUID,
            counters=counters,
            status=HealthStatus.from_shape(response.Status),
            hostname=response.HostName,
            indicator_led=response.IndicatorLED,
            power_state=response.PowerState,
            processor_model=response.ProcessorSummary.Model,
            processor_status=HealthStatus.from_shape(response.ProcessorSummary.Status),
            memory_mirroring=response.MemorySummary.MemoryMirroring,
            memory_status=HealthStatus.from_shape(response.MemorySummary.Status),
            action_endpoints=action_endpoints(response.Actions),
        )

    @classmethod
    def from_string(cls, text: str) -> ComputerSystem:
        return cls.from_bytes(text.encode("utf-8"))


def memory_gib(value: Any, data: bytes) -> int:
    """Normalize TotalSystemMemoryGiB, which may be a JSON integer or float."""
    # bool is an int subclass and must not be mistaken for a size
    if isinstance(value, bool):
        raise DecodeError("parsing error: unsupported type for TotalSystemMemoryGiB: bool", data)
    if isinstance(value, int):
        gib = value
    elif isinstance(value, float) and math.isfinite(value):
        gib = int(value)
    else:
        raise DecodeError(
            f"parsing error: unsupported type for TotalSystemMemoryGiB: {type(value).__name__}", data
        )
    if gib < 0:
        raise DecodeError(f"parsing error: negative TotalSystemMemoryGiB: {value}", data)
    return gib


def action_endpoints(actions: dict[str, Optional[ActionShape]]) -> list[ComputerSystemActionEndpoint]:
    """Flatten the Actions map, ordered by action name."""
    endpoints = []
    for name in sorted(actions):
        action = actions[name] or ActionShape()
        endpoints.append(
            ComputerSystemActionEndpoint(
                action=name,
                target=action.target,
                allowed_values=list(action.allowable_values),
            )
        )
    return endpoints
