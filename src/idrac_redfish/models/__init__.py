"""
Typed views of the Redfish documents served by iDRAC.

Each module pairs a pydantic response shape, which mirrors the raw vendor
document, with the dataclass handed back to callers.
"""

from .computer_system import (
    ComputerSystem,
    ComputerSystemActionEndpoint,
    ComputerSystemCounters,
    HealthStatus,
)
from .computer_system_collection import ComputerSystemCollection, ComputerSystemCollectionCounters
from .info import Info
from .odata import ODataAnnotation
from .resource import Resource

__all__ = [
    "ComputerSystem",
    "ComputerSystemActionEndpoint",
    "ComputerSystemCollection",
    "ComputerSystemCollectionCounters",
    "ComputerSystemCounters",
    "HealthStatus",
    "Info",
    "ODataAnnotation",
    "Resource",
]
