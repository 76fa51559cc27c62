"""
Client library for the Dell iDRAC Redfish API.

Fetches Redfish documents over HTTP(S) and decodes them into typed
structures, flattening the Dell OEM extensions along the way.
"""

from .client import Client, Operation
from .errors import (
    ConfigurationError,
    DecodeError,
    EmptyResponseError,
    RedfishClientError,
    ResponseStatusError,
    TransportError,
)
from .models import ComputerSystem, ComputerSystemCollection, Info, ODataAnnotation, Resource

__version__ = "1.0.1"

__all__ = [
    "Client",
    "ComputerSystem",
    "ComputerSystemCollection",
    "ConfigurationError",
    "DecodeError",
    "EmptyResponseError",
    "Info",
    "ODataAnnotation",
    "Operation",
    "RedfishClientError",
    "Resource",
    "ResponseStatusError",
    "TransportError",
]
