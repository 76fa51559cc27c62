from __future__ import annotations

from dataclasses import dataclass

from .errors import ConfigurationError
from .expander import expand_computer_systems
from .models import ComputerSystem, ComputerSystemCollection, Info, Resource
from .transport import RECEIVER_DATA_LIMIT, Transport

ROOT_PATH = "/redfish/v1/"
SUPPORTED_PROTOCOLS = ("http", "https")
DEFAULT_PORTS = {"https": 443, "http": 80}


@dataclass(frozen=True)
class Operation:
    name: str
    description: str


OPERATIONS = {
    "get-info": Operation(
        name="get-info",
        description="Get basic information about a remote Redfish API endpoint",
    ),
    "get-systems": Operation(
        name="get-systems",
        description="Get information about computer systems exposed via Redfish API",
    ),
    "get-system-collection": Operation(
        name="get-system-collection",
        description="Get the collection of computer systems without resolving its members",
    ),
}


class Client:
    """iDRAC Redfish API client.

    Connection settings are applied through the ``set_*`` methods, each of
    which validates its input. Every operation is a blocking GET against
    the configured endpoint.
    """

    def __init__(self, data_limit: int = RECEIVER_DATA_LIMIT) -> None:
        self._host = ""
        self._port = 443
        self._protocol = "https"
        self._username = ""
        self._password = ""
        self._validate_server_cert = False
        self._url = ""
        self.root_path = ROOT_PATH
        self.data_limit = data_limit

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port

    @property
    def protocol(self) -> str:
        return self._protocol

    @property
    def username(self) -> str:
        return self._username

    @property
    def validate_server_cert(self) -> bool:
        return self._validate_server_cert

    @property
    def url(self) -> str:
        return self._url

    def _rebase_url(self) -> None:
        if DEFAULT_PORTS[self._protocol] == self._port:
            self._url = f"{self._protocol}://{self._host}"
        else:
            self._url = f"{self._protocol}://{self._host}:{self._port}"

    def set_host(self, host: str) -> None:
        if not host:
            raise ConfigurationError("empty hostname or ip address")
        self._host = host
        self._rebase_url()

    def set_port(self, port: int) -> None:
        if not 0 < port < 65536:
            raise ConfigurationError(f"invalid port: {port}")
        self._port = port
        self._rebase_url()

    def set_protocol(self, protocol: str) -> None:
        if protocol not in SUPPORTED_PROTOCOLS:
            raise ConfigurationError(f"supported protocols: http, https; unsupported protocol: {protocol}")
        self._protocol = protocol
        self._rebase_url()

    def set_username(self, username: str) -> None:
        if not username:
            raise ConfigurationError("empty username")
        self._username = username

    def set_password(self, password: str) -> None:
        if not password:
            raise ConfigurationError("empty password")
        self._password = password

    def set_validate_server_cert(self, enabled: bool = True) -> None:
        self._validate_server_cert = enabled

    def get_operations(self) -> dict[str, Operation]:
        return dict(OPERATIONS)

    def _fetch(self, path: str) -> bytes:
        if not self._host:
            raise ConfigurationError("host is not set")
        transport = Transport(
            self._url,
            self._username,
            self._password,
            verify=self._validate_server_cert,
            data_limit=self.data_limit,
        )
        return transport.fetch(path)

    def get_info(self) -> Info:
        return Info.from_bytes(self._fetch(self.root_path))

    def get_resource(self, path: str, strict: bool = True) -> Resource:
        return Resource.from_bytes(self._fetch(path), strict=strict)

    def get_computer_system_collection(self) -> ComputerSystemCollection:
        return ComputerSystemCollection.from_bytes(self._fetch(self.root_path + "Systems/"))

    def get_computer_system_by_resource_id(self, path: str) -> ComputerSystem:
        return ComputerSystem.from_bytes(self._fetch(path))

    def get_computer_systems(self) -> list[ComputerSystem]:
        collection = self.get_computer_system_collection()
        expand_computer_systems(collection, self)
        return collection.computer_systems
