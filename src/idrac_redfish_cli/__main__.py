import json
import time
from dataclasses import asdict
from pathlib import Path
from typing import NoReturn, Optional

import structlog
import typer
from pydantic import ValidationError

from idrac_redfish import Client, RedfishClientError, __version__
from idrac_redfish.config import load_settings
from idrac_redfish.errors import ConfigurationError
from idrac_redfish.logging_config import configure_logging

APP_NAME = "idrac-redfish-client"


def operations_epilog() -> str:
    lines = ["Operations:"]
    for name, op in Client().get_operations().items():
        lines.append(f"  - {name}: {op.description}")
    return "\n\n".join(lines)


app = typer.Typer(add_completion=False, help="iDRAC Redfish API Client")
logger = structlog.get_logger(APP_NAME)


def fail(message: str, code: int = 1) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=code)


def print_info(client: Client) -> None:
    info = client.get_info()
    typer.echo(f"Host: {client.host}")
    typer.echo(f"Product: {info.product}")
    typer.echo(f"Service Tag: {info.service_tag}")
    typer.echo(f"Manager MAC Address: {info.manager_mac_address}")
    typer.echo(f"Redfish API Version: {info.redfish_version}")


def print_systems(client: Client) -> None:
    computer_systems = client.get_computer_systems()
    typer.echo(f"Number of Computer Systems: {len(computer_systems)}")
    typer.echo("---------------------------------")
    for cs in computer_systems:
        for label, value in (
            ("Manufacturer", cs.manufacturer),
            ("Model", cs.model),
            ("SKU", cs.sku),
            ("Part Number", cs.part_number),
            ("BIOS Version", cs.bios_version),
        ):
            if value:
                typer.echo(f"System: {cs.id} | {label}: {value}")
        typer.echo(json.dumps(asdict(cs), indent=2))


def print_system_collection(client: Client) -> None:
    collection = client.get_computer_system_collection()
    typer.echo(json.dumps(asdict(collection), indent=2))


HANDLERS = {
    "get-info": print_info,
    "get-systems": print_systems,
    "get-system-collection": print_system_collection,
}


@app.command(epilog=operations_epilog())
def run(
    config: Optional[Path] = typer.Option(None, "--config", help="configuration file, .yaml or .json"),
    host: Optional[str] = typer.Option(None, "--host", help="target hostname or ip address"),
    port: Optional[int] = typer.Option(None, "--port", help="target port [default: 443]"),
    proto: Optional[str] = typer.Option(None, "--proto", help="transport protocol, either https or http"),
    validate_server_cert: Optional[bool] = typer.Option(
        None,
        "--validate-server-cert/--no-validate-server-cert",
        help="Verify the status of the server certificate",
    ),
    username: Optional[str] = typer.Option(None, "--username", help="username"),
    password: Optional[str] = typer.Option(None, "--password", help="password"),
    operation: Optional[str] = typer.Option(None, "--operation", help="operation"),
    resource: Optional[str] = typer.Option(None, "--resource", help="resource"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="logging severity level [default: info]"),
    version: bool = typer.Option(False, "--version", help="version information"),
):
    """Query a Dell iDRAC Redfish API endpoint"""
    if version:
        typer.echo(f"{APP_NAME} {__version__}")
        raise typer.Exit()

    try:
        settings = load_settings(
            config,
            host=host,
            port=port,
            protocol=proto,
            username=username,
            password=password,
            validate_server_cert=validate_server_cert,
            log_level=log_level,
        )
    except (ConfigurationError, ValidationError) as e:
        fail(f"configuration error: {e}")

    try:
        configure_logging(settings.log_level)
    except ValueError as e:
        fail(str(e))

    if not operation and not resource:
        fail("either --operation or --resource argument is required", code=2)
    if operation and resource:
        fail("the --operation or --resource arguments are mutually exclusive", code=2)

    client = Client()
    if operation and operation not in client.get_operations():
        fail(f"the --operation {operation} is unsupported", code=2)

    try:
        settings.apply_to(client)
    except ConfigurationError as e:
        fail(str(e))

    logger.debug(
        "configured",
        host=client.host,
        port=client.port,
        protocol=client.protocol,
        validate_server_cert=client.validate_server_cert,
        username=client.username,
    )

    start = time.perf_counter()
    try:
        if operation:
            HANDLERS[operation](client)
        else:
            typer.echo(str(client.get_resource(resource, strict=False)))
    except RedfishClientError as e:
        fail(str(e))
    logger.debug("done", duration_ms=int((time.perf_counter() - start) * 1000))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
