import json

import pytest
from typer.testing import CliRunner

from idrac_redfish_cli.__main__ import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_home(monkeypatch, tmp_path):
    for name in ("HOST", "PORT", "PROTOCOL", "USERNAME", "PASSWORD", "VALIDATE_SERVER_CERT", "LOG_LEVEL"):
        monkeypatch.delenv(f"IDRAC_API_{name}", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))


@pytest.fixture
def server_args(mock_server):
    return [
        "--host", mock_server.host,
        "--port", str(mock_server.port),
        "--proto", "http",
        "--username", "admin",
        "--password", "secret",
    ]


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.output.strip() == "idrac-redfish-client 1.0.1"


def test_help_lists_operations():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for name in ("get-info", "get-systems", "get-system-collection"):
        assert name in result.output


def test_operation_or_resource_required(server_args):
    result = runner.invoke(app, server_args)
    assert result.exit_code == 2
    assert "either --operation or --resource argument is required" in result.output


def test_operation_and_resource_are_exclusive(server_args):
    result = runner.invoke(app, server_args + ["--operation", "get-info", "--resource", "/redfish/v1/"])
    assert result.exit_code == 2
    assert "mutually exclusive" in result.output


def test_unsupported_operation(server_args):
    result = runner.invoke(app, server_args + ["--operation", "reboot"])
    assert result.exit_code == 2
    assert "the --operation reboot is unsupported" in result.output


def test_get_info(server_args, mock_server):
    result = runner.invoke(app, server_args + ["--operation", "get-info"])
    assert result.exit_code == 0, result.output
    assert f"Host: {mock_server.host}" in result.output
    assert "Product: Integrated Dell Remote Access Controller" in result.output
    assert "Service Tag: 24A8VC9" in result.output
    assert "Manager MAC Address: eb:f2:49:84:66:d4" in result.output
    assert "Redfish API Version: 1.6.0" in result.output


def test_get_systems(server_args):
    result = runner.invoke(app, server_args + ["--operation", "get-systems"])
    assert result.exit_code == 0, result.output
    assert "Number of Computer Systems: 2" in result.output
    assert "System: System.Embedded.1 | Model: PowerEdge R640" in result.output
    assert "System: System.Embedded.1 | Part Number: 0HG0B7V21" in result.output
    assert "System: System.Embedded.2 | BIOS Version:" in result.output


def test_get_system_collection(server_args):
    result = runner.invoke(app, server_args + ["--operation", "get-system-collection"])
    assert result.exit_code == 0, result.output
    collection = json.loads(result.output)
    assert collection["counters"]["computer_systems"] == 2
    assert collection["computer_systems"] == []


def test_resource(server_args, fixture_bytes):
    result = runner.invoke(app, server_args + ["--resource", "/redfish/v1/Systems/System.Embedded.1/"])
    assert result.exit_code == 0, result.output
    assert result.output == fixture_bytes("computer_system_1.json").decode() + "\n"


def test_resource_not_found(server_args):
    result = runner.invoke(app, server_args + ["--resource", "/redfish/v1/Managers/"])
    assert result.exit_code == 1
    assert "Error: error: status code 404" in result.output


def test_wrong_credentials(mock_server):
    args = ["--host", mock_server.host, "--port", str(mock_server.port), "--proto", "http"]
    result = runner.invoke(app, args + ["--username", "root", "--password", "calvin", "--operation", "get-info"])
    assert result.exit_code == 1
    assert "status code 401" in result.output


def test_missing_host():
    result = runner.invoke(app, ["--username", "admin", "--password", "secret", "--operation", "get-info"])
    assert result.exit_code == 1
    assert "Error: empty hostname or ip address" in result.output


def test_invalid_protocol(server_args):
    args = [arg if arg != "http" else "ftp" for arg in server_args]
    result = runner.invoke(app, args + ["--operation", "get-info"])
    assert result.exit_code == 1
    assert "unsupported protocol: ftp" in result.output


def test_config_file(tmp_path, mock_server):
    path = tmp_path / "idrac.yaml"
    path.write_text(
        f"host: {mock_server.host}\nport: {mock_server.port}\nprotocol: http\nusername: admin\npassword: secret\n"
    )
    result = runner.invoke(app, ["--config", str(path), "--operation", "get-info"])
    assert result.exit_code == 0, result.output
    assert "Service Tag: 24A8VC9" in result.output


def test_config_file_unsupported_extension(tmp_path):
    result = runner.invoke(app, ["--config", str(tmp_path / "idrac.ini"), "--operation", "get-info"])
    assert result.exit_code == 1
    assert "Error: configuration error: " in result.output


def test_invalid_log_level(server_args):
    result = runner.invoke(app, server_args + ["--log-level", "chatty", "--operation", "get-info"])
    assert result.exit_code == 1
    assert "not a valid logging level: chatty" in result.output


def test_invalid_environment_value(monkeypatch):
    monkeypatch.setenv("IDRAC_API_PORT", "abc")
    result = runner.invoke(app, ["--operation", "get-info"])
    assert result.exit_code == 1
    assert "Error: configuration error: " in result.output
    assert "configuration file error" not in result.output
