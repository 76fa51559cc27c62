"""Settings for the command line client.

Values are resolved in order of precedence: explicit overrides (command
line flags), ``IDRAC_API_*`` environment variables, then a YAML or JSON
configuration file. The client library itself never reads any of these.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from .client import Client
from .errors import ConfigurationError

CONFIG_SUFFIXES = (".yaml", ".yml", ".json")


def default_config_path() -> Path:
    return Path.home() / ".redfish" / "redfish.yaml"


class Settings(BaseSettings):
    host: str = ""
    port: int = 443
    protocol: str = "https"
    username: str = ""
    password: str = ""
    validate_server_cert: bool = False
    log_level: str = "info"

    model_config = SettingsConfigDict(env_prefix="IDRAC_API_", extra="ignore")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            JsonConfigSettingsSource(settings_cls),
            YamlConfigSettingsSource(settings_cls),
        )

    def apply_to(self, client: Client) -> None:
        """Push these settings through the client's validating setters."""
        client.set_host(self.host)
        client.set_port(self.port)
        client.set_protocol(self.protocol)
        client.set_username(self.username)
        client.set_password(self.password)
        client.set_validate_server_cert(self.validate_server_cert)


def load_settings(config_file: str | Path | None = None, **overrides: Any) -> Settings:
    """Build Settings, reading ``config_file`` if it exists.

    Overrides set to None are treated as absent so that unset command line
    flags do not mask environment or file values.
    """
    path = Path(config_file).expanduser() if config_file else default_config_path()
    if path.suffix not in CONFIG_SUFFIXES:
        raise ConfigurationError(
            f"--config specifies a file without a supported extension, e.g. .yaml or .json: {path}"
        )
    file_key = "json_file" if path.suffix == ".json" else "yaml_file"

    class FileSettings(Settings):
        model_config = SettingsConfigDict(**{file_key: path})

    values = {key: value for key, value in overrides.items() if value is not None}
    return FileSettings(**values)
