"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. Environment variables (SEARCHFW_ prefix)
  2. YAML config file (if specified)
  3. Default values
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, YamlConfigSettingsSource


class EndpointSettings(BaseModel):
    """A single Elasticsearch node and the index it serves."""

    host: str = Field(default="localhost", description="Node host name")
    port: int = Field(default=9200, description="Node HTTP port")
    index: str = Field(default="", description="Index written to / deleted from")
    scheme: str = Field(default="http", description="URL scheme: http or https")


class ElasticsearchSettings(BaseModel):
    """Elasticsearch adapter configuration."""

    endpoints: list[EndpointSettings] = Field(
        default_factory=lambda: [EndpointSettings()],
        description="Cluster nodes; more than one enables the multi-node client",
    )
    index: str | None = Field(default=None, description="Active index (overrides the endpoint index)")
    number_of_shards: int = Field(default=4, description="Shards used when creating the index")
    number_of_replicas: int = Field(default=1, description="Replicas used when creating the index")
    date_format: str = Field(default="%Y-%m-%dT%H:%M:%SZ", description="strftime pattern for date fields")
    username: str | None = Field(default=None, description="HTTP basic-auth username")
    password: str | None = Field(default=None, description="HTTP basic-auth password")
    api_key: str | None = Field(default=None, description="API key authentication")
    verify_certs: bool = Field(default=True, description="Whether to verify TLS certificates")
    request_timeout: float = Field(default=30.0, description="Client request timeout in seconds")

    @field_validator("endpoints", mode="before")
    @classmethod
    def _parse_endpoints(cls, v: Any) -> Any:
        """Parse endpoints from a JSON string (env var) or list."""
        if isinstance(v, str):
            import json

            try:
                parsed = json.loads(v)
            except (json.JSONDecodeError, TypeError):
                # Single "host:port" as plain string
                host, _, port = v.partition(":")
                return [{"host": host, "port": int(port)}] if port else [{"host": host}]
            return parsed if isinstance(parsed, list) else [parsed]
        return v

    def client_options(self) -> dict[str, Any]:
        """Keyword options forwarded to the Elasticsearch client."""
        options: dict[str, Any] = {
            "verify_certs": self.verify_certs,
            "request_timeout": self.request_timeout,
        }
        if self.api_key:
            options["api_key"] = self.api_key
        elif self.username and self.password:
            options["basic_auth"] = (self.username, self.password)
        return options

    def adapter_options(self) -> dict[str, Any]:
        """Constructor keyword arguments for ``ElasticsearchAdapter``."""
        return {
            "endpoints": [e.model_dump() for e in self.endpoints],
            "index": self.index,
            "index_options": self.index_options(),
            "date_format": self.date_format,
            **self.client_options(),
        }

    def index_options(self) -> dict[str, Any]:
        """Settings applied when the index is (re)created."""
        return {
            "number_of_shards": self.number_of_shards,
            "number_of_replicas": self.number_of_replicas,
        }


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the SEARCHFW_ prefix.
    Nested settings use double underscores: SEARCHFW_ELASTICSEARCH__INDEX=site

    Example:
        SEARCHFW_ELASTICSEARCH__ENDPOINTS='[{"host": "es01", "port": 9200, "index": "site"}]'
        SEARCHFW_ELASTICSEARCH__NUMBER_OF_REPLICAS=0
        SEARCHFW_OBSERVABILITY__LOG_FORMAT=console
    """

    model_config = {
        "env_prefix": "SEARCHFW_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    app_name: str = Field(default="searchfw", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    elasticsearch: ElasticsearchSettings = Field(default_factory=ElasticsearchSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Reads nothing unless model_config names a yaml_file (see from_yaml).
        return init_settings, env_settings, dotenv_settings, YamlConfigSettingsSource(settings_cls), file_secret_settings

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Values from the YAML file are used as defaults; environment variables
        (and ``.env``) still take precedence.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        yaml_settings = type(cls.__name__, (cls,), {"model_config": {**cls.model_config, "yaml_file": config_path}})
        return yaml_settings()
