"""Elasticsearch client construction from endpoint configuration.

- Single node: one endpoint, plain ``hosts=[url]``.
- Multi node: two or more endpoints; the caller's options are kept and a
  node selector is added so requests are spread across the cluster.
"""

from __future__ import annotations

from typing import Any

from elasticsearch import AsyncElasticsearch
from pydantic import BaseModel, Field

from searchfw.adapters.base.exceptions import ConfigurationError

DEFAULT_NODE_SELECTOR = "round_robin"


class Endpoint(BaseModel):
    """A cluster node and the index it serves."""

    host: str = Field(description="Node host name")
    port: int = Field(default=9200, description="Node HTTP port")
    index: str = Field(default="", description="Index written to / deleted from")
    scheme: str = Field(default="http", description="URL scheme")

    @property
    def url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}"


class ClientConfig(BaseModel):
    """Resolved keyword arguments for ``AsyncElasticsearch``."""

    hosts: list[str] = Field(description="Node URLs")
    options: dict[str, Any] = Field(default_factory=dict, description="Extra client keyword options")

    @property
    def is_multi_node(self) -> bool:
        return len(self.hosts) > 1

    def to_kwargs(self) -> dict[str, Any]:
        return {"hosts": list(self.hosts), **self.options}


def build_client_config(endpoints: list[Endpoint], options: dict[str, Any] | None = None) -> ClientConfig:
    """Resolve endpoints and client options into a ``ClientConfig``.

    Raises:
        ConfigurationError: If no endpoint is given.
    """
    if not endpoints:
        raise ConfigurationError("At least one Elasticsearch endpoint is required.")

    client_options = dict(options or {})
    # The node list always comes from the endpoints.
    client_options.pop("hosts", None)

    hosts = [endpoint.url for endpoint in endpoints]
    if len(hosts) > 1:
        client_options.setdefault("node_selector_class", DEFAULT_NODE_SELECTOR)

    return ClientConfig(hosts=hosts, options=client_options)


def build_client(config: ClientConfig) -> AsyncElasticsearch:
    return AsyncElasticsearch(**config.to_kwargs())
