"""Integration test fixtures — a Docker-based Elasticsearch node.

Expects Elasticsearch to be running, e.g.:
    docker run -d -p 9200:9200 -e discovery.type=single-node \
        -e xpack.security.enabled=false elasticsearch:8.13.4
"""

from __future__ import annotations

import asyncio
import time
from typing import Any

import httpx
import pytest

INDEX = "searchfw-it"

RECORDS: list[dict[str, Any]] = [
    {
        "id": "doc-001",
        "title": "Advances in Solar Nowcasting Using Deep Learning",
        "content": (
            "A convolutional neural network processes satellite imagery to predict "
            "solar irradiance up to 4 hours ahead."
        ),
        "published": "2024-06-15",
    },
    {
        "id": "doc-002",
        "title": "Transformer Models for Natural Language Understanding",
        "content": "A survey of BERT, GPT, T5 and their variants on GLUE and SQuAD benchmarks.",
        "published": 1710892800,
    },
    {
        "id": "doc-003",
        "title": "Graph Neural Networks for Drug Discovery",
        "content": "A message-passing architecture that captures 3D molecular geometry.",
        "published": "July 22, 2024",
    },
]


def _wait_for_service(url: str, timeout: float = 120.0) -> bool:
    """Block until *url* returns HTTP 200, or timeout."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        try:
            r = httpx.get(url, timeout=30)
            if r.status_code == 200:
                return True
        except httpx.HTTPError:
            pass
        time.sleep(2)
    return False


async def _drop_index(host: str, index: str) -> None:
    async with httpx.AsyncClient(base_url=host, timeout=30) as client:
        await client.delete(f"/{index}", params={"ignore_unavailable": "true"})


@pytest.fixture(scope="session")
def elasticsearch_ready():
    """Ensure Elasticsearch is running and the test index is absent."""
    host = "http://localhost:9200"
    if not _wait_for_service(host):
        pytest.skip("Elasticsearch not available at localhost:9200")
    asyncio.run(_drop_index(host, INDEX))
    return host


@pytest.fixture
def integration_index() -> str:
    return INDEX


@pytest.fixture
def records() -> list[dict[str, Any]]:
    return [dict(r) for r in RECORDS]
