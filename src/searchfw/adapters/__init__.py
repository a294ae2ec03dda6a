"""Search engine adapter layer — Connectors between the framework and engines.

Built-in adapters:
  - elasticsearch: Elasticsearch via the official async client

Implement ``SearchEngineAdapter`` to connect another engine.
"""
