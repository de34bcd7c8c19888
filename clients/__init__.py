"""
Client package for the external services used by the chat endpoint.

This module exposes:
- `StorageClient` : thin wrapper over an S3-compatible bucket
- `get_storage_client` : builds the client from environment configuration
"""

from clients.storage import StorageClient, get_storage_client

__all__ = ["StorageClient", "get_storage_client"]
