#!/usr/bin/env python3
"""
Deploy Models

Result and collaborator types for deploy operations.
"""

from pathlib import Path
from typing import Protocol, TypedDict


class DeployResult(TypedDict):
    """Keys touched by a completed deploy run."""

    uploaded: list[str]
    deleted: list[str]


class DeployStorage(Protocol):
    """The bucket operations the deploy pipeline relies on."""

    async def list_buckets(self) -> list[str]: ...

    async def list_objects(self, bucket: str) -> list[str]: ...

    async def upload_file(
        self, bucket: str, key: str, file_path: str | Path, content_type: str, cache_control: str
    ) -> None: ...

    async def delete_object(self, bucket: str, key: str) -> None: ...

    async def close(self) -> None: ...
