"""
Storage Base Classes and Configuration

Async S3 storage used by the deploy pipeline. Wraps a single persistent
aioboto3 client and exposes the four bucket operations a deploy needs.
"""

import asyncio
import logging
import time
import uuid
from contextlib import AsyncExitStack
from pathlib import Path
from typing import Any

import aiofiles
import aioboto3
import aiobotocore.config
from boto3.exceptions import Boto3Error
from botocore.exceptions import BotoCoreError, ClientError

from ..constants import DEFAULT_REGION, DEFAULT_S3_MAX_POOL_CONNECTIONS
from ..errors import TransferError

logger = logging.getLogger(__name__)

# Errors raised by the provider client or the local file stream during a transfer
TRANSFER_ERRORS = (ClientError, BotoCoreError, Boto3Error, OSError)

SLOW_OPERATION_SECONDS = 60.0


class BackendConfig:
    """Configuration for the S3 backend."""

    def __init__(self, region: str = DEFAULT_REGION, endpoint_url: str | None = None) -> None:
        self.region = region
        self.endpoint_url = endpoint_url

    @classmethod
    def s3(cls, region: str = DEFAULT_REGION) -> "BackendConfig":
        """Configure for AWS S3 using the standard credential chain."""
        return cls(region=region)

    @classmethod
    def s3_compatible(cls, endpoint_url: str, region: str = DEFAULT_REGION) -> "BackendConfig":
        """Configure for MinIO, R2 or any other S3-compatible endpoint.

        Credentials still come from the boto3 credential chain.
        """
        return cls(region=region, endpoint_url=endpoint_url)

    def client_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``session.client("s3", ...)``."""
        kwargs: dict[str, Any] = {"region_name": self.region}
        if self.endpoint_url:
            kwargs["endpoint_url"] = self.endpoint_url
        return kwargs


class BucketStorage:
    """
    Async bucket storage.

    Every call is awaited by the caller before the next one is issued, so the
    client never has more than one request in flight.
    """

    def __init__(self, config: BackendConfig):
        self.config = config
        self._s3_client: Any = None
        self._s3_session: Any = None
        self._exit_stack: AsyncExitStack | None = None
        self._client_lock = asyncio.Lock()

        # Instance identification for logging
        self._instance_id = str(uuid.uuid4())[:8]

        logger.info(f"Storage instance created (id={self._instance_id}, region={config.region})")

    async def __aenter__(self) -> "BucketStorage":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _get_s3_client(self):
        """Get or create the persistent S3 client."""
        if self._s3_client is None:
            async with self._client_lock:
                if self._s3_client is None:
                    # Each call is attempted exactly once; failures surface to the caller
                    config = aiobotocore.config.AioConfig(
                        max_pool_connections=DEFAULT_S3_MAX_POOL_CONNECTIONS,
                        retries={"total_max_attempts": 1, "mode": "standard"},
                        read_timeout=300,
                        connect_timeout=120,
                    )

                    client_kwargs = self.config.client_kwargs()
                    client_kwargs["config"] = config

                    logger.info(
                        f"Creating S3 client (storage_id={self._instance_id}, region={self.config.region}, "
                        f"endpoint_url={self.config.endpoint_url or 'default'})"
                    )

                    self._s3_session = aioboto3.Session()
                    self._exit_stack = AsyncExitStack()
                    self._s3_client = await self._exit_stack.enter_async_context(
                        self._s3_session.client("s3", **client_kwargs)
                    )

        return self._s3_client

    def _log_operation_end(self, operation: str, path: str, start_time: float) -> None:
        """Log the completion of an S3 operation."""
        duration = time.time() - start_time
        if duration > SLOW_OPERATION_SECONDS:
            logger.warning(
                f"SLOW S3 operation: {operation} for {path} took {duration:.3f}s (storage_id={self._instance_id})"
            )
        else:
            logger.debug(f"{operation} for {path} completed in {duration:.3f}s")

    async def list_buckets(self) -> list[str]:
        """Return the names of all buckets visible to the current credentials."""
        s3_client = await self._get_s3_client()
        try:
            response = await s3_client.list_buckets()
        except TRANSFER_ERRORS as e:
            raise TransferError(f"Failed to list buckets: {e}", operation="list_buckets") from e

        return [bucket["Name"] for bucket in response.get("Buckets", []) if "Name" in bucket]

    async def list_objects(self, bucket: str) -> list[str]:
        """Return every object key in the bucket, in listing order."""
        s3_client = await self._get_s3_client()
        keys: list[str] = []

        try:
            paginator = s3_client.get_paginator("list_objects_v2")
            async for page in paginator.paginate(Bucket=bucket):
                for obj in page.get("Contents", []):
                    key = obj.get("Key")
                    if key is not None:
                        keys.append(key)
        except TRANSFER_ERRORS as e:
            raise TransferError(f"Failed to list objects in {bucket}: {e}", operation="list_objects") from e

        logger.debug(f"Listed {len(keys)} objects in {bucket}")
        return keys

    async def upload_file(
        self, bucket: str, key: str, file_path: str | Path, content_type: str, cache_control: str
    ) -> None:
        """Stream a local file to ``bucket/key`` with content headers."""
        start_time = time.time()
        s3_client = await self._get_s3_client()
        extra_args = {"ContentType": content_type, "CacheControl": cache_control}

        try:
            async with aiofiles.open(file_path, "rb") as f:
                await s3_client.upload_fileobj(f, bucket, key, ExtraArgs=extra_args)
        except TRANSFER_ERRORS as e:
            duration = time.time() - start_time
            logger.error(
                f"Storage operation FAILED: upload_file for {bucket}/{key} after {duration:.3f}s - {e} "
                f"(storage_id={self._instance_id})"
            )
            raise TransferError(
                f"Failed to upload {file_path} to {bucket}/{key}: {e}", key=key, operation="upload"
            ) from e

        self._log_operation_end("upload_file", f"{bucket}/{key}", start_time)

    async def delete_object(self, bucket: str, key: str) -> None:
        """Delete ``bucket/key``."""
        start_time = time.time()
        s3_client = await self._get_s3_client()

        try:
            await s3_client.delete_object(Bucket=bucket, Key=key)
        except TRANSFER_ERRORS as e:
            logger.error(f"Storage operation FAILED: delete_object for {bucket}/{key} - {e}")
            raise TransferError(f"Failed to delete {bucket}/{key}: {e}", key=key, operation="delete") from e

        self._log_operation_end("delete_object", f"{bucket}/{key}", start_time)

    async def close(self) -> None:
        """Clean up the S3 client connection."""
        if self._exit_stack is not None:
            try:
                await self._exit_stack.aclose()
                logger.info(f"Storage resources closed (storage_id={self._instance_id})")
            except Exception as e:
                logger.error(f"Error closing storage resources: {e} (storage_id={self._instance_id})")
            finally:
                self._exit_stack = None
                self._s3_client = None
                self._s3_session = None
