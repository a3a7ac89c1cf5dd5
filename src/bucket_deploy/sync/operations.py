#!/usr/bin/env python3
"""
Core Deploy Operations

Bucket validation, the upload phase and the prune phase. Every network call
is awaited before the next one is issued.
"""

import logging
from collections.abc import Iterable, Sequence

from ..constants import DEFAULT_PROGRESS_BAR_WIDTH
from ..errors import ConfigurationError
from ..files import LocalFile
from .models import DeployStorage
from .progress_reporter import draw_progress, prune_fraction, upload_fraction

logger = logging.getLogger(__name__)


async def validate_bucket(storage: DeployStorage, bucket: str) -> None:
    """
    Confirm ``bucket`` is one of the account's buckets.

    Uploads do not check bucket existence themselves on every provider, so a
    misspelled name is caught here before anything is written.

    Raises:
        ConfigurationError: If the bucket is not in the account's bucket list
    """
    buckets = await storage.list_buckets()
    if bucket not in buckets:
        logger.error(f"Bucket {bucket} not found among {len(buckets)} buckets")
        raise ConfigurationError(f"Bucket {bucket} does not exist!")
    logger.info(f"Bucket {bucket} exists")


async def upload_files(
    storage: DeployStorage,
    bucket: str,
    files: Sequence[LocalFile],
    bar_width: int = DEFAULT_PROGRESS_BAR_WIDTH,
) -> list[str]:
    """
    Upload every local file, in order, one at a time.

    The first failed upload propagates as TransferError and no further files
    are attempted.

    Returns:
        Keys uploaded, in upload order
    """
    uploaded: list[str] = []
    total = len(files)

    for index, local_file in enumerate(files):
        key = local_file.key
        content_type = local_file.content_type
        cache_control = local_file.cache_control

        logger.info(f"Uploading {local_file.path} to {bucket}/{key} ({content_type}, {cache_control})")
        await storage.upload_file(bucket, key, local_file.path, content_type, cache_control)
        uploaded.append(key)

        draw_progress("Uploading", upload_fraction(index, total), bar_width)

    # Complete the bar; with a single file the last step above still reads 0%
    draw_progress("Uploading", 1.0, bar_width)
    logger.info(f"Uploaded {len(uploaded)} files to {bucket}")
    return uploaded


def plan_prune(remote_keys: Iterable[str], local_names: Iterable[str]) -> list[str]:
    """Remote keys with no local file of the same name, in listing order."""
    local = set(local_names)
    return [key for key in remote_keys if key not in local]


async def prune_bucket(
    storage: DeployStorage,
    bucket: str,
    local_names: Iterable[str],
    bar_width: int = DEFAULT_PROGRESS_BAR_WIDTH,
) -> list[str]:
    """
    Delete bucket objects that no longer correspond to a local file.

    The listing is taken after all uploads, so freshly uploaded keys are kept.
    Only presence is compared; content is not.

    Returns:
        Keys deleted, in listing order
    """
    remote_keys = await storage.list_objects(bucket)
    unused = plan_prune(remote_keys, local_names)

    if not unused:
        logger.info(f"No unused objects in {bucket}")
        return []

    print(f"\nUnused objects to remove: {len(unused)}")
    logger.info(f"Removing {len(unused)} unused objects from {bucket}")

    deleted: list[str] = []
    for index, key in enumerate(unused):
        logger.info(f"Deleting {bucket}/{key}")
        await storage.delete_object(bucket, key)
        deleted.append(key)

        draw_progress("Cleaning", prune_fraction(index, len(unused)), bar_width)

    return deleted
