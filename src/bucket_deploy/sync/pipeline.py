#!/usr/bin/env python3
"""
Deploy Pipeline

Runs one deploy: validate the bucket, enumerate local files, upload them all,
then prune objects that no longer exist locally.
"""

import asyncio
import logging
import time

from ..files import list_local_files
from ..run_config import DeployConfig
from ..storage import create_storage_from_config
from .models import DeployResult, DeployStorage
from .operations import prune_bucket, upload_files, validate_bucket

logger = logging.getLogger(__name__)


class DeployPipeline:
    """Sequential upload/prune reconciliation of a directory against a bucket."""

    @classmethod
    def from_config(cls, config: DeployConfig) -> "DeployPipeline":
        """Create a pipeline with storage built from the run configuration."""
        return cls(config, create_storage_from_config(config))

    def __init__(self, config: DeployConfig, storage: DeployStorage):
        self.config = config
        self.storage = storage

    async def run(self) -> DeployResult:
        """
        Execute the deploy.

        Any DeployError aborts the run where it is raised: a failed upload
        skips the prune phase entirely.
        """
        config = self.config
        start_time = time.time()

        await validate_bucket(self.storage, config.bucket)

        files = list_local_files(config.dist_path)

        print(f"Deploy from {config.dist_path} to {config.bucket}")
        print(f"Files to upload: {len(files)}")
        print(f"Starting in {config.start_delay:g} seconds, press Ctrl+C to abort", end="", flush=True)
        logger.info(f"DEPLOY STARTED - dist={config.dist_path} bucket={config.bucket} files={len(files)}")

        await asyncio.sleep(config.start_delay)

        uploaded = await upload_files(self.storage, config.bucket, files, config.bar_width)
        deleted = await prune_bucket(self.storage, config.bucket, [f.name for f in files], config.bar_width)

        print("\nDeployed successfully!")
        logger.info(
            f"DEPLOY COMPLETED - uploaded={len(uploaded)} deleted={len(deleted)} "
            f"elapsed={time.time() - start_time:.1f}s"
        )
        return DeployResult(uploaded=uploaded, deleted=deleted)

    async def cleanup(self) -> None:
        """Release storage resources."""
        await self.storage.close()
