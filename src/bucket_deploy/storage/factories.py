"""
Storage Factory Functions

Storage creation and credential preflight helpers.
"""

import logging
from typing import TYPE_CHECKING

import boto3
from botocore.exceptions import BotoCoreError

if TYPE_CHECKING:
    from ..run_config import DeployConfig

from .base import BucketStorage

logger = logging.getLogger(__name__)


def s3_credentials_available() -> bool:
    """Check if S3 credentials are available via boto3's credential resolution."""
    try:
        session = boto3.Session()
        credentials = session.get_credentials()
        return credentials is not None and credentials.access_key is not None
    except BotoCoreError as e:
        logger.debug(f"Credential resolution failed: {e}")
        return False


def create_storage_from_config(config: "DeployConfig") -> BucketStorage:
    """
    Create storage instance for a deploy run.

    Args:
        config: Deploy configuration carrying region and optional endpoint

    Returns:
        BucketStorage: Configured storage instance
    """
    backend = config.backend_config()
    logger.debug(f"Creating storage (region={backend.region}, endpoint_url={backend.endpoint_url})")
    return BucketStorage(backend)
