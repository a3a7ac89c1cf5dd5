"""
Storage Package

Async bucket storage and the factories that build it.
"""

from .base import BackendConfig, BucketStorage
from .factories import create_storage_from_config, s3_credentials_available

__all__ = [
    "BackendConfig",
    "BucketStorage",
    "create_storage_from_config",
    "s3_credentials_available",
]
