#!/usr/bin/env python3
"""
Deploy Sync Module

Upload/prune reconciliation of a local build directory against a bucket.
"""

from .__main__ import main
from .operations import plan_prune, prune_bucket, upload_files, validate_bucket
from .pipeline import DeployPipeline

__all__ = [
    # Pipeline orchestration
    "main",
    "DeployPipeline",
    # Operations
    "validate_bucket",
    "upload_files",
    "plan_prune",
    "prune_bucket",
]
