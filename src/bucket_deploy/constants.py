#!/usr/bin/env python3
"""
Constants for bucket-deploy.

Centralized constants to eliminate duplication across the codebase.
"""

# Provider defaults
DEFAULT_REGION = "eu-west-1"

# Pause before the first upload, giving the operator a window to abort
DEFAULT_START_DELAY_SECONDS = 5.0

# Progress display
DEFAULT_PROGRESS_BAR_WIDTH = 30

# Object metadata
INDEX_FILENAME = "index.html"
CACHE_CONTROL_NO_CACHE = "no-cache"
CACHE_CONTROL_IMMUTABLE = "max-age=31536000"  # one year
DEFAULT_CONTENT_TYPE = "application/octet-stream"

# S3 connection pool configuration (transfers are strictly sequential)
DEFAULT_S3_MAX_POOL_CONNECTIONS = 2
