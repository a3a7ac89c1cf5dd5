"""
bucket-deploy

Sync a directory of static build artifacts to an S3 bucket.
"""

__version__ = "0.1.0"
