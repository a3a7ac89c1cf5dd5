#!/usr/bin/env python3
"""
bucket-deploy Command Line Interface

Upload a directory of static build artifacts to an S3 bucket and remove
bucket objects that no longer exist locally.

Usage:
  python deploy.py <dist> <bucket>
"""

import sys
from pathlib import Path

# Add src directory to Python path before any local imports
sys.path.insert(0, str(Path(__file__).parent / "src"))

from bucket_deploy.cli import entry_point

if __name__ == "__main__":
    sys.exit(entry_point())
