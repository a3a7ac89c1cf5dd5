#!/usr/bin/env python3
"""
Deploy CLI Interface

Command-line interface for deploying a build directory to a bucket.
"""

import argparse
import logging
import sys

from ..constants import DEFAULT_PROGRESS_BAR_WIDTH, DEFAULT_REGION, DEFAULT_START_DELAY_SECONDS
from ..errors import DeployError
from ..logging_config import setup_logging
from ..run_config import build_deploy_config_from_args
from ..storage import s3_credentials_available
from .pipeline import DeployPipeline

logger = logging.getLogger(__name__)

USAGE = """Usage: bucket-deploy <dist> <bucket>

Arguments:
<dist>        Location of directory containing the app files
<bucket>      Name of the S3 Bucket to upload files to
"""


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bucket-deploy",
        description="Upload a build directory to an S3 bucket and remove objects that no longer exist locally",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Deploy a production build
  bucket-deploy ./dist my-app-bucket

  # Deploy to a bucket in another region without the start delay
  bucket-deploy ./dist my-app-bucket --region us-east-1 --delay 0

  # Deploy to an S3-compatible endpoint (MinIO, R2)
  bucket-deploy ./dist my-app-bucket --endpoint-url http://localhost:9000
        """,
    )

    parser.add_argument("dist", nargs="?", help="Location of directory containing the app files")
    parser.add_argument("bucket", nargs="?", help="Name of the S3 Bucket to upload files to")

    parser.add_argument("--region", default=DEFAULT_REGION, help=f"Bucket region (default: {DEFAULT_REGION})")
    parser.add_argument("--endpoint-url", help="Custom S3-compatible endpoint URL")
    parser.add_argument(
        "--delay",
        type=float,
        default=DEFAULT_START_DELAY_SECONDS,
        help=f"Seconds to wait before uploading, giving time to abort (default: {DEFAULT_START_DELAY_SECONDS:g})",
    )
    parser.add_argument(
        "--bar-width",
        type=int,
        default=DEFAULT_PROGRESS_BAR_WIDTH,
        help=f"Width of the progress bar (default: {DEFAULT_PROGRESS_BAR_WIDTH})",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument("--log-file", help="Log file path (default: timestamped file in $DEPLOY_LOG_DIR or logs/)")

    return parser


def _report_failure(e: Exception) -> int:
    """Log and print a failed run, returning the exit code."""
    error_type = type(e).__name__
    if isinstance(e, DeployError):
        logger.error(f"Deploy failed: {error_type}: {e}")
    else:
        logger.exception(f"Deploy failed with unexpected error: {error_type}: {e}")
    print(f"\nDeploy failed: {error_type}: {e}", file=sys.stderr)
    return 1


async def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point for deploy runs."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.dist or not args.bucket:
        sys.stdout.write(USAGE)
        return 0

    try:
        config = build_deploy_config_from_args(args)
    except DeployError as e:
        return _report_failure(e)

    setup_logging(config.log_level, config.log_file)
    logger.info(f"Command: {' '.join(sys.argv)}")

    if not config.endpoint_url and not s3_credentials_available():
        logger.warning(
            "No S3 credentials found. Configure them via environment variables or ~/.aws/credentials"
        )

    pipeline = DeployPipeline.from_config(config)
    try:
        await pipeline.run()
    except Exception as e:
        return _report_failure(e)
    finally:
        await pipeline.cleanup()

    return 0
