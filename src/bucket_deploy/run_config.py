#!/usr/bin/env python3
"""
Run Configuration Management

Configuration for a single deploy run, built once at startup from CLI arguments.
"""

from argparse import Namespace
from dataclasses import dataclass
from pathlib import Path

from .constants import DEFAULT_PROGRESS_BAR_WIDTH, DEFAULT_REGION, DEFAULT_START_DELAY_SECONDS
from .errors import ConfigurationError
from .storage.base import BackendConfig


@dataclass
class DeployConfig:
    """Settings for one deploy run."""

    dist_path: Path
    bucket: str
    region: str = DEFAULT_REGION
    endpoint_url: str | None = None
    start_delay: float = DEFAULT_START_DELAY_SECONDS
    bar_width: int = DEFAULT_PROGRESS_BAR_WIDTH
    log_level: str = "INFO"
    log_file: Path | None = None

    def validate(self) -> None:
        """Raise ConfigurationError if any setting is unusable."""
        if not self.bucket:
            raise ConfigurationError("Bucket name must not be empty")
        if not self.region:
            raise ConfigurationError("Region must not be empty")
        if self.start_delay < 0:
            raise ConfigurationError(f"Start delay must not be negative (got {self.start_delay})")
        if self.bar_width < 1:
            raise ConfigurationError(f"Progress bar width must be at least 1 (got {self.bar_width})")

    def backend_config(self) -> BackendConfig:
        """Provider settings passed to the storage constructor."""
        if self.endpoint_url:
            return BackendConfig.s3_compatible(self.endpoint_url, region=self.region)
        return BackendConfig.s3(region=self.region)


def build_deploy_config_from_args(args: Namespace) -> DeployConfig:
    """Build a validated DeployConfig from parsed CLI arguments."""
    config = DeployConfig(
        dist_path=Path(args.dist),
        bucket=args.bucket,
        region=getattr(args, "region", DEFAULT_REGION),
        endpoint_url=getattr(args, "endpoint_url", None),
        start_delay=getattr(args, "delay", DEFAULT_START_DELAY_SECONDS),
        bar_width=getattr(args, "bar_width", DEFAULT_PROGRESS_BAR_WIDTH),
        log_level=getattr(args, "log_level", "INFO"),
        log_file=Path(args.log_file) if getattr(args, "log_file", None) else None,
    )
    config.validate()
    return config
