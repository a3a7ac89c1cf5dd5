"""Shared test configuration utilities and fixtures."""

from pathlib import Path

import pytest

from bucket_deploy.run_config import DeployConfig
from tests.test_utils.storage_mocks import FakeBucketStorage


@pytest.fixture
def dist_dir(tmp_path) -> Path:
    """Empty build directory."""
    dist = tmp_path / "dist"
    dist.mkdir()
    return dist


@pytest.fixture
def make_dist(dist_dir):
    """Populate the build directory with the given filenames."""

    def _make(*names: str) -> Path:
        for name in names:
            (dist_dir / name).write_text(f"contents of {name}")
        return dist_dir

    return _make


@pytest.fixture
def deploy_config(dist_dir) -> DeployConfig:
    """Deploy configuration with no start delay."""
    return DeployConfig(dist_path=dist_dir, bucket="test-bucket", start_delay=0)


@pytest.fixture
def fake_storage() -> FakeBucketStorage:
    """In-memory storage holding an empty test-bucket."""
    return FakeBucketStorage(buckets={"test-bucket": []})
