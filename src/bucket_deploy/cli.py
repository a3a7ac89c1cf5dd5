"""CLI entry point for bucket_deploy."""

import asyncio
import sys

from .sync import main


def entry_point() -> int:
    """Console script entry point."""
    try:
        return asyncio.run(main())
    except KeyboardInterrupt:
        print("\nDeploy cancelled by user", file=sys.stderr)
        return 130
