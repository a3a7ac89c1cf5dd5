import logging
import os
from datetime import datetime
from pathlib import Path

# Dependency loggers suppressed to WARNING
NOISY_LOGGERS = (
    "urllib3",
    "boto3",
    "botocore",
    "botocore.hooks",
    "botocore.endpoint",
    "botocore.credentials",
    "botocore.awsrequest",
    "botocore.regions",
    "s3transfer",
    "aioboto3",
    "aiobotocore",
)


def setup_logging(level: str = "INFO", log_file: Path | None = None, append: bool = True) -> Path:
    """
    Configure logging for deploy runs.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path (defaults to timestamped file in logs/)
        append: Whether to append to existing log file (default: True)

    Returns:
        Path of the log file in use
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    # Clear any existing handlers
    root_logger.handlers.clear()

    logging.getLogger("asyncio").setLevel(logging.INFO)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S")

    if log_file is None:
        logs_dir = Path(os.environ.get("DEPLOY_LOG_DIR", "logs"))
        logs_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = logs_dir / f"deploy_{timestamp}.log"
    else:
        log_file.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(str(log_file), mode="a" if append else "w")
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging to file: {log_file}")
    logger.info(f"Logging initialized at {level} level")
    return log_file
