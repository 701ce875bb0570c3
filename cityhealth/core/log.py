import logging
import os

from cityhealth.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = None, log_path: str = None):
    """Configure console and file logging for the service and scripts."""
    level = level or settings.LOG_LEVEL
    log_path = log_path or settings.APP_LOG_PATH

    log_dir = os.path.dirname(log_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(log_path, encoding="utf-8"),
        ],
        force=True,
    )
    # The transport logs every request at INFO
    logging.getLogger("elastic_transport").setLevel(logging.WARNING)
