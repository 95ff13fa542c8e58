import logging
import sys
from datetime import datetime
from pathlib import Path

LOG_FORMAT = "%(levelname)s: %(asctime)s %(filename)s:%(lineno)d %(message)s"
LOG_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"

logger = logging.getLogger(__name__)


def configure_logging(log_dir: Path, level: int = logging.INFO) -> Path:
    """Send log records to stdout and to a timestamped file under ``log_dir``.

    Returns the path of the log file. Raises ``OSError`` if the directory or
    the file cannot be created.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y-%m-%d-%H-%M-%S")
    log_file = log_dir / f"server-{timestamp}.log"

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    stream_handler = logging.StreamHandler(sys.stdout)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in (stream_handler, file_handler):
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)

    logging.getLogger("botocore").setLevel(logging.WARNING)

    logger.info("Logger initialized with log file: %s", log_file)
    return log_file
