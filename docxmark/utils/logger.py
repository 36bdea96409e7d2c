"""
Handles configuration of logging for the main process and for
multiprocessing workers.
"""
import logging
import sys
import os
import io
from pathlib import Path
from datetime import datetime

LOGGER_NAME = "docxmark"

# Default log folder, relative to the working directory; `--log-dir` overrides it
LOG_DIR = Path("logs")
LOG_FILE_PREFIX = "docxmark_"
MAX_LOG_FILES = 20
CONSOLE_LOG_FORMAT = "%(levelname)s: %(message)s"
FILE_LOG_FORMAT = (
    "%(asctime)s [%(process)d] %(levelname)s - [%(module)s:%(lineno)d] - %(message)s"
)


def setup_main_logger(console_level=logging.ERROR, log_dir: Path | None = None):
    """
    Configures the application logger for the main process.

    Console output is written at `console_level`, and every record is
    written at DEBUG level to a new, timestamped log file. Old log files
    are rotated so that at most MAX_LOG_FILES remain.
    """
    log_dir = Path(log_dir) if log_dir is not None else LOG_DIR
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    # A second setup in the same process (e.g. repeated run_cli calls) replaces
    # the handlers and releases the previous log file
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # --- Console Handler ---
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_LOG_FORMAT))
    logger.addHandler(console_handler)

    # --- File Handler (Rotation and New File) ---
    try:
        log_dir.mkdir(parents=True, exist_ok=True)

        # Oldest first
        logs = sorted(
            [p for p in log_dir.glob(f"{LOG_FILE_PREFIX}*.log") if p.is_file()],
            key=os.path.getmtime,
        )

        files_to_remove = len(logs) - (MAX_LOG_FILES - 1)
        if files_to_remove > 0:
            for log_file in logs[:files_to_remove]:
                try:
                    log_file.unlink()
                except OSError:
                    pass  # locked by another process

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        new_log_path = log_dir / f"{LOG_FILE_PREFIX}{timestamp}.log"

        file_handler = logging.FileHandler(new_log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

        logger.info(
            "Main logger initialized. Console level: %s, File level: DEBUG. Logging to: %s",
            logging.getLevelName(console_level),
            new_log_path,
        )
    except OSError:
        logger.error("Failed to set up file logging.", exc_info=True)

    return logger


def setup_worker_logger():
    """
    Configures a temporary, in-memory logger for a child process.

    Returns:
        tuple[io.StringIO, logging.Handler]:
            - The string buffer that will capture logs.
            - The handler attached to the logger.
    (Both must be closed by the caller)
    """
    log_stream = io.StringIO()

    handler = logging.StreamHandler(log_stream)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, datefmt="%H:%M:%S"))

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()  # Remove any handlers inherited from parent
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    return log_stream, handler
