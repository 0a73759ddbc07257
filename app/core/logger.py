import os
import sys
from loguru import logger
import logging

from app.core.config import Settings

LINE_FORMAT = "{time:YYYY-MM-DDTHH:mm:ss.SSS[Z]!UTC} [{level}]: {message}"
DEV_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"

class InterceptHandler(logging.Handler):
    def emit(self, record):
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())

def _is_uncaught(record) -> bool:
    return record["extra"].get("uncaught", False)

def _is_regular(record) -> bool:
    return not _is_uncaught(record)

def log_uncaught_exception(exc_type, exc_value, exc_traceback):
    """
    sys.excepthook replacement: records the exception in exceptions.log,
    then hands over to the interpreter's default hook.
    """
    if not issubclass(exc_type, KeyboardInterrupt):
        logger.bind(uncaught=True).opt(exception=(exc_type, exc_value, exc_traceback)).critical(
            f"Uncaught exception: {exc_value!r}"
        )
    sys.__excepthook__(exc_type, exc_value, exc_traceback)

def setup_logging(config: Settings):
    """
    Configure console, server.log, error.log and exceptions.log sinks.
    Safe to call again: existing sinks are replaced.
    """
    os.makedirs(config.LOG_DIR, exist_ok=True)

    # Remove default and previously added handlers
    logger.remove()

    # Console handler; development gets caller location and DEBUG lines
    if config.is_development:
        logger.add(sys.stdout, level="DEBUG", format=DEV_FORMAT)
    else:
        logger.add(sys.stdout, level="INFO", format=f"<level>{LINE_FORMAT}</level>")

    # General and error files
    logger.add(
        os.path.join(config.LOG_DIR, "server.log"),
        level="INFO",
        filter=_is_regular,
        format=LINE_FORMAT,
    )
    logger.add(
        os.path.join(config.LOG_DIR, "error.log"),
        level="ERROR",
        filter=_is_regular,
        format=LINE_FORMAT,
    )

    # Uncaught process-level exceptions
    logger.add(
        os.path.join(config.LOG_DIR, "exceptions.log"),
        level="CRITICAL",
        filter=_is_uncaught,
        format=LINE_FORMAT,
        backtrace=True,
    )
    sys.excepthook = log_uncaught_exception

    # Intercept standard logging messages (from libraries like Uvicorn)
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    # Silence noisy libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)

    return logger

# Export singleton logger
__all__ = ["logger", "setup_logging", "log_uncaught_exception"]
