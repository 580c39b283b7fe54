"""
Logging setup for applications embedding modelcontainer.

The library only emits loguru records (binding creation at DEBUG, inverse
transform fallbacks at WARNING, dropped notifications at TRACE). Where they
end up is decided here, once, by the host application.
"""
from typing import Optional
from pathlib import Path
import sys
from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_NAME = "modelcontainer_{time}.log"


def setup_logging(debug_mode: bool = False, log_dir: Optional[str] = None) -> None:
    """
    Replace loguru's sinks with a console sink and, if `log_dir` is set, a
    rotating DEBUG file sink inside it.
    """
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if debug_mode else "INFO", format=CONSOLE_FORMAT)

    if log_dir:
        target = Path(log_dir)
        target.mkdir(parents=True, exist_ok=True)
        logger.add(target / FILE_NAME, level="DEBUG", rotation="10 MB", retention="1 week")

    logger.debug(f"modelcontainer logging ready (debug={debug_mode}, log_dir={log_dir})")


def setup_from_config(config) -> None:
    """Configure logging from an AppConfig's logging section."""
    setup_logging(debug_mode=config.logging.debug_mode, log_dir=config.logging.log_dir)
