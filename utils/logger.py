"""Logging configuration."""

import logging
import sys
from config.settings import settings

# Drivers that log every heartbeat or request at INFO
NOISY_LOGGERS = ("pymongo", "motor", "httpx", "httpcore", "openai", "anthropic")


def setup_logger(name: str = __name__) -> logging.Logger:
    """Set up logger with configuration."""
    level = getattr(logging, settings.log_level.upper())
    logger = logging.getLogger(name)
    logger.setLevel(level)
    
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    
    return logger


def quiet_library_loggers(level: int = logging.WARNING) -> None:
    """Raise the threshold of chatty third-party loggers."""
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level)
