"""
Production-grade logging configuration.

This module provides structured logging with proper formatters,
handlers, and configuration for different environments.
"""

import logging
import logging.config
import sys
from pathlib import Path
from typing import Any, Dict

from app.core.config import settings


def setup_logging() -> None:
    """
    Configure logging for the application.

    Sets up structured logging with:
    - JSON formatting for production
    - Detailed console output for development
    - File rotation for persistent logs (when LOG_TO_FILE is enabled)
    """
    formatter = "json" if settings.is_production else "detailed"
    app_handlers = ["console"]
    root_handlers = ["console"]

    handlers: Dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": "INFO" if settings.is_production else "DEBUG",
            "formatter": formatter,
            "stream": sys.stdout,
        },
    }

    log_dir = Path(settings.log_dir)
    if settings.log_to_file:
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "INFO",
            "formatter": formatter,
            "filename": log_dir / "app.log",
            "maxBytes": 10 * 1024 * 1024,  # 10MB
            "backupCount": 5,
            "encoding": "utf8",
        }
        handlers["error_file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "ERROR",
            "formatter": formatter,
            "filename": log_dir / "errors.log",
            "maxBytes": 10 * 1024 * 1024,  # 10MB
            "backupCount": 10,
            "encoding": "utf8",
        }
        app_handlers.append("file")
        root_handlers.append("error_file")

    config: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "detailed": {
                "format": (
                    "[{asctime}] {levelname:8} {name:25} {funcName:15} "
                    "{lineno:4d} | {message}"
                ),
                "style": "{",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "simple": {
                "format": "{levelname:8} | {message}",
                "style": "{",
            },
            "json": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "format": (
                    "%(asctime)s %(name)s %(levelname)s "
                    "%(funcName)s %(lineno)d %(message)s"
                ),
            },
        },
        "handlers": handlers,
        "loggers": {
            # Application loggers
            "app": {
                "level": "DEBUG" if settings.debug else "INFO",
                "handlers": app_handlers,
                "propagate": False,
            },
            # Third-party loggers
            "uvicorn.access": {
                "level": "INFO",
                "handlers": ["file"] if settings.is_production and settings.log_to_file else ["console"],
                "propagate": False,
            },
            "fastapi": {
                "level": "INFO",
                "handlers": app_handlers,
                "propagate": False,
            },
        },
        "root": {
            "level": "WARNING",
            "handlers": root_handlers,
        },
    }

    logging.config.dictConfig(config)

    # Log startup information
    logger = logging.getLogger("app")
    logger.info("=" * 50)
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Debug mode: {settings.debug}")
    if settings.log_to_file:
        logger.info(f"Log directory: {log_dir.absolute()}")
    logger.info("=" * 50)


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger for a module.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(f"app.{name.replace('app.', '')}")
