# feedmixer/utils/logger.py
"""
Logging setup for the FeedMixer service.

loguru handles formatting, rotation and compression; this module only decides
which sinks exist and how they look in development versus production. Events
emitted by the pipelines are structured: a dotted ``event`` name bound on the
record plus free-form key/value context.
"""

import sys
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

DEFAULT_LOGGING_CONFIG: Dict[str, Any] = {
    "level": "INFO",
    "file_path": None,
    "max_file_size": "10 MB",
    "retention": "30 days",
    "debug": False,
}


class FeedMixerLogger:
    """Central logging configurator shared by every module of the service."""

    def __init__(self):
        self.is_configured = False
        self.log_file_path: Optional[Path] = None
        self.debug = False

    def configure_logging(self, config: Optional[Dict[str, Any]] = None):
        """
        Install console (and optionally file) sinks.

        Args:
            config: Logging options. Keys missing from it fall back to
                ``DEFAULT_LOGGING_CONFIG``.
        """
        settings = dict(DEFAULT_LOGGING_CONFIG)
        settings.update(config or {})
        self.debug = bool(settings.get("debug"))

        logger.remove()
        self._configure_console_handler(settings)
        if settings.get("file_path"):
            self._configure_file_handler(settings)

        self.is_configured = True
        logger.debug(f"Logging configured: {settings}")

    def _configure_console_handler(self, config: Dict[str, Any]):
        if self.debug:
            console_format = (
                "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
                "<level>{message}</level> | {extra}"
            )
            console_level = "DEBUG"
        else:
            console_format = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message} | {extra}"
            console_level = config.get("level", "INFO")

        logger.add(
            sys.stdout,
            format=console_format,
            level=console_level,
            colorize=self.debug,
            backtrace=self.debug,
            diagnose=self.debug,
        )

    def _configure_file_handler(self, config: Dict[str, Any]):
        """File sink with rotation, retention and gzip compression."""
        self.log_file_path = Path(config["file_path"])
        self.log_file_path.parent.mkdir(parents=True, exist_ok=True)

        file_format = (
            "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
            "{level: <8} | "
            "{process.id: <6} | "
            "{name}:{function}:{line} | "
            "{message} | {extra}"
        )

        logger.add(
            str(self.log_file_path),
            format=file_format,
            level=config.get("level", "INFO"),
            rotation=config.get("max_file_size", "10 MB"),
            retention=config.get("retention", "30 days"),
            compression="gz",
            enqueue=True,
            backtrace=True,
            diagnose=False,
        )

    def create_module_logger(self, module_name: str) -> Any:
        """Return a loguru logger bound to ``module_name``."""
        if not self.is_configured:
            self.configure_logging()
        return logger.bind(module=module_name)

    def log_system_startup(
        self, version: str = "1.0", config_summary: Optional[Dict[str, Any]] = None
    ):
        """Write the startup banner with the main configuration values."""
        logger.info("=" * 60)
        logger.info("FEEDMIXER STARTING")
        logger.info("=" * 60)
        logger.info(f"Version: {version}")
        logger.info(f"Debug mode: {self.debug}")

        if config_summary:
            logger.info("Configuration:")
            for key, value in config_summary.items():
                logger.info(f"  {key}: {value}")

        if self.log_file_path:
            logger.info(f"Writing logs to: {self.log_file_path}")

        logger.info("=" * 60)


_logger_instance: Optional[FeedMixerLogger] = None


def get_logger() -> FeedMixerLogger:
    """Return the process-wide configurator, configuring defaults on first use."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = FeedMixerLogger()
        _logger_instance.configure_logging()
    return _logger_instance


def setup_logging(config: Optional[Dict[str, Any]] = None) -> FeedMixerLogger:
    """Configure logging at process start and return the configurator."""
    logger_instance = get_logger()
    if config:
        logger_instance.configure_logging(config)
    return logger_instance


def get_module_logger(module_name: str) -> Any:
    """Shortcut used by library modules that only need a bound logger."""
    return logger.bind(module=module_name)
