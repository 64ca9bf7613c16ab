# Path: ikea_api/core/logger.py
"""
IKEA API Module Logger

Centralized logging configuration for the ikea_api module.

Architecture:
- Component-based logging (core, engine, cli, tools)
- File and console output
- Configurable log levels
- IPO (Input-Process-Output) logging support
"""

import logging
from typing import Optional

from ikea_api.core.config_loader import ConfigLoader
from ikea_api.constants import (
    LOG_FORMAT,
    LOG_DATE_FORMAT,
    LOGGER_ROOT,
    LOGGER_CORE,
    LOGGER_ENGINE,
    LOGGER_CLI,
    LOGGER_TOOLS,
    ACTIVITY_LOG_FILE,
    HTTP_LOG_FILE,
    ERROR_LOG_FILE,
)


COMPONENT_LOGGERS: dict[str, str] = {
    'core': LOGGER_CORE,
    'engine': LOGGER_ENGINE,
    'cli': LOGGER_CLI,
    'tools': LOGGER_TOOLS,
}

# Modules whose records also go to the HTTP-call log
HTTP_LOG_MODULES: tuple[str, ...] = (
    'ikea_api.engine.transport_pool',
    'ikea_api.engine.protocol_handlers',
)


class IkeaApiLogger:
    """
    Centralized logger for the ikea_api module.

    Provides component-specific loggers with unified configuration.

    Example:
        logger = get_logger(__name__, 'engine')
        logger.info("[INPUT] Fetching metadata for 00346735")
        logger.info("[PROCESS] Cache miss, requesting catalog")
        logger.info("[OUTPUT] Metadata cached")
    """

    def __init__(self, config: Optional[ConfigLoader] = None):
        """
        Initialize module logger.

        Args:
            config: Optional ConfigLoader instance
        """
        self.config = config
        self._configured = False

    def configure(self) -> None:
        """Configure logging system for the ikea_api module."""
        if self._configured:
            return

        if self.config is None:
            self.config = ConfigLoader()

        log_dir = self.config.get('log_dir')
        log_level = self.config.get('log_level', 'INFO')
        console_output = self.config.get('log_console', True)
        level = getattr(logging, str(log_level).upper(), logging.INFO)
        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

        logger = logging.getLogger(LOGGER_ROOT)
        logger.setLevel(level)
        _close_handlers(logger)

        http_loggers = [self.get_logger(name, 'engine') for name in HTTP_LOG_MODULES]
        for http_logger in http_loggers:
            _close_handlers(http_logger)
            http_logger.setLevel(logging.NOTSET)

        if log_dir:
            log_dir.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_dir / ACTIVITY_LOG_FILE)
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

            # Outbound HTTP traffic also goes to its own file, at DEBUG
            http_handler = logging.FileHandler(log_dir / HTTP_LOG_FILE)
            http_handler.setLevel(logging.DEBUG)
            http_handler.setFormatter(formatter)
            for http_logger in http_loggers:
                http_logger.setLevel(logging.DEBUG)
                http_logger.addHandler(http_handler)

            error_handler = logging.FileHandler(log_dir / ERROR_LOG_FILE)
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(formatter)
            logger.addHandler(error_handler)

        if console_output:
            console_handler = logging.StreamHandler()
            console_handler.setLevel(level)
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

        self._configured = True

    def get_logger(self, name: str, component: str = 'core') -> logging.Logger:
        """
        Get logger for specific component.

        Args:
            name: Module name (typically __name__)
            component: Component type ('core', 'engine', 'cli', 'tools')

        Returns:
            Logger instance
        """
        prefix = COMPONENT_LOGGERS.get(component, LOGGER_ROOT)
        return logging.getLogger(f"{prefix}.{name}")


def _close_handlers(logger: logging.Logger) -> None:
    """Detach and close every handler on a logger."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


# Global logger instance
_module_logger = IkeaApiLogger()


def get_logger(name: str, component: str = 'core') -> logging.Logger:
    """
    Get logger for an ikea_api component.

    Loggers are returned unconfigured; handlers are attached once by
    configure_logging(), normally called from the CLI entry point or by
    the embedding application.

    Example:
        from ikea_api.core.logger import get_logger

        logger = get_logger(__name__, 'engine')
        logger.info("[INPUT] Starting search")
    """
    return _module_logger.get_logger(name, component)


def configure_logging(config: Optional[ConfigLoader] = None) -> None:
    """
    Configure ikea_api logging system.

    Call this once at application start.

    Args:
        config: Optional ConfigLoader instance
    """
    global _module_logger

    if config:
        _module_logger = IkeaApiLogger(config)

    _module_logger.configure()


__all__ = ['get_logger', 'configure_logging', 'IkeaApiLogger', 'HTTP_LOG_MODULES']
