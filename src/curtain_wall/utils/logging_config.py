# File: src/curtain_wall/utils/logging_config.py
"""
Logging configuration for the curtain wall designer.

Provides the standard levels plus a TRACE level for per-cell diagnostics
(merge rectangles, span walks). Output goes to the console and, when a
log directory is given, to a timestamped file.
"""

import logging
import os
import sys
from datetime import datetime
from typing import Optional


class CurtainWallLogger:
    """
    Configures logging for the designer and the pricing engine.

    Supports:
    - Standard levels (CRITICAL, ERROR, WARNING, INFO, DEBUG)
    - Custom TRACE level for cell-by-cell diagnostics
    - Console output, with optional file output
    """

    TRACE_LEVEL = 5
    logging.addLevelName(TRACE_LEVEL, "TRACE")

    @staticmethod
    def _add_trace_method():
        """Add the TRACE method to the Logger class if not already present."""
        if not hasattr(logging.Logger, 'trace'):
            def trace(self, message, *args, **kwargs):
                """Log a message with level TRACE."""
                if self.isEnabledFor(CurtainWallLogger.TRACE_LEVEL):
                    self._log(CurtainWallLogger.TRACE_LEVEL, message, args, **kwargs)
            logging.Logger.trace = trace

    @staticmethod
    def configure(
        debug_mode: bool = False,
        log_dir: Optional[str] = None,
        service_mode: bool = False
    ) -> Optional[str]:
        """
        Configure the logging system for the entire application.

        Args:
            debug_mode: If True, sets DEBUG level for all loggers
            log_dir: Directory for a log file; None logs to the console only
            service_mode: If True, console lines carry timestamps and logger names

        Returns:
            Path to the created log file, or None when logging to the console only
        """
        CurtainWallLogger._add_trace_method()

        level = logging.DEBUG if debug_mode else logging.INFO

        root_logger = logging.getLogger()
        root_logger.setLevel(level)

        if root_logger.handlers:
            root_logger.handlers.clear()

        log_file = None
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_file = os.path.join(log_dir, f"curtain_wall_{timestamp}.log")

            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            ))
            file_handler.setLevel(level)
            root_logger.addHandler(file_handler)

        console_handler = logging.StreamHandler(sys.stdout)
        if service_mode:
            console_formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
        else:
            console_formatter = logging.Formatter('%(levelname)s: %(message)s')
        console_handler.setFormatter(console_formatter)
        console_handler.setLevel(level if service_mode else logging.INFO)
        root_logger.addHandler(console_handler)

        return log_file

    @staticmethod
    def get_logger(name: str, level: Optional[int] = None):
        """
        Get a configured logger for a specific module.

        Args:
            name: Logger name, typically __name__
            level: Optional specific level for this logger

        Returns:
            A configured logger
        """
        CurtainWallLogger._add_trace_method()
        logger = logging.getLogger(name)
        if level:
            logger.setLevel(level)
        return logger


def get_logger(name: str, level: Optional[int] = None):
    """
    Get a configured logger for a specific module.

    Convenience function that delegates to CurtainWallLogger.get_logger.
    """
    return CurtainWallLogger.get_logger(name, level)
