#!/usr/bin/env python3
"""
Logging configuration for dipscan
Console output plus rotating log files for the run and its errors
"""

import json
import logging
import logging.handlers
import traceback
from datetime import datetime
from pathlib import Path
from typing import Optional


class EnhancedLogger:
    """Configures the root logger for a scan run"""

    def __init__(self, app_name="dipscan", logs_dir="logs", console_level="WARNING"):
        self.app_name = app_name
        self.logs_dir = Path(logs_dir)
        self.console_level = logging.getLevelName(console_level)
        if not isinstance(self.console_level, int):
            self.console_level = logging.WARNING
        self.setup_logging()

    def setup_logging(self):
        """Setup console and file handlers"""

        self.logs_dir.mkdir(parents=True, exist_ok=True)

        root_logger = logging.getLogger()
        root_logger.setLevel(min(logging.INFO, self.console_level))

        # Clear existing handlers
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()

        # Console handler
        console_handler = logging.StreamHandler()
        console_handler.setLevel(self.console_level)
        console_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        root_logger.addHandler(console_handler)

        # File handler for general logs
        file_handler = logging.handlers.RotatingFileHandler(
            self.logs_dir / f"{self.app_name}.log",
            maxBytes=10*1024*1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
        ))
        root_logger.addHandler(file_handler)

        # Error log handler
        error_handler = logging.handlers.RotatingFileHandler(
            self.logs_dir / "errors.log",
            maxBytes=5*1024*1024,  # 5MB
            backupCount=10,
            encoding='utf-8'
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(logging.Formatter(
            '%(asctime)s - ERROR - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
        ))
        root_logger.addHandler(error_handler)

        # aiodns/pycares are chatty at debug level
        logging.getLogger('asyncio').setLevel(logging.WARNING)

        self.logger = logging.getLogger(self.app_name)
        self.logger.info(f"Logging initialized for {self.app_name}")
        self.logger.info(f"Log files: {self.logs_dir.absolute()}")

    def log_error(self, error: BaseException, context: Optional[str] = None):
        """Log a fatal error with its context as a JSON record"""
        error_data = {
            'timestamp': datetime.now().isoformat(),
            'error_type': type(error).__name__,
            'error_message': str(error),
            'context': context,
            'traceback': ''.join(traceback.format_exception(type(error), error, error.__traceback__)),
        }
        logging.getLogger(f"{self.app_name}.errors").error(json.dumps(error_data))


# Global logger instance
enhanced_logger = None


def init_enhanced_logging(app_name="dipscan", logs_dir="logs", console_level="WARNING"):
    """Initialize logging globally"""
    global enhanced_logger
    enhanced_logger = EnhancedLogger(app_name, logs_dir, console_level)
    return enhanced_logger


def get_enhanced_logger():
    """Get the global logger instance"""
    return enhanced_logger
