"""
Logging configuration with optional structured (JSON) output and file rotation.
"""
import logging
import logging.handlers
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict
import traceback


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        if record.exc_info:
            log_data['exception'] = {
                'type': record.exc_info[0].__name__,
                'message': str(record.exc_info[1]),
                'traceback': traceback.format_exception(*record.exc_info)
            }

        # Failure hooks attach the offending field and reason code
        for key in ('field', 'reason'):
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        return json.dumps(log_data, default=repr)


class LoggerFactory:
    """Factory for creating configured loggers."""

    ROOT_NAME = "schemaplug"

    _loggers: Dict[str, logging.Logger] = {}
    _handlers = []
    _configured = False

    @classmethod
    def configure(
        cls,
        log_dir: str = "logs",
        log_level: str = "INFO",
        enable_console: bool = True,
        enable_file: bool = False,
        enable_structured: bool = False,
        max_bytes: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 5,
        force: bool = False
    ):
        """
        Configure the library's logger hierarchy.

        Handlers are attached to the ``schemaplug`` logger, not the root
        logger. Pass ``force=True`` to replace an existing setup.
        """
        if cls._configured and not force:
            return

        base_logger = logging.getLogger(cls.ROOT_NAME)
        for handler in cls._handlers:
            base_logger.removeHandler(handler)
            handler.close()
        cls._handlers = []

        base_logger.setLevel(getattr(logging, log_level.upper()))

        if enable_structured:
            formatter = StructuredFormatter()
        else:
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )

        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(formatter)
            cls._handlers.append(console_handler)

        if enable_file:
            log_path = Path(log_dir)
            log_path.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_path / "schemaplug.log",
                maxBytes=max_bytes,
                backupCount=backup_count
            )
            file_handler.setLevel(logging.DEBUG)
            if enable_structured:
                file_handler.setFormatter(formatter)
            else:
                file_handler.setFormatter(
                    logging.Formatter(
                        '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
                    )
                )
            cls._handlers.append(file_handler)

        for handler in cls._handlers:
            base_logger.addHandler(handler)

        cls._configured = True

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Get or create a logger under the ``schemaplug`` hierarchy."""
        if not cls._configured:
            cls.configure()

        if name not in cls._loggers:
            if name == cls.ROOT_NAME or name.startswith(cls.ROOT_NAME + '.'):
                qualified = name
            else:
                qualified = f"{cls.ROOT_NAME}.{name}"
            cls._loggers[name] = logging.getLogger(qualified)

        return cls._loggers[name]


# Convenience function
def get_logger(name: str) -> logging.Logger:
    """Get a configured logger."""
    return LoggerFactory.get_logger(name)
