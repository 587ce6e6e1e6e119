import inspect
import logging
import logging.handlers
import os
from typing import Any, Dict
from functools import wraps
import time

from config.settings import LOG_DIR, LOG_LEVEL, DEBUG

# Define log formats
CONSOLE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'

LIVESTREAM_LOGGER = 'livestream'

_configured = False


def _rotating_handler(filename: str, formatter: logging.Formatter) -> logging.Handler:
    # rotate at midnight, keep 30 days of logs
    handler = logging.handlers.TimedRotatingFileHandler(
        os.path.join(LOG_DIR, filename),
        when='midnight',
        interval=1,
        backupCount=30
    )
    handler.setFormatter(formatter)
    return handler


def setup_logging():
    """Configure logging for the application; later calls are no-ops"""
    global _configured
    if _configured:
        return
    _configured = True

    os.makedirs(LOG_DIR, exist_ok=True)

    # Create formatters
    console_formatter = logging.Formatter(CONSOLE_FORMAT)
    file_formatter = logging.Formatter(FILE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(console_formatter)

    # Set up root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(LOG_LEVEL)
    root_logger.addHandler(console_handler)
    root_logger.addHandler(_rotating_handler('app.log', file_formatter))

    # Separate log file for live stream sessions
    livestream_logger = logging.getLogger(LIVESTREAM_LOGGER)
    livestream_logger.setLevel(LOG_LEVEL)
    livestream_logger.addHandler(_rotating_handler('livestream.log', file_formatter))

    # Suppress logs from libraries if not in debug mode
    if not DEBUG:
        logging.getLogger('aiohttp').setLevel(logging.WARNING)
        logging.getLogger('asyncio').setLevel(logging.WARNING)
        logging.getLogger('uvicorn.access').setLevel(logging.WARNING)


class StreamLogger:
    """Logger for live stream events, stamped with stream and client context"""
    def __init__(self, stream_id: str = None, client: str = None):
        self.logger = logging.getLogger(LIVESTREAM_LOGGER)
        self.stream_id = stream_id
        self.client = client

    def _format_message(self, message: str, extra: Dict[str, Any] = None) -> str:
        """Format log message with stream and client info"""
        context = []
        if self.stream_id:
            context.append(f"stream_id={self.stream_id}")
        if self.client:
            context.append(f"client={self.client}")
        if extra:
            context.extend([f"{k}={v}" for k, v in extra.items()])

        context_str = ' '.join(context)
        return f"{message} [{context_str}]" if context_str else message

    def info(self, message: str, extra: Dict[str, Any] = None):
        self.logger.info(self._format_message(message, extra))

    def debug(self, message: str, extra: Dict[str, Any] = None):
        self.logger.debug(self._format_message(message, extra))

    def warning(self, message: str, extra: Dict[str, Any] = None):
        self.logger.warning(self._format_message(message, extra))

    def error(self, message: str, extra: Dict[str, Any] = None):
        self.logger.error(self._format_message(message, extra))


def log_timing(logger: logging.Logger = None):
    """Decorator to log function execution time"""
    def decorator(func):
        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            start_time = time.time()
            try:
                result = await func(*args, **kwargs)
                execution_time = time.time() - start_time
                (logger or logging.getLogger()).debug(
                    f"{func.__name__} completed in {execution_time:.3f}s"
                )
                return result
            except Exception as e:
                execution_time = time.time() - start_time
                (logger or logging.getLogger()).error(
                    f"{func.__name__} failed after {execution_time:.3f}s: {str(e)}"
                )
                raise

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            start_time = time.time()
            try:
                result = func(*args, **kwargs)
                execution_time = time.time() - start_time
                (logger or logging.getLogger()).debug(
                    f"{func.__name__} completed in {execution_time:.3f}s"
                )
                return result
            except Exception as e:
                execution_time = time.time() - start_time
                (logger or logging.getLogger()).error(
                    f"{func.__name__} failed after {execution_time:.3f}s: {str(e)}"
                )
                raise

        return async_wrapper if inspect.iscoroutinefunction(func) else sync_wrapper
    return decorator
