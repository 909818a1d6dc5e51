import inspect
import logging
import re
import sys
import time
from contextvars import ContextVar, Token
from functools import wraps
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Callable, Optional

# Correlation ID of the model call currently in flight
correlation_id_var: ContextVar[Optional[str]] = ContextVar('correlation_id', default=None)

# Groq keys start with gsk_, bearer tokens come from the auth proxy
SECRET_PATTERNS = [
    (re.compile(r'(api[_-]?key\s*[=:]\s*)["\']?[\w-]{20,}["\']?', re.IGNORECASE), r'\1***MASKED***'),
    (re.compile(r'gsk_[A-Za-z0-9]{20,}'), '***MASKED***'),
    (re.compile(r'(bearer\s+)[\w.-]{20,}', re.IGNORECASE), r'\1***MASKED***'),
    (re.compile(r'(authorization\s*[=:]\s*)["\']?[\w.-]{20,}["\']?', re.IGNORECASE), r'\1***MASKED***'),
]

BASE_DIR = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = BASE_DIR / "logs"
LOG_FORMAT = "%(asctime)s - [%(correlation_id)s] - %(name)s - %(levelname)s - %(message)s"


def mask_secrets(text: str) -> str:
    """Mask API keys and tokens in text."""
    for pattern, replacement in SECRET_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


class SecretMaskingFilter(logging.Filter):
    """Masks secrets in the message and its string arguments."""

    def filter(self, record):
        if isinstance(record.msg, str):
            record.msg = mask_secrets(record.msg)
        if record.args and isinstance(record.args, tuple):
            record.args = tuple(
                mask_secrets(arg) if isinstance(arg, str) else arg
                for arg in record.args
            )
        return True


class CorrelationIdFilter(logging.Filter):
    """Injects the current correlation ID into every record."""

    def filter(self, record):
        record.correlation_id = correlation_id_var.get() or "N/A"
        return True


class ColorFormatter(logging.Formatter):
    """Colours console output by level."""

    grey = "\x1b[38;20m"
    yellow = "\x1b[33;20m"
    red = "\x1b[31;20m"
    bold_red = "\x1b[31;1m"
    reset = "\x1b[0m"

    FORMATS = {
        logging.DEBUG: grey + LOG_FORMAT + reset,
        logging.INFO: grey + LOG_FORMAT + reset,
        logging.WARNING: yellow + LOG_FORMAT + reset,
        logging.ERROR: red + LOG_FORMAT + reset,
        logging.CRITICAL: bold_red + LOG_FORMAT + reset
    }

    def format(self, record):
        formatter = logging.Formatter(self.FORMATS.get(record.levelno), datefmt="%Y-%m-%d %H:%M:%S")
        return formatter.format(record)


def setup_logger(name: str = "app", log_level: int = logging.INFO, clear_log: bool = False,
                 log_to_file: bool = True) -> logging.Logger:
    """
    Sets up the application logger with a coloured console handler and a rotating file handler.

    Args:
        name: Logger name; module loggers under it propagate here
        log_level: Logging level
        clear_log: If True, truncates logs/app.log first
        log_to_file: If False, only the console handler is attached
    """
    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Handlers are attached once per process
    if logger.handlers:
        return logger

    correlation_filter = CorrelationIdFilter()
    secret_filter = SecretMaskingFilter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(ColorFormatter())
    console_handler.addFilter(correlation_filter)
    console_handler.addFilter(secret_filter)
    logger.addHandler(console_handler)

    if log_to_file:
        LOGS_DIR.mkdir(exist_ok=True)
        log_file = LOGS_DIR / "app.log"
        if clear_log and log_file.exists():
            log_file.write_text("")

        # Rotate after 5MB, keep 5 backups
        file_handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=5, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        file_handler.addFilter(correlation_filter)
        file_handler.addFilter(secret_filter)
        logger.addHandler(file_handler)

    return logger


def set_correlation_id(correlation_id: Optional[str]) -> Token:
    """Set the correlation ID for the current context. Returns a token for reset_correlation_id."""
    return correlation_id_var.set(correlation_id)


def reset_correlation_id(token: Token) -> None:
    """Restore the correlation ID that was active before set_correlation_id."""
    correlation_id_var.reset(token)


def get_correlation_id() -> Optional[str]:
    """Get the correlation ID for the current context."""
    return correlation_id_var.get()


logger = logging.getLogger(__name__)


def log_execution_time(func: Callable[..., Any]) -> Callable[..., Any]:
    """Logs how long a function (sync or async) took, including on failure."""
    if inspect.iscoroutinefunction(func):
        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                logger.error(f"Error in {func.__name__} after {time.perf_counter() - start_time:.4f} seconds: {e}")
                raise
            finally:
                logger.info(f"{func.__name__} took {time.perf_counter() - start_time:.4f} seconds")
        return async_wrapper

    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        try:
            return func(*args, **kwargs)
        except Exception as e:
            logger.error(f"Error in {func.__name__} after {time.perf_counter() - start_time:.4f} seconds: {e}")
            raise
        finally:
            logger.info(f"{func.__name__} took {time.perf_counter() - start_time:.4f} seconds")
    return wrapper
