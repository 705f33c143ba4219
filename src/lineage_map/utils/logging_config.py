"""Logging configuration for Lineage Map."""

import logging
import logging.config
import os
import time
from typing import Optional, Dict


class LineageMapLogger:
    """Centralized logging configuration for Lineage Map."""
    
    _loggers: Dict[str, logging.Logger] = {}
    _configured = False
    
    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Get a logger instance for the given name."""
        if name not in cls._loggers:
            cls._setup_logging_if_needed()
            cls._loggers[name] = logging.getLogger(f"lineage_map.{name}")
        return cls._loggers[name]
    
    @classmethod
    def _setup_logging_if_needed(cls):
        """Set up logging configuration if not already done."""
        if not cls._configured:
            cls.setup_logging()
    
    @classmethod
    def setup_logging(
        cls,
        level: str = None,
        format_string: Optional[str] = None,
        enable_console: bool = True
    ):
        """
        Configure logging for Lineage Map.
        
        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            format_string: Custom log format string
            enable_console: Whether to log to the console (stderr)
        """
        log_level = (level or os.getenv('LINEAGE_MAP_LOG_LEVEL', 'WARNING')).upper()
        
        if not format_string:
            format_string = os.getenv(
                'LINEAGE_MAP_LOG_FORMAT',
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
        
        config = {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'standard': {
                    'format': format_string,
                    'datefmt': '%Y-%m-%d %H:%M:%S'
                }
            },
            'handlers': {},
            'loggers': {
                'lineage_map': {
                    'level': log_level,
                    'handlers': [],
                    'propagate': False
                }
            }
        }
        
        # stdout is reserved for command output (JSON), so logs go to stderr
        if enable_console:
            config['handlers']['console'] = {
                'class': 'logging.StreamHandler',
                'level': log_level,
                'formatter': 'standard',
                'stream': 'ext://sys.stderr'
            }
            config['loggers']['lineage_map']['handlers'].append('console')
        
        logging.config.dictConfig(config)
        cls._configured = True
        
        logger = logging.getLogger('lineage_map.config')
        logger.info(f"Logging configured - Level: {log_level}, Console: {enable_console}")


def get_logger(name: str) -> logging.Logger:
    """Convenience function to get a logger instance."""
    return LineageMapLogger.get_logger(name)


def log_performance(logger: logging.Logger, level: int = logging.DEBUG):
    """
    Decorator to log function performance.
    
    Args:
        logger: Logger instance to use
        level: Log level for the messages
    """
    def decorator(func):
        def wrapper(*args, **kwargs):
            start_time = time.time()
            try:
                result = func(*args, **kwargs)
                duration = time.time() - start_time
                logger.log(level, f"{func.__name__} completed in {duration:.3f}s")
                return result
            except Exception as e:
                duration = time.time() - start_time
                logger.error(f"{func.__name__} failed after {duration:.3f}s with error: {str(e)}")
                raise
        wrapper.__name__ = func.__name__
        wrapper.__doc__ = func.__doc__
        return wrapper
    return decorator
