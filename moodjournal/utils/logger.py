import logging
import os
import sys
from typing import Optional, Union
from flask import Flask

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Chatty libraries that only need to report problems
QUIET_LOGGERS = ('urllib3', 'werkzeug', 'sqlalchemy.engine')


def _resolve_level(target: Union[str, Flask], log_level: Optional[str]) -> int:
    if log_level is None and isinstance(target, Flask):
        log_level = target.config.get('LOG_LEVEL')
    name = (log_level or os.environ.get('LOG_LEVEL') or 'INFO').upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(target: Union[str, Flask] = "moodjournal", log_level: Optional[str] = None) -> logging.Logger:
    """
    Set up the package logger that every ``moodjournal.*`` module logs through.

    Args:
        target: Flask app (its import name is used) or a logger name
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL. Defaults to the
                   app's LOG_LEVEL, then the LOG_LEVEL environment variable,
                   then INFO. Unknown names fall back to INFO.

    Returns:
        The configured logger
    """
    logger_name = target.name if isinstance(target, Flask) else str(target)
    level = _resolve_level(target, log_level)

    logger = logging.getLogger(logger_name)
    logger.setLevel(level)

    # One stdout handler per logger, even when the factory runs repeatedly
    if not any(getattr(h, '_moodjournal', False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._moodjournal = True
        logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return logger
