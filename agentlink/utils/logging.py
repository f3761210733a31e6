"""Logging setup with structured extras"""

import logging
from typing import Union

# Attributes present on every LogRecord; anything else came from ``extra=``
_RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message", "asctime", "extras_str",
}

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s%(extras_str)s'


class SafeFormatter(logging.Formatter):
    """Formatter that appends ``extra`` fields as key=value pairs"""

    def format(self, record: logging.LogRecord) -> str:
        extras = {
            k: v for k, v in vars(record).items()
            if k not in _RESERVED and not k.startswith('_')
        }
        if extras:
            record.extras_str = ' - ' + ' - '.join(f'{k}={v}' for k, v in extras.items())
        else:
            record.extras_str = ''
        return super().format(record)


def configure_logging(level: Union[str, int] = logging.INFO) -> logging.Logger:
    """Install the safe formatter on the ``agentlink`` logger"""
    logger = logging.getLogger('agentlink')
    logger.setLevel(level)

    # Remove any existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(SafeFormatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
