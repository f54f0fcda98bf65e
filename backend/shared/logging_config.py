"""Process-wide logging setup."""

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_configured = False


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger once.

    Safe to call from both the API lifespan and the terminal runner;
    later calls only adjust the level.
    """
    global _configured
    if not _configured:
        logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
        _configured = True
    else:
        logging.getLogger().setLevel(level.upper())
