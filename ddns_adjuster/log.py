import logging

from ddns_adjuster.errors import ConfigError

LOG_FORMAT = 'DDNS SCRIPT %(asctime)s - %(levelname)s - %(message)s'


def setup_logging(log_path, level=logging.INFO):
    """Log to the append-only file at log_path and to the console.

    Returns the package logger. Call logging.shutdown() on exit to flush and
    close the file handler.
    """
    if not log_path:
        raise ConfigError("log path not set")

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(log_path, mode='a'),
            logging.StreamHandler()  # Also log to console
        ],
        force=True,
    )
    return logging.getLogger('ddns_adjuster')
