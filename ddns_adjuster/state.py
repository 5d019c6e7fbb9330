import logging

from ddns_adjuster.errors import StorageError

logger = logging.getLogger(__name__)


class IPFile:
    """The last IP successfully written to the DNS record, kept in a text file.

    The file has to exist before the first run.
    """

    def __init__(self, filename):
        self.filename = filename

    def read_stored_ip(self):
        try:
            with open(self.filename, 'r', encoding='utf-8', newline='') as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"error when getting previous ip from {self.filename} :- {e}") from e

    def write_ip(self, ip):
        try:
            with open(self.filename, 'w', encoding='utf-8', newline='') as f:
                f.write(ip)
        except OSError as e:
            raise StorageError(f"error when writing to {self.filename} :- {e}") from e
        logger.debug(f"Stored {ip} in {self.filename}")
