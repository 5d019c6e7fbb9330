class DDNSError(Exception):
    """Base class for every error raised while checking or updating the record."""

    pass


class ConfigError(DDNSError):
    """The configuration file or a runtime setting is missing or malformed."""

    pass


class StorageError(DDNSError):
    """The persisted IP file could not be read or written."""

    pass


class NetworkError(DDNSError):
    """A remote endpoint could not be reached or returned an unusable body."""

    pass


class ProviderError(DDNSError):
    """Cloudflare rejected a request or answered with something unexpected."""

    def __init__(self, message, response=None):
        super().__init__(message)
        self.response = response
