import json
import logging
from dataclasses import dataclass

from ddns_adjuster.errors import ConfigError

logger = logging.getLogger(__name__)

# JSON key -> (attribute, expected type)
FIELDS = {
    'authEmail': ('auth_email', str),
    'authKey': ('auth_key', str),
    'zoneIdentifier': ('zone_identifier', str),
    'recordName': ('record_name', str),
    'proxy': ('proxy', bool),
}


@dataclass(frozen=True)
class Configuration:
    """Credentials and record data read from config.json."""

    auth_email: str
    auth_key: str
    zone_identifier: str
    record_name: str
    proxy: bool

    def __repr__(self):
        # keep the secrets out of log lines
        return (f"Configuration(zone_identifier={self.zone_identifier!r}, "
                f"record_name={self.record_name!r}, proxy={self.proxy!r})")


def parse_configuration(data):
    if not isinstance(data, dict):
        raise ConfigError("config must be a JSON object")

    missing = [key for key in FIELDS if key not in data]
    if missing:
        raise ConfigError(f"config is missing required keys: {', '.join(missing)}")

    values = {}
    for key, (attribute, expected) in FIELDS.items():
        value = data[key]
        if not isinstance(value, expected):
            raise ConfigError(f"config key {key!r} must be of type {expected.__name__}")
        values[attribute] = value
    return Configuration(**values)


def load_configuration(path):
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigError(f"error opening {path} :- {e}") from e
    except ValueError as e:
        raise ConfigError(f"error decoding {path} :- {e}") from e

    configuration = parse_configuration(data)
    logger.debug(f"Loaded {configuration!r} from {path}")
    return configuration
