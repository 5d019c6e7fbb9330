import logging

import requests

from ddns_adjuster.errors import NetworkError

logger = logging.getLogger(__name__)

CURRENT_IP_URL = 'https://ipv4.icanhazip.com/'
DEFAULT_TIMEOUT = 10


def get_external_ip(session=None, url=CURRENT_IP_URL, timeout=DEFAULT_TIMEOUT):
    """Return the body of the IP-echo service as-is.

    The service appends a newline; callers strip it before comparing.
    """
    http = session or requests
    try:
        response = http.get(url, timeout=timeout)
        response.raise_for_status()
        body = response.content.decode('ascii')
    except requests.RequestException as e:
        raise NetworkError(f"error when getting current ip :- {e}") from e
    except UnicodeDecodeError as e:
        raise NetworkError(f"error when getting current ip :- undecodable body from {url}") from e
    return body
