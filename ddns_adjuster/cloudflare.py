import logging

import requests

from ddns_adjuster.errors import NetworkError, ProviderError
from ddns_adjuster.ip import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

RECORD_TYPE = 'A'
RECORD_TTL = 120


def build_update_request(configuration, ip):
    """Body of the PUT that points the A record at ip."""
    return {
        'id': configuration.zone_identifier,
        'type': RECORD_TYPE,
        'proxied': configuration.proxy,
        'name': configuration.record_name,
        'content': ip,
        'ttl': RECORD_TTL,
    }


class CloudflareService:
    base_url = 'https://api.cloudflare.com/client/v4'

    def __init__(self, configuration, session=None, timeout=DEFAULT_TIMEOUT):
        self.configuration = configuration
        self.session = session or requests.Session()
        self.timeout = timeout
        self.headers = {
            'X-Auth-Email': configuration.auth_email,
            'X-Auth-Key': configuration.auth_key,
            'Content-Type': 'application/json',
        }

    def _records_url(self, record_id=None):
        url = f"{self.base_url}/zones/{self.configuration.zone_identifier}/dns_records"
        if record_id is not None:
            url = f"{url}/{record_id}"
        return url

    def _send(self, method, url, action, **kwargs):
        try:
            resp = self.session.request(method, url, headers=self.headers, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Failed {action}: {e}")
            raise NetworkError(f"error when {action} :- {e}") from e

        try:
            body = resp.json()
        except ValueError as e:
            raise ProviderError(
                f"error when {action} :- server returned malformed json (status {resp.status_code})",
                response=resp.text,
            ) from e
        if not isinstance(body, dict):
            raise ProviderError(f"error when {action} :- server returned unexpected json", response=body)
        return body

    def get_record_identifier(self):
        """Look up the id of the first record named configuration.record_name."""
        action = 'getting dns record identifier'
        body = self._send(
            'GET', self._records_url(), action,
            params={'name': self.configuration.record_name},
        )

        if body.get('success') is not True:
            raise ProviderError(f"error when {action} :- request rejected", response=body)

        result = body.get('result')
        if not result:
            raise ProviderError(f"error when {action} :- record not found", response=body)

        try:
            record_id = result[0]['id']
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderError(f"error when {action} :- record has no id", response=body) from e
        if not isinstance(record_id, str):
            raise ProviderError(f"error when {action} :- record has no id", response=body)
        logger.info(f"dns record id : {record_id}")
        return record_id

    def update_dns_record(self, ip, record_id):
        action = 'updating dns record'
        body = self._send(
            'PUT', self._records_url(record_id), action,
            json=build_update_request(self.configuration, ip),
        )

        if body.get('success') is not True:
            raise ProviderError(f"error when {action} {body}", response=body)

        logger.info(f"Updated {self.configuration.record_name} ({record_id}) -> {ip}")
        return body
