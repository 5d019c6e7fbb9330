import enum
import logging

logger = logging.getLogger(__name__)


class Outcome(enum.Enum):
    UNCHANGED = 'unchanged'
    UPDATED = 'updated'


class DNSAdjuster:
    """One check-and-update cycle.

    Resolve the current IP, compare it with the stored one and, when they
    differ, locate the record, update it and store the new IP. Any step that
    fails raises a DDNSError and leaves the stored IP untouched.
    """

    def __init__(self, get_current_ip, ip_file, cloudflare):
        self.get_current_ip = get_current_ip
        self.ip_file = ip_file
        self.cloudflare = cloudflare

    def check_and_update(self):
        current_ip = self.get_current_ip().strip()
        logger.info(f"Current public ipv4 address :- {current_ip}")

        previous_ip = self.ip_file.read_stored_ip().strip()
        logger.info(f"Previous public ipv4 address :- {previous_ip}")

        if current_ip == previous_ip:
            logger.info("both current and previous ip addresses are the same, nothing to do")
            return Outcome.UNCHANGED

        record_id = self.cloudflare.get_record_identifier()
        self.cloudflare.update_dns_record(current_ip, record_id)
        self.ip_file.write_ip(current_ip)
        logger.info(f"IP updated from {previous_ip} to {current_ip}")
        return Outcome.UPDATED
