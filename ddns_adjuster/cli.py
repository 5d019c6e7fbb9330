# Every path can be given as a flag or through the environment:
#
# export DDNS_ADJUSTER_CONFIG="/path/to/config.json"
# export DDNS_ADJUSTER_LOGPATH="/path/to/ddns.log"
# export DDNS_ADJUSTER_IPFILEPATH="/path/to/oldip.txt"
# ddns-adjuster
#
# The IP file must exist before the first run; updates to Cloudflare are only
# sent when the IP address changes.

import argparse
import functools
import logging
import os
import sys

import requests

from ddns_adjuster.adjuster import DNSAdjuster
from ddns_adjuster.cloudflare import CloudflareService
from ddns_adjuster.config import load_configuration
from ddns_adjuster.errors import ConfigError, DDNSError
from ddns_adjuster.ip import DEFAULT_TIMEOUT, get_external_ip
from ddns_adjuster.log import setup_logging
from ddns_adjuster.scheduler import DEFAULT_INTERVAL, Scheduler
from ddns_adjuster.state import IPFile

EXIT_OK = 0
EXIT_CYCLE_FAILED = 1
EXIT_CONFIG = 2


def _positive_number(value):
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{value!r} is not a number")
    if number <= 0:
        raise ConfigError(f"{value!r} must be greater than zero")
    return number


def parse_args(argv=None, environ=None):
    environ = os.environ if environ is None else environ
    parser = argparse.ArgumentParser(
        prog='ddns-adjuster',
        description="Point a Cloudflare A record at this host's public IPv4 address.",
    )
    parser.add_argument('--config', default=environ.get('DDNS_ADJUSTER_CONFIG', 'config.json'),
                        help="JSON file with authEmail, authKey, zoneIdentifier, recordName and proxy")
    parser.add_argument('--log-path', default=environ.get('DDNS_ADJUSTER_LOGPATH', 'ddns.log'))
    parser.add_argument('--ip-file', default=environ.get('DDNS_ADJUSTER_IPFILEPATH', 'oldip.txt'),
                        help="file holding the last IP sent to Cloudflare; must already exist")
    parser.add_argument('--interval', default=environ.get('DDNS_ADJUSTER_INTERVAL', DEFAULT_INTERVAL),
                        help="seconds between checks (default: %(default)s)")
    parser.add_argument('--timeout', default=environ.get('DDNS_ADJUSTER_TIMEOUT', DEFAULT_TIMEOUT),
                        help="HTTP timeout in seconds (default: %(default)s)")
    parser.add_argument('--once', action='store_true',
                        help="run a single check and exit, e.g. from cron")
    parser.add_argument('--halt-on-error', action='store_true',
                        help="stop at the first failed check instead of waiting for the next one")
    parser.add_argument('--run-immediately', action='store_true',
                        help="check at startup instead of after the first interval")

    args = parser.parse_args(argv)
    args.interval = _positive_number(args.interval)
    args.timeout = _positive_number(args.timeout)
    return args


def build_adjuster(configuration, ip_file, session, timeout):
    return DNSAdjuster(
        get_current_ip=functools.partial(get_external_ip, session=session, timeout=timeout),
        ip_file=IPFile(ip_file),
        cloudflare=CloudflareService(configuration, session=session, timeout=timeout),
    )


def run(args, logger):
    try:
        configuration = load_configuration(args.config)
    except ConfigError as e:
        logger.error(f"Fatal error: {e}")
        return EXIT_CONFIG

    with requests.Session() as session:
        adjuster = build_adjuster(configuration, args.ip_file, session, args.timeout)

        if args.once:
            try:
                adjuster.check_and_update()
            except DDNSError as e:
                logger.error(f"check and update failed :- {e}")
                return EXIT_CYCLE_FAILED
            except KeyboardInterrupt:
                logger.info("Stopped")
            return EXIT_OK

        scheduler = Scheduler(
            adjuster.check_and_update,
            interval=args.interval,
            halt_on_error=args.halt_on_error,
            run_immediately=args.run_immediately,
        )
        return scheduler.run()


def main(argv=None):
    try:
        args = parse_args(argv)
    except ConfigError as e:
        print(f"ddns-adjuster: {e}", file=sys.stderr)
        return EXIT_CONFIG

    try:
        logger = setup_logging(args.log_path)
    except (ConfigError, OSError) as e:
        print(f"ddns-adjuster: error opening log file :- {e}", file=sys.stderr)
        return EXIT_CONFIG
    logger.info("Starting DDNS Script")
    try:
        return run(args, logger)
    finally:
        logger.info("Ending DDNS Script")
        logging.shutdown()
