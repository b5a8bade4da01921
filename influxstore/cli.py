#!/usr/bin/env python3

# -----------------------------------------------------------------------------
# Copyright (c) 2026 influxstore contributors
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
Command line entry point: push a single metric through the enabled datastores.

Examples:
  influxstore-put --config influxstore.yaml --hostname sw01 --measurement ports \\
      --tag ifName=eth0 --field ifInOctets=1234 --field ifOutOctets=U
"""

import argparse
import json
import logging
import os
import sys
from typing import Dict, List, Optional

from influxstore.config import ConfigStore, get_config
from influxstore.config.settings import EnvConfig
from influxstore.datastore import Datastore
from influxstore.datastore.base import stats_summary

FORMAT = '%(asctime)s - %(levelname)s - %(funcName)s - %(lineno)d - %(message)s'
DATEFMT = '%Y-%m-%dT%H:%M:%SZ'


def configure_logging(loglevel: str = 'INFO', logfile: Optional[str] = None) -> None:
    """Configure root logging to console or, when writable, to a file."""
    log_level = getattr(logging, loglevel.upper())

    if logfile:
        logfile_dir = os.path.dirname(logfile) if os.path.dirname(logfile) else '.'
        if os.path.exists(logfile_dir) and os.access(logfile_dir, os.W_OK):
            try:
                logging.basicConfig(filename=logfile, level=log_level,
                                    format=FORMAT, datefmt=DATEFMT)
                logging.info('Logging to file: ' + logfile)
            except OSError as e:
                logging.basicConfig(level=log_level, format=FORMAT, datefmt=DATEFMT)
                logging.error(f'Failed to configure file logging to {logfile}: {e}')
                logging.warning('Falling back to console logging only')
        else:
            logging.basicConfig(level=log_level, format=FORMAT, datefmt=DATEFMT)
            logging.error(f'Logfile directory {logfile_dir} does not exist or is not writable')
            logging.warning('Falling back to console logging only')
    else:
        logging.basicConfig(level=log_level, format=FORMAT, datefmt=DATEFMT)

    # urllib3 logs request headers at DEBUG, which include the token
    requests_level = max(log_level, logging.INFO)
    logging.getLogger("urllib3").setLevel(level=requests_level)
    logging.getLogger("influxdb_client_3").setLevel(level=log_level)


def parse_pairs(pairs: List[str]) -> Dict[str, str]:
    """Parse key=value arguments. Raises ValueError on a missing '=' or empty key."""
    result = {}
    for pair in pairs:
        key, sep, value = pair.partition('=')
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Expected key=value, got: {pair!r}")
        result[key] = value
    return result


def build_parser() -> argparse.ArgumentParser:
    env = EnvConfig()
    parser = argparse.ArgumentParser(
        description='Write one polled metric to the enabled datastores',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument('--config', type=str, default=env.config_file,
        help='Path to YAML or JSON config file. Default: INFLUXSTORE_CONFIG_FILE')
    parser.add_argument('--hostname', required=True,
        help='Hostname of the device the metric belongs to')
    parser.add_argument('--measurement', '-m', required=True,
        help='Measurement name')
    parser.add_argument('--tag', '-t', action='append', default=[], metavar='KEY=VALUE',
        help='Tag to attach, may be repeated')
    parser.add_argument('--field', '-f', action='append', default=[], metavar='KEY=VALUE',
        help='Field to write, may be repeated. Use U for an unknown value')
    parser.add_argument('--logfile', type=str, default=env.log_file,
        help='Path to log file. If not provided, logs to console only.')
    parser.add_argument('--loglevel', type=str, choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default=env.log_level.upper(),
        help='Log level for both console and file output. Default: INFO')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.loglevel, args.logfile)
    LOG = logging.getLogger(__name__)

    try:
        tags = parse_pairs(args.tag)
        fields = parse_pairs(args.field)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    config = ConfigStore.from_file(args.config) if args.config else get_config()
    datastore = Datastore.from_config(config)
    if not datastore:
        print("Error: no datastore is enabled (set influxdb2.enable)", file=sys.stderr)
        return 1

    try:
        datastore.put({'hostname': args.hostname}, args.measurement, tags, fields)
    finally:
        datastore.close()

    stats = stats_summary(datastore.get_stats())
    LOG.debug(f"Datastore statistics: {stats}")
    print(json.dumps(stats, indent=2))
    return 0


if __name__ == '__main__':
    sys.exit(main())
