#!/usr/bin/env python3
"""
Send Zabbix Data
Collects one snapshot of gear metrics, appends it to the local metrics log
and pushes it to the Zabbix server. Meant to be run periodically by cron;
the exit status is zabbix_sender's, so the scheduler can see failed
deliveries.
"""

import argparse
import logging
import sys

from agent_config import ConfigError, load_config
from command_runner import CommandRunner
from metric_aggregator import MetricAggregator
from metric_sources.procfs import PROC_DIR
from metrics_logger import MetricsLogger
from zabbix_sender import ZabbixTransmitter

logger = logging.getLogger(__name__)

CONFIG_ERROR = 2


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Collect gear metrics and send them to Zabbix")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="show the data being sent and run zabbix_sender with -vv")
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    parser.add_argument("--env-file", help="read settings from this .env file")
    parser.add_argument("--proc-dir", default=PROC_DIR, help="procfs mount point (default: %(default)s)")
    parser.add_argument("--no-send", action="store_true", help="collect and log metrics without sending")
    parser.add_argument("--print", dest="print_snapshot", action="store_true",
                        help="print the collected metrics to stdout")
    return parser.parse_args(argv)


def configure_logging(verbose=False, debug=False):
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(level=level, format='%(asctime)s - %(levelname)s - %(message)s')


def run_once(config, runner, proc_dir=PROC_DIR, verbose=False, send=True, print_snapshot=False):
    """One collection cycle: collect, record, transmit. Returns the send status."""
    logger.info(f"Collecting metrics for {config.host}")
    snapshot = MetricAggregator(runner, proc_dir).collect()

    if print_snapshot:
        for name, value in snapshot.items():
            print(f"{name} = {value}")

    MetricsLogger(config.log_dir).log_snapshot(snapshot)

    if not send:
        return 0
    status = ZabbixTransmitter(config, runner).send(snapshot, verbose=verbose)
    logger.info(f"Finished run for {config.host} with status {status}")
    return status


def main(argv=None):
    args = parse_args(argv)
    configure_logging(args.verbose, args.debug)

    try:
        config = load_config(args.env_file)
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return CONFIG_ERROR
    logger.debug(f"Loaded {config!r}")

    return run_once(config, CommandRunner(), proc_dir=args.proc_dir, verbose=args.verbose,
                    send=not args.no_send, print_snapshot=args.print_snapshot)


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
