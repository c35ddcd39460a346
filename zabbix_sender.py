#!/usr/bin/env python3
"""
Zabbix Transmitter
Spools a snapshot to a temporary file in zabbix_sender's input format and
hands it to the sender:

    zabbix_sender -z <server> -p <port> -i <spool file> -s <host> [-vv]

Each spool line is `<host> <metric name> <value>`. Spool files are kept in
the run directory after sending so a failed delivery can be replayed or
inspected; cleaning them up is left to the operator.
"""

import logging
import tempfile

from command_runner import COMMAND_NOT_EXECUTABLE, COMMAND_NOT_FOUND, CommandNotFound
from metric_sources.source_result import SourceUnavailable

logger = logging.getLogger(__name__)

SPOOL_PREFIX = "zabbix-sender-tmp-"
SPOOL_FAILED = 1


def format_spool_line(host, name, value):
    return f"{host} {name} {value}\n"


class ZabbixTransmitter:
    """Sends snapshots through zabbix_sender; holds no state between runs"""

    def __init__(self, config, runner):
        self.config = config
        self.runner = runner
        self.last_spool_path = None

    def write_spool(self, snapshot, verbose=False):
        """Write snapshot to a new spool file in the run directory; return its path"""
        with tempfile.NamedTemporaryFile(mode="w", prefix=SPOOL_PREFIX, dir=self.config.run_dir,
                                         delete=False, encoding="utf-8") as f:
            for name, value in snapshot.items():
                line = format_spool_line(self.config.host, name, value)
                if verbose:
                    logger.info(line.rstrip("\n"))
                f.write(line)
            return f.name

    def build_command(self, spool_path, verbose=False):
        cmd = [
            self.config.sender,
            "-z", str(self.config.server),
            "-p", str(self.config.port),
            "-i", spool_path,
            "-s", self.config.host,
        ]
        if verbose:
            cmd.append("-vv")
        return cmd

    def send(self, snapshot, verbose=False):
        """Send snapshot and return the sender's exit status (0 when sending is disabled)"""
        if not self.config.transmission_enabled:
            logger.debug("No Zabbix server configured, not sending")
            return 0

        if verbose:
            logger.info("Sending this data:")
        try:
            spool_path = self.write_spool(snapshot, verbose)
        except OSError as e:
            logger.error(f"Failed to write spool file in {self.config.run_dir}: {e}")
            return SPOOL_FAILED
        self.last_spool_path = spool_path

        cmd = self.build_command(spool_path, verbose)
        logger.info(" ".join(cmd))
        try:
            status = self.runner.call(cmd, quiet=not verbose)
        except CommandNotFound as e:
            logger.error(f"Cannot send metrics: {e}")
            return COMMAND_NOT_FOUND
        except SourceUnavailable as e:
            logger.error(f"Cannot send metrics: {e}")
            return COMMAND_NOT_EXECUTABLE

        if status != 0:
            logger.warning(f"{self.config.sender} exited with status {status}, spool kept at {spool_path}")
        else:
            logger.debug(f"Sent {len(snapshot)} metrics, spool kept at {spool_path}")
        return status
