#!/usr/bin/env python3
"""
Command Runner
Runs the external utilities the agent depends on (oo-cgroup-read, quota,
ps, zabbix_sender) behind one small interface, so collection and sending
can be exercised with a fake runner instead of real system tools.
"""

import logging
import subprocess

from metric_sources.source_result import SourceFormatError, SourceUnavailable

logger = logging.getLogger(__name__)

# Exit statuses a shell reports for a missing or non-executable command
COMMAND_NOT_FOUND = 127
COMMAND_NOT_EXECUTABLE = 126


class CommandNotFound(SourceUnavailable):
    """The executable for a command is not installed or not on PATH."""


class CommandResult:
    """Captured outcome of one command"""

    def __init__(self, args, returncode, stdout="", stderr=""):
        self.args = list(args)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr

    @property
    def success(self):
        return self.returncode == 0


class CommandRunner:
    """Runs commands synchronously; no timeouts, the scheduler owns those"""

    def capture(self, args):
        """Run a command and return its captured output

        Raises SourceUnavailable if the command cannot be started and
        SourceFormatError if its stdout is not valid UTF-8 text.
        """
        logger.debug(f"Running command: {' '.join(args)}")
        try:
            result = subprocess.run(args, capture_output=True)
        except FileNotFoundError as e:
            raise CommandNotFound(f"{args[0]}: command not found") from e
        except OSError as e:
            raise SourceUnavailable(f"{args[0]}: {e}") from e
        try:
            stdout = result.stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SourceFormatError(f"{args[0]} output is not valid text: {e}") from e
        stderr = result.stderr.decode("utf-8", errors="replace")
        return CommandResult(args, result.returncode, stdout, stderr)

    def call(self, args, quiet=True):
        """Run a command and return its exit status

        When quiet, stdout and stderr go to /dev/null; otherwise the command
        writes straight to the agent's own streams.
        """
        logger.debug(f"Calling command: {' '.join(args)}")
        stream = subprocess.DEVNULL if quiet else None
        try:
            result = subprocess.run(args, stdout=stream, stderr=stream)
        except FileNotFoundError as e:
            raise CommandNotFound(f"{args[0]}: command not found") from e
        except OSError as e:
            raise SourceUnavailable(f"{args[0]}: {e}") from e
        return result.returncode
