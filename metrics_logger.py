#!/usr/bin/env python3
"""
Metrics Logger
Appends every collected snapshot to a local, human-readable log for
offline inspection. One line per metric:

    2026/10/19T08:15:02Z+0000 vm.memory.size[total] 1000
"""

import logging
import os
from datetime import datetime

logger = logging.getLogger(__name__)

LOG_FILENAME = "zagent.log"
TIMESTAMP_FORMAT = "%Y/%m/%dT%H:%M:%SZ%z"


def format_log_lines(snapshot, now):
    ts = now.strftime(TIMESTAMP_FORMAT)
    return "".join(f"{ts} {name} {value}\n" for name, value in snapshot.items())


class MetricsLogger:
    """Append-only snapshot log; a write failure never stops the run"""

    def __init__(self, log_dir, filename=LOG_FILENAME):
        self.log_dir = log_dir
        self.log_file = os.path.join(log_dir, filename)

    def log_snapshot(self, snapshot, now=None):
        """Append snapshot to the log; return False if it could not be written"""
        now = now or datetime.now().astimezone()
        try:
            os.makedirs(self.log_dir, exist_ok=True)
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(format_log_lines(snapshot, now))
        except OSError as e:
            logger.error(f"Failed to write metrics log {self.log_file}: {e}")
            return False
        return True
