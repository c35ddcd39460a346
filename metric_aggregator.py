#!/usr/bin/env python3
"""
Metric Aggregator
Runs every metric source in a fixed order and merges their output into one
snapshot: an ordered dict of metric name -> value. On a name collision the
later source wins.
"""

import logging

from metric_sources.cgroup_report import read_cgroup_report
from metric_sources.memory_info import read_meminfo
from metric_sources.process_count import read_process_count
from metric_sources.procfs import PROC_DIR
from metric_sources.quota_usage import read_quota_usage
from metric_sources.system_load import read_loadavg, read_uptime

logger = logging.getLogger(__name__)


def merge_results(results):
    """Merge SourceResults in order; last write wins"""
    snapshot = {}
    for result in results:
        snapshot.update(result.metrics)
    return snapshot


class MetricAggregator:
    """Collects one snapshot per call to collect()"""

    def __init__(self, runner, proc_dir=PROC_DIR):
        self.runner = runner
        self.proc_dir = proc_dir
        self.last_results = []

    def read_sources(self):
        return [
            read_cgroup_report(self.runner),
            read_quota_usage(self.runner),
            read_process_count(self.runner),
            read_uptime(self.proc_dir),
            read_loadavg(self.proc_dir),
            read_meminfo(self.proc_dir),
        ]

    def collect(self):
        self.last_results = self.read_sources()
        snapshot = merge_results(self.last_results)
        failed = self.failed_sources()
        if failed:
            logger.warning(f"Collected {len(snapshot)} metrics; failed sources: {', '.join(failed)}")
        else:
            logger.info(f"Collected {len(snapshot)} metrics")
        return snapshot

    def failed_sources(self):
        return [result.source for result in self.last_results if not result.ok]
