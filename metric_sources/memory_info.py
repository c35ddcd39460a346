"""
Memory reader for /proc/meminfo.

Only six fields are reported; anything else the kernel adds is ignored.
"""

import logging

from metric_sources.procfs import PROC_DIR, read_proc_file
from metric_sources.source_result import SourceFormatError, SourceResult, SourceUnavailable

logger = logging.getLogger(__name__)

SOURCE = "meminfo"

MEMINFO_METRICS = {
    "MemTotal": "vm.memory.size[total]",
    "MemFree": "vm.memory.size[free]",
    "Buffers": "vm.memory.size[buffers]",
    "Cached": "vm.memory.size[cached]",
    "SwapTotal": "system.swap.size[,total]",
    "SwapFree": "system.swap.size[,free]",
}


def parse_meminfo(text):
    """Map the recognised `Key: value unit` lines to metric names"""
    metrics = {}
    for line in text.splitlines():
        parts = line.split()
        if len(parts) < 2:
            continue
        name = MEMINFO_METRICS.get(parts[0].rstrip(":"))
        if name:
            metrics[name] = parts[1]
    return metrics


def read_meminfo(proc_dir=PROC_DIR):
    try:
        return SourceResult(SOURCE, parse_meminfo(read_proc_file(proc_dir, SOURCE)))
    except (SourceUnavailable, SourceFormatError) as e:
        logger.warning(f"memory metrics unavailable: {e}")
        return SourceResult.failed(SOURCE, e)
