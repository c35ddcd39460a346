#!/usr/bin/env python3
"""
System Uptime and Load Reader
Reads uptime and load averages straight from procfs.

System Dependencies:
- /proc/uptime: "<uptime> <idle>"
- /proc/loadavg: "<avg1> <avg5> <avg15> <running>/<total> <last pid>"

Values are passed through as the strings the kernel printed.
"""

import logging

from metric_sources.procfs import PROC_DIR, read_proc_file
from metric_sources.source_result import SourceFormatError, SourceResult, SourceUnavailable

logger = logging.getLogger(__name__)


def _split_fields(text, name, count):
    fields = text.split()
    if len(fields) != count:
        raise SourceFormatError(f"{name} has {len(fields)} fields, expected {count}")
    return fields


def parse_uptime(text):
    uptime, _idle = _split_fields(text, "uptime", 2)
    return {"system.uptime": uptime}


def parse_loadavg(text):
    avg1, avg5, avg15, _procs, _last_pid = _split_fields(text, "loadavg", 5)
    return {
        "system.cpu.load[percpu,avg1]": avg1,
        "system.cpu.load[percpu,avg5]": avg5,
        "system.cpu.load[percpu,avg15]": avg15,
    }


def _read(source, parser, proc_dir):
    try:
        return SourceResult(source, parser(read_proc_file(proc_dir, source)))
    except (SourceUnavailable, SourceFormatError) as e:
        logger.warning(f"{source} metrics unavailable: {e}")
        return SourceResult.failed(source, e)


def read_uptime(proc_dir=PROC_DIR):
    return _read("uptime", parse_uptime, proc_dir)


def read_loadavg(proc_dir=PROC_DIR):
    return _read("loadavg", parse_loadavg, proc_dir)
