#!/usr/bin/env python3
"""
Quota Usage Reader
Parses `quota -vw` output into the home filesystem quota metrics.

Data rows start with the filesystem path:

    Filesystem  blocks   quota   limit   grace   files   quota   limit   grace
     /dev/sda1      12      34      56              78      90      12

The grace columns are only printed when the usage column before them is
over the soft quota, which quota marks with a trailing `*`. Rows are parsed
by name rather than by raw position so the optional grace columns cannot
shift the limits out of place.
"""

import logging

from metric_sources.source_result import SourceFormatError, SourceResult, SourceUnavailable

logger = logging.getLogger(__name__)

SOURCE = "quota"
QUOTA_COMMAND = ["quota", "-vw"]
OVER_QUOTA_MARKER = "*"


def _take_usage(fields, line):
    """Pop one usage/quota/limit[/grace] group off the front of fields"""
    if len(fields) < 3:
        raise SourceFormatError(f"quota row is missing columns: {line!r}")
    used, _quota, limit = fields[:3]
    del fields[:3]
    if used.endswith(OVER_QUOTA_MARKER):
        used = used.rstrip(OVER_QUOTA_MARKER)
        if not fields:
            raise SourceFormatError(f"quota row is missing a grace column: {line!r}")
        del fields[0]
    return used, limit


def parse_quota_row(line):
    """Parse one data row into the four home quota metrics"""
    fields = line.split()
    fields.pop(0)  # filesystem
    blocks_used, blocks_limit = _take_usage(fields, line)
    inodes_used, inodes_limit = _take_usage(fields, line)
    if fields:
        raise SourceFormatError(f"quota row has unexpected extra columns: {line!r}")
    return {
        "quota.home.blocks_used": blocks_used,
        "quota.home.blocks_limit": blocks_limit,
        "quota.home.inodes_used": inodes_used,
        "quota.home.inodes_limit": inodes_limit,
    }


def parse_quota_output(text):
    """Return the metrics of the last filesystem row, or {} if there is none

    Every data row replaces the previous one; with several quota-managed
    filesystems the last listed wins.
    """
    metrics = {}
    for line in text.splitlines():
        if not line.lstrip().startswith("/"):
            continue
        metrics = parse_quota_row(line)
    return metrics


def read_quota_usage(runner):
    try:
        # quota exits non-zero when over quota; the report is still valid
        result = runner.capture(QUOTA_COMMAND)
        metrics = parse_quota_output(result.stdout)
        if not metrics and not result.success:
            raise SourceUnavailable(
                f"quota exited with status {result.returncode}: {result.stderr.strip() or 'no output'}")
        return SourceResult(SOURCE, metrics)
    except (SourceUnavailable, SourceFormatError) as e:
        logger.warning(f"quota metrics unavailable: {e}")
        return SourceResult.failed(SOURCE, e)
