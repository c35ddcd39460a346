#!/usr/bin/env python3
"""
cgroup Report Reader
Turns the JSON report of `oo-cgroup-read report` into flat cgroup metrics.

Scalar keys become `cgroup.<key>`. Keys ending in `.stat` hold a nested
object whose entries become `cgroup.<key>.<subkey>`. The `total_*` entries
of `memory.stat` repeat the hierarchy-wide aggregates and are dropped.
"""

import json
import logging

from metric_sources.source_result import SourceFormatError, SourceResult, SourceUnavailable

logger = logging.getLogger(__name__)

SOURCE = "cgroup"
CGROUP_REPORT_COMMAND = ["oo-cgroup-read", "report"]


def _verbatim(value):
    """Spell JSON literals the way the report did"""
    if value is True:
        return "true"
    if value is False:
        return "false"
    if value is None:
        return "null"
    return value


def parse_cgroup_report(text):
    """Flatten a cgroup report into metric name -> value

    Numbers are kept as the text the report printed them with.
    """
    try:
        report = json.loads(text, parse_int=str, parse_float=str, parse_constant=str)
    except ValueError as e:
        raise SourceFormatError(f"cgroup report is not valid JSON: {e}") from e
    if not isinstance(report, dict):
        raise SourceFormatError(f"cgroup report is a {type(report).__name__}, expected an object")

    metrics = {}
    for key, value in report.items():
        if not key.endswith(".stat"):
            metrics[f"cgroup.{key}"] = _verbatim(value)
            continue
        if not isinstance(value, dict):
            raise SourceFormatError(f"cgroup group {key} is not an object")
        for subkey, subvalue in value.items():
            if key == "memory.stat" and subkey.startswith("total_"):
                continue
            metrics[f"cgroup.{key}.{subkey}"] = _verbatim(subvalue)

    for name, value in metrics.items():
        logger.debug(f"{name} = {value}")
    return metrics


def read_cgroup_report(runner):
    try:
        result = runner.capture(CGROUP_REPORT_COMMAND)
        return SourceResult(SOURCE, parse_cgroup_report(result.stdout))
    except (SourceUnavailable, SourceFormatError) as e:
        logger.warning(f"cgroup metrics unavailable: {e}")
        return SourceResult.failed(SOURCE, e)
