"""Process/thread count reader, reported against the nproc ulimit."""

import logging

from metric_sources.source_result import SourceFormatError, SourceResult, SourceUnavailable

logger = logging.getLogger(__name__)

SOURCE = "ulimit"
PROCESS_LIST_COMMAND = ["ps", "-eL"]


def count_processes(text):
    # One line per thread; the header line is counted too
    return len(text.splitlines())


def read_process_count(runner):
    try:
        result = runner.capture(PROCESS_LIST_COMMAND)
        if not result.success:
            raise SourceUnavailable(
                f"ps exited with status {result.returncode}: {result.stderr.strip() or 'no output'}")
    except (SourceUnavailable, SourceFormatError) as e:
        logger.warning(f"process count unavailable: {e}")
        return SourceResult.failed(SOURCE, e)
    return SourceResult(SOURCE, {"ulimit.nproc": count_processes(result.stdout)})
