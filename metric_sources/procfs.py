"""Shared procfs file access for the /proc based readers."""

import os

from metric_sources.source_result import SourceFormatError, SourceUnavailable

PROC_DIR = "/proc"


def read_proc_file(proc_dir, name):
    """Return the contents of a procfs file

    Raises SourceUnavailable if it cannot be read and SourceFormatError if
    it is not valid UTF-8 text.
    """
    path = os.path.join(proc_dir, name)
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise SourceFormatError(f"{path} is not valid text: {e}") from e
    except OSError as e:
        raise SourceUnavailable(f"cannot read {path}: {e}") from e
