"""
Metric source readers.

Each module reads one data source and returns a SourceResult:
- cgroup_report.py: cgroup accounting from `oo-cgroup-read report` (JSON)
- quota_usage.py: home filesystem quota from `quota -vw`
- process_count.py: process/thread count from `ps -eL`
- system_load.py: uptime and load averages from /proc/uptime and /proc/loadavg
- memory_info.py: memory and swap sizes from /proc/meminfo

Readers never raise for a missing subsystem; a failed SourceResult carries
the error and no metrics.
"""
