import sys
from pathlib import Path

import pytest

# Add the project root to the path
sys.path.insert(0, str(Path(__file__).parent.parent))

from agent_config import AgentConfig
from command_runner import CommandNotFound, CommandResult

UPTIME = "350735.47 234388.90\n"
LOADAVG = "0.35 0.42 0.51 2/789 31337\n"
MEMINFO = """MemTotal:        8061068 kB
MemFree:          412344 kB
MemAvailable:    3920520 kB
Buffers:          214876 kB
Cached:          3028312 kB
SwapCached:         1200 kB
SwapTotal:       2097148 kB
SwapFree:        2085628 kB
HugePages_Total:       0
"""
CGROUP_REPORT = """{
  "cpu.cfs_quota_us": 100000,
  "memory.limit_in_bytes": 536870912,
  "memory.stat": {"cache": 1024, "rss": 2048, "total_cache": 4096, "total_rss": 8192},
  "cpuacct.stat": {"user": 77, "system": 12}
}"""
QUOTA = """Disk quotas for user 5123abc (uid 5123):
     Filesystem  blocks   quota   limit   grace   files   quota   limit   grace
      /dev/sda1      12      34      56              78      90      12
"""
PS_EL = """  PID   LWP TTY          TIME CMD
    1     1 ?        00:00:01 bash
   42    42 ?        00:00:00 httpd
   42    43 ?        00:00:00 httpd
"""


class FakeRunner:
    """Scripted CommandRunner: stdout per command name, records every call"""

    def __init__(self, outputs=None, status=0, returncodes=None, missing=()):
        self.outputs = outputs if outputs is not None else {}
        self.returncodes = returncodes or {}
        self.status = status
        self.missing = set(missing)
        self.captured = []
        self.calls = []

    def capture(self, args):
        self.captured.append(list(args))
        if args[0] in self.missing or args[0] not in self.outputs:
            raise CommandNotFound(f"{args[0]}: command not found")
        return CommandResult(args, self.returncodes.get(args[0], 0), self.outputs[args[0]])

    def call(self, args, quiet=True):
        self.calls.append((list(args), quiet))
        if args[0] in self.missing:
            raise CommandNotFound(f"{args[0]}: command not found")
        return self.status


@pytest.fixture
def fake_runner():
    return FakeRunner({
        "oo-cgroup-read": CGROUP_REPORT,
        "quota": QUOTA,
        "ps": PS_EL,
    })


@pytest.fixture
def proc_dir(tmp_path):
    proc = tmp_path / "proc"
    proc.mkdir()
    (proc / "uptime").write_text(UPTIME)
    (proc / "loadavg").write_text(LOADAVG)
    (proc / "meminfo").write_text(MEMINFO)
    return str(proc)


@pytest.fixture
def agent_dirs(tmp_path):
    run_dir = tmp_path / "run"
    log_dir = tmp_path / "log"
    run_dir.mkdir()
    return run_dir, log_dir


@pytest.fixture
def sending_config(agent_dirs):
    run_dir, log_dir = agent_dirs
    return AgentConfig(server="10.0.0.5", port="10051", run_dir=str(run_dir),
                       log_dir=str(log_dir), host="app-ns.example.com")


@pytest.fixture
def local_config(agent_dirs):
    run_dir, log_dir = agent_dirs
    return AgentConfig(run_dir=str(run_dir), log_dir=str(log_dir), host="app-ns.example.com")
