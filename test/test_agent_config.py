import os

import pytest

from agent_config import AgentConfig, ConfigError, load_config


def test_from_env_derives_dirs_from_agent_dir():
    config = AgentConfig.from_env({
        "ZABBIX_SERVER_IP": "10.0.0.5",
        "ZABBIX_SERVER_PORT": "10051",
        "OPENSHIFT_ZABBIX_AGENT_DIR": "/var/lib/zagent",
        "OPENSHIFT_GEAR_DNS": "app-ns.example.com",
    })
    assert config.transmission_enabled
    assert config.port == 10051
    assert config.run_dir == os.path.join("/var/lib/zagent", "run")
    assert config.log_dir == os.path.join("/var/lib/zagent", "log")
    assert config.host == "app-ns.example.com"
    assert config.sender == "zabbix_sender"


def test_explicit_dirs_override_agent_dir():
    config = AgentConfig.from_env({
        "OPENSHIFT_ZABBIX_AGENT_DIR": "/var/lib/zagent",
        "ZABBIX_RUN_DIR": "/tmp/spool",
        "ZABBIX_LOG_DIR": "/tmp/logs",
        "ZABBIX_SENDER": "/opt/zabbix/bin/zabbix_sender",
    })
    assert config.run_dir == "/tmp/spool"
    assert config.log_dir == "/tmp/logs"
    assert config.sender == "/opt/zabbix/bin/zabbix_sender"


@pytest.mark.parametrize("env", [
    {"ZABBIX_SERVER_IP": "10.0.0.5"},
    {"ZABBIX_SERVER_PORT": "10051"},
    {"ZABBIX_SERVER_IP": "", "ZABBIX_SERVER_PORT": ""},
])
def test_server_and_port_both_required_to_send(env):
    env = dict(env, ZABBIX_LOG_DIR="/tmp/logs")
    assert not AgentConfig.from_env(env).transmission_enabled


def test_host_defaults_to_hostname(monkeypatch):
    monkeypatch.setattr("socket.gethostname", lambda: "gear-host")
    assert AgentConfig.from_env({"ZABBIX_LOG_DIR": "/tmp/logs"}).host == "gear-host"


@pytest.mark.parametrize("port", ["zabbix", "0", "70000"])
def test_bad_port_rejected(port):
    with pytest.raises(ConfigError):
        AgentConfig.from_env({"ZABBIX_SERVER_IP": "10.0.0.5", "ZABBIX_SERVER_PORT": port,
                              "OPENSHIFT_ZABBIX_AGENT_DIR": "/var/lib/zagent"})


def test_log_dir_required():
    with pytest.raises(ConfigError):
        AgentConfig.from_env({})


def test_run_dir_required_only_when_sending():
    AgentConfig.from_env({"ZABBIX_LOG_DIR": "/tmp/logs"})
    with pytest.raises(ConfigError):
        AgentConfig.from_env({"ZABBIX_LOG_DIR": "/tmp/logs", "ZABBIX_SERVER_IP": "10.0.0.5",
                              "ZABBIX_SERVER_PORT": "10051"})


def test_load_config_reads_env_file(tmp_path, monkeypatch):
    # setenv first so the values load_dotenv writes are undone afterwards
    for name in ("ZABBIX_SERVER_IP", "ZABBIX_SERVER_PORT", "OPENSHIFT_ZABBIX_AGENT_DIR",
                 "ZABBIX_RUN_DIR", "ZABBIX_LOG_DIR"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.setenv("OPENSHIFT_GEAR_DNS", "from-environment")
    env_file = tmp_path / "agent.env"
    env_file.write_text(
        "ZABBIX_SERVER_IP=10.0.0.5\n"
        "ZABBIX_SERVER_PORT=10051\n"
        f"OPENSHIFT_ZABBIX_AGENT_DIR={tmp_path}\n"
        "OPENSHIFT_GEAR_DNS=from-file\n"
    )
    config = load_config(str(env_file))

    assert config.server == "10.0.0.5"
    assert config.port == 10051
    assert config.run_dir == os.path.join(str(tmp_path), "run")
    assert config.host == "from-environment"
