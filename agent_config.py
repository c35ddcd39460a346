#!/usr/bin/env python3
"""
Agent Configuration
Reads the agent's settings from the environment (and an optional .env file)
once at startup and validates them, so the rest of the agent works from a
single AgentConfig object instead of reading os.environ ad hoc.

Leaving ZABBIX_SERVER_IP or ZABBIX_SERVER_PORT unset disables sending; the
agent still collects and logs metrics.
"""

import os
import socket

from dotenv import load_dotenv

DEFAULT_SENDER = "zabbix_sender"


class ConfigError(Exception):
    """The agent's environment settings are invalid."""


class AgentConfig:
    """Validated agent settings"""

    def __init__(self, server=None, port=None, run_dir=None, log_dir=None,
                 host=None, sender=DEFAULT_SENDER):
        self.server = server
        self.port = port
        self.run_dir = run_dir
        self.log_dir = log_dir
        self.host = host or socket.gethostname()
        self.sender = sender or DEFAULT_SENDER
        self.validate()

    @property
    def transmission_enabled(self):
        return bool(self.server and self.port)

    def validate(self):
        if self.port is not None:
            try:
                port = int(self.port)
            except (TypeError, ValueError):
                raise ConfigError(f"ZABBIX_SERVER_PORT must be a number, got {self.port!r}")
            if not 1 <= port <= 65535:
                raise ConfigError(f"ZABBIX_SERVER_PORT out of range: {port}")
            self.port = port
        if not self.log_dir:
            raise ConfigError("No log directory: set OPENSHIFT_ZABBIX_AGENT_DIR or ZABBIX_LOG_DIR")
        if self.transmission_enabled and not self.run_dir:
            raise ConfigError("No run directory: set OPENSHIFT_ZABBIX_AGENT_DIR or ZABBIX_RUN_DIR")

    @classmethod
    def from_env(cls, environ):
        agent_dir = environ.get("OPENSHIFT_ZABBIX_AGENT_DIR")
        run_dir = environ.get("ZABBIX_RUN_DIR") or (agent_dir and os.path.join(agent_dir, "run"))
        log_dir = environ.get("ZABBIX_LOG_DIR") or (agent_dir and os.path.join(agent_dir, "log"))
        return cls(
            server=environ.get("ZABBIX_SERVER_IP") or None,
            port=environ.get("ZABBIX_SERVER_PORT") or None,
            run_dir=run_dir or None,
            log_dir=log_dir or None,
            host=environ.get("OPENSHIFT_GEAR_DNS") or None,
            sender=environ.get("ZABBIX_SENDER") or DEFAULT_SENDER,
        )

    def __repr__(self):
        target = f"{self.server}:{self.port}" if self.transmission_enabled else "disabled"
        return f"AgentConfig(host={self.host!r}, server={target}, run_dir={self.run_dir!r}, log_dir={self.log_dir!r})"


def load_config(env_file=None):
    """Load settings from the environment, filling gaps from a .env file"""
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()
    return AgentConfig.from_env(os.environ)
