"""Shared fixtures: fake child processes so no real sshpass is ever spawned."""

import itertools
import logging
import threading
from unittest.mock import MagicMock

import pytest

from socks_keeper.config.models import SessionConfig, SupervisorSettings
from socks_keeper.core.supervisor import ConnectionSupervisor


class FakeProcess:
    """Stands in for subprocess.Popen; exits only when told to."""

    _pids = itertools.count(4000)

    def __init__(self, args):
        self.args = list(args)
        self.pid = next(self._pids)
        self.returncode = None
        self._exited = threading.Event()

    def poll(self):
        return self.returncode

    def wait(self, timeout=None):
        self._exited.wait(timeout)
        return self.returncode

    def exit(self, code=255):
        self.returncode = code
        self._exited.set()

    def terminate(self):
        self.exit(-15)


class FakeSpawner:
    """Popen replacement recording every spawn attempt."""

    def __init__(self, failures=0):
        self.failures = failures
        self.calls = []
        self.processes = []

    def __call__(self, command):
        self.calls.append(list(command))
        if self.failures > 0:
            self.failures -= 1
            raise FileNotFoundError(2, "No such file or directory", command[0])

        live = [p for p in self.processes if p.returncode is None]
        assert not live, f"spawned while {len(live)} child(ren) still alive"

        process = FakeProcess(command)
        self.processes.append(process)
        return process


@pytest.fixture
def session():
    return SessionConfig(
        password="pw1",
        login="bob@10.0.0.5",
        local_socks_port="1080",
        ssh_port="22"
    )


@pytest.fixture
def settings():
    """Settings with no reconnect delay so tests run instantly."""
    return SupervisorSettings(retry_delay=0.0)


@pytest.fixture
def spawner():
    return FakeSpawner()


@pytest.fixture
def process_manager():
    return MagicMock()


@pytest.fixture
def supervisor(session, settings, spawner, process_manager):
    sup = ConnectionSupervisor(session, process_manager, settings, spawn=spawner)
    yield sup
    # Release watcher threads still blocked on fake processes
    for process in spawner.processes:
        if process.returncode is None:
            process.exit(0)


@pytest.fixture
def fake_process_cls():
    return FakeProcess


@pytest.fixture
def spawner_cls():
    return FakeSpawner


@pytest.fixture(autouse=True)
def capture_all_levels(caplog):
    """Let INFO/CONFIG/SUCCESS records reach caplog regardless of logging setup."""
    caplog.set_level(logging.DEBUG, logger="socks_keeper")
