"""Tests for ProcessManager."""

import subprocess
from unittest.mock import MagicMock, patch

import psutil
import pytest

from socks_keeper.system.process import ProcessManager

MODULE = "socks_keeper.system.process"


@pytest.fixture
def child_process():
    process = MagicMock(spec=subprocess.Popen)
    process.pid = 1234
    return process


class TestTerminateTree:
    """Tests for terminating the helper and its ssh descendant."""

    def test_terminates_child_and_descendants(self, child_process):
        descendant = MagicMock()
        with patch(f"{MODULE}.psutil.Process") as process_cls, \
                patch(f"{MODULE}.psutil.wait_procs", return_value=([descendant], [])) as wait_procs:
            process_cls.return_value.children.return_value = [descendant]

            ProcessManager().terminate_tree(child_process, timeout=2.0)

        process_cls.assert_called_once_with(1234)
        child_process.terminate.assert_called_once()
        child_process.wait.assert_called_once_with(timeout=2.0)
        descendant.terminate.assert_called_once()
        wait_procs.assert_called_once_with([descendant], timeout=2.0)
        descendant.kill.assert_not_called()

    def test_force_kills_survivors(self, child_process):
        stubborn = MagicMock()
        child_process.wait.side_effect = [subprocess.TimeoutExpired("sshpass", 1.0), 0]
        with patch(f"{MODULE}.psutil.Process") as process_cls, \
                patch(f"{MODULE}.psutil.wait_procs", return_value=([], [stubborn])):
            process_cls.return_value.children.return_value = [stubborn]

            ProcessManager().terminate_tree(child_process, timeout=1.0)

        child_process.kill.assert_called_once()
        stubborn.kill.assert_called_once()

    def test_already_gone(self, child_process):
        """A child psutil cannot see is still terminated through its handle."""
        with patch(f"{MODULE}.psutil.Process", side_effect=psutil.NoSuchProcess(1234)), \
                patch(f"{MODULE}.psutil.wait_procs", return_value=([], [])) as wait_procs:
            ProcessManager().terminate_tree(child_process)

        child_process.terminate.assert_called_once()
        wait_procs.assert_called_once_with([], timeout=5.0)

    def test_descendant_vanishes(self, child_process):
        vanished = MagicMock()
        vanished.terminate.side_effect = psutil.NoSuchProcess(99)
        with patch(f"{MODULE}.psutil.Process") as process_cls, \
                patch(f"{MODULE}.psutil.wait_procs", return_value=([vanished], [])):
            process_cls.return_value.children.return_value = [vanished]

            ProcessManager().terminate_tree(child_process)

        child_process.wait.assert_called_once()


class TestFindProcessByPort:
    """Tests for port owner lookup."""

    def test_finds_owner(self):
        conn = MagicMock()
        conn.laddr.port = 1080
        proc = MagicMock(pid=77)
        proc.name.return_value = "ssh"
        proc.net_connections.return_value = [conn]

        with patch(f"{MODULE}.psutil.process_iter", return_value=[proc]):
            assert ProcessManager().find_process_by_port(1080) == "PID: 77, Name: ssh"

    def test_skips_inaccessible(self):
        denied = MagicMock()
        denied.net_connections.side_effect = psutil.AccessDenied(1)

        with patch(f"{MODULE}.psutil.process_iter", return_value=[denied]):
            assert ProcessManager().find_process_by_port(1080) is None


def test_is_executable(tmp_path):
    script = tmp_path / "helper"
    script.write_text("#!/bin/sh\n")

    assert not ProcessManager.is_executable(str(script))

    script.chmod(0o755)
    assert ProcessManager.is_executable(str(script))
    assert not ProcessManager.is_executable(str(tmp_path / "missing"))
