"""Process management utilities."""

import os
import subprocess
from typing import Optional

import psutil

from ..utils.logging import get_logger

logger = get_logger("system.process")


class ProcessManager:
    """Manages the supervised process tree and local port ownership."""

    def find_process_by_port(self, port: int) -> Optional[str]:
        """
        Find process information for a given port.

        Args:
            port: Port number to check

        Returns:
            Process information string or None if not found
        """
        try:
            for proc in psutil.process_iter(['pid', 'name']):
                try:
                    for conn in proc.net_connections(kind='inet'):
                        if conn.laddr and conn.laddr.port == port:
                            return f"PID: {proc.pid}, Name: {proc.name()}"
                except (psutil.AccessDenied, psutil.NoSuchProcess):
                    continue
        except psutil.Error as e:
            logger.error(f"Error finding process with psutil: {e}")

        return None

    def terminate_tree(self, process: subprocess.Popen, timeout: float = 5.0) -> None:
        """
        Terminate a child process and all of its descendants.

        The helper forks ssh, so terminating the direct child alone could leave
        the tunnel running.

        Args:
            process: Direct child process handle
            timeout: Seconds to wait before force-killing survivors
        """
        try:
            children = psutil.Process(process.pid).children(recursive=True)
        except psutil.Error:
            children = []

        logger.info(f"Terminating process {process.pid} and {len(children)} descendant(s)")

        try:
            process.terminate()
        except OSError as e:
            logger.debug(f"Terminate of {process.pid} failed: {e}")

        for child in children:
            try:
                child.terminate()
            except psutil.NoSuchProcess:
                continue

        try:
            process.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            logger.warning(f"Process {process.pid} didn't exit gracefully, forcing kill")
            process.kill()
            process.wait()

        _, alive = psutil.wait_procs(children, timeout=timeout)
        for child in alive:
            logger.warning(f"Descendant {child.pid} didn't exit gracefully, forcing kill")
            try:
                child.kill()
            except psutil.NoSuchProcess:
                continue

    @staticmethod
    def is_executable(path: str) -> bool:
        """Check if a path points to an executable file."""
        return os.path.isfile(path) and os.access(path, os.X_OK)
