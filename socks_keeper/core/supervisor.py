"""Supervision of the SSH SOCKS tunnel process."""

import queue
import subprocess
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional, Union

from ..config.models import SessionConfig, SupervisorSettings
from ..system.process import ProcessManager
from ..utils.logging import get_logger, SUCCESS
from .tunnel import build_ssh_command, sanitize_command

logger = get_logger("core.supervisor")


@dataclass
class ProcessExited:
    """A spawned tunnel process has terminated, for whatever reason."""
    process: subprocess.Popen
    returncode: Optional[int]


@dataclass
class LaunchFailed:
    """The helper executable could not be spawned."""
    error: Exception


@dataclass
class StopRequested:
    """Shutdown was requested, usually from a signal handler."""
    signum: Optional[int] = None


SupervisorEvent = Union[ProcessExited, LaunchFailed, StopRequested, None]


class ConnectionSupervisor:
    """
    Keeps exactly one SSH tunnel process alive for a session.

    Watcher threads only report process exits; all state changes and relaunches
    happen on the thread that drives run() or poll().
    """

    def __init__(
            self,
            session: SessionConfig,
            process_manager: ProcessManager,
            settings: Optional[SupervisorSettings] = None,
            spawn: Callable[[list[str]], subprocess.Popen] = subprocess.Popen
    ):
        self.session = session
        self.process_manager = process_manager
        self.settings = settings or SupervisorSettings()
        self._spawn = spawn

        self._process: Optional[subprocess.Popen] = None
        self._lock = threading.RLock()
        self._stop_event = threading.Event()
        # SimpleQueue.put() may be called from a signal handler
        self._events: "queue.SimpleQueue[SupervisorEvent]" = queue.SimpleQueue()
        self._launch_count = 0

    @property
    def process(self) -> Optional[subprocess.Popen]:
        """Handle of the tracked child, if any."""
        return self._process

    @property
    def launch_count(self) -> int:
        """Number of spawn attempts made so far."""
        return self._launch_count

    def is_running(self) -> bool:
        """Check if a tracked child is currently alive."""
        with self._lock:
            return self._process is not None and self._process.poll() is None

    def is_stopped(self) -> bool:
        return self._stop_event.is_set()

    def start(self) -> None:
        """Start supervising; launches a child unless one is already tracked."""
        logger.info("Starting SSH connection handler.")
        self._stop_event.clear()
        self._launch()

    def stop(self) -> None:
        """Terminate the tracked child and suppress any further relaunch."""
        logger.info("Stopping SSH connection handler.")
        self._stop_event.set()

        with self._lock:
            process = self._process
            self._process = None

        if process is not None:
            self.process_manager.terminate_tree(process, timeout=self.settings.stop_timeout)

        # Wake up run() if it is blocked on the queue
        self._events.put(None)

    def request_stop(self, signum: Optional[int] = None) -> None:
        """
        Ask the supervising thread to stop.

        Only enqueues an event, so it is safe to call from a signal handler;
        the actual stop() runs on the thread driving run() or poll().
        """
        self._events.put(StopRequested(signum))

    def run(self) -> None:
        """Process supervision events until stopped."""
        while not self._stop_event.is_set():
            self.poll(timeout=1.0)

    def poll(self, timeout: Optional[float] = None) -> bool:
        """
        Handle at most one pending supervision event.

        Args:
            timeout: Seconds to wait for an event, None to block

        Returns:
            True if an event was handled
        """
        try:
            event = self._events.get(timeout=timeout)
        except queue.Empty:
            return False

        self._handle_event(event)
        return True

    def _handle_event(self, event: SupervisorEvent) -> None:
        if isinstance(event, StopRequested):
            self._handle_stop_request(event)

        elif isinstance(event, ProcessExited):
            with self._lock:
                if event.process is not self._process:
                    logger.debug(f"Ignoring exit of untracked process {event.process.pid}")
                    return
                self._process = None

            logger.error(
                f"SSH process terminated (exit code {event.returncode}). "
                f"Attempting to reconnect in {self.settings.retry_delay:g} seconds..."
            )
            self._retry()

        elif isinstance(event, LaunchFailed):
            self._retry()

    def _handle_stop_request(self, event: StopRequested) -> None:
        if event.signum is not None:
            logger.warning(f"Received signal {event.signum}, shutting down...")
        self.stop()

    def _retry(self) -> None:
        if self._wait_before_retry(self.settings.retry_delay):
            logger.info("Stop requested, not reconnecting.")
            return
        self._launch()

    def _wait_before_retry(self, delay: float) -> bool:
        """
        Sleep for the reconnect delay while still honouring stop requests.

        Returns:
            True if the supervisor was stopped during the delay
        """
        deadline = time.monotonic() + delay
        while not self._stop_event.is_set():
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return False
            try:
                event = self._events.get(timeout=remaining)
            except queue.Empty:
                return False

            # No child is tracked during the delay, so exits here are stale
            if isinstance(event, StopRequested):
                self._handle_stop_request(event)
        return True

    def _launch(self) -> None:
        with self._lock:
            if self._stop_event.is_set():
                logger.debug("Supervisor stopped, skipping launch")
                return

            if self._process is not None:
                logger.warning("SSH process already running. Skipping.")
                return

            command = build_ssh_command(self.session, self.settings)
            self._launch_count += 1

            logger.info(f"Launching new SSH process via {self.settings.helper_path} (attempt {self._launch_count})...")
            logger.debug(f"Executing: {' '.join(sanitize_command(command))}")

            try:
                process = self._spawn(command)
            except (OSError, subprocess.SubprocessError) as e:
                logger.critical(
                    f"Failed to start {self.settings.helper_path} process: {e}. "
                    f"Retrying in {self.settings.retry_delay:g} seconds..."
                )
                self._events.put(LaunchFailed(e))
                return

            # stop() from another thread may have begun while spawning
            if self._stop_event.is_set():
                self.process_manager.terminate_tree(process, timeout=self.settings.stop_timeout)
                return

            self._process = process

            watcher = threading.Thread(
                target=self._watch,
                args=(process,),
                name=f"ssh-watcher-{process.pid}",
                daemon=True
            )
            watcher.start()

        logger.log(SUCCESS, f"SSH process started via {self.settings.helper_path} (PID {process.pid}). "
                            f"The proxy should be active on port {self.session.local_socks_port}.")

    def _watch(self, process: subprocess.Popen) -> None:
        returncode = process.wait()
        self._events.put(ProcessExited(process, returncode))
