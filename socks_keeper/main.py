"""Main entry point for the SSH SOCKS keeper."""

import signal
import sys
from typing import Optional

from .config.arguments import parse_arguments, format_usage
from .config.models import SessionConfig, SupervisorSettings
from .core.network import is_port_in_use
from .core.supervisor import ConnectionSupervisor
from .system.process import ProcessManager
from .utils.console import console
from .utils.exceptions import UsageError
from .utils.logging import setup_logging, get_logger, CONFIG

logger = get_logger("main")


def _log_configuration(session: SessionConfig) -> None:
    logger.log(CONFIG, "Tool configured for:")
    logger.log(CONFIG, f"-> SSH Login: {session.login}")
    logger.log(CONFIG, f"-> SSH Port: {session.ssh_port}")
    logger.log(CONFIG, f"-> Local SOCKS Port: {session.local_socks_port}")


def _perform_preflight_checks(
        session: SessionConfig,
        settings: SupervisorSettings,
        process_manager: ProcessManager
) -> None:
    """Warn about conditions that will make launches fail. Never fatal."""
    if not process_manager.is_executable(settings.helper_path):
        logger.warning(
            f"{settings.helper_path} is missing or not executable; "
            f"launches will keep failing until it is installed"
        )

    if session.local_socks_port.isdigit():
        port = int(session.local_socks_port)
        if is_port_in_use(port):
            process_info = process_manager.find_process_by_port(port)
            message = f"Local SOCKS port {port} is already in use"
            if process_info:
                message += f" by {process_info}"
            logger.warning(message)


def signal_handler(signum, frame, supervisor: ConnectionSupervisor):
    """Handle shutdown signals gracefully. Must not take locks or log."""
    supervisor.request_stop(signum)


def main(argv: Optional[list[str]] = None):
    """Main entry point."""
    if argv is None:
        argv = sys.argv

    try:
        session = parse_arguments(argv)
    except UsageError:
        console.print_lines(format_usage(argv[0] if argv else "socks-keeper"))
        sys.exit(1)

    setup_logging()

    try:
        _log_configuration(session)

        settings = SupervisorSettings()
        process_manager = ProcessManager()
        _perform_preflight_checks(session, settings, process_manager)

        supervisor = ConnectionSupervisor(session, process_manager, settings)

        signal.signal(signal.SIGINT, lambda s, f: signal_handler(s, f, supervisor))
        signal.signal(signal.SIGTERM, lambda s, f: signal_handler(s, f, supervisor))

        supervisor.start()

        logger.info("Program started. Monitoring SSH connection. Press Ctrl+C in the console to exit.")

        try:
            supervisor.run()
        except KeyboardInterrupt:
            logger.warning("Keyboard interrupt received")
            supervisor.stop()

        logger.info("SSH connection handler stopped.")

    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
