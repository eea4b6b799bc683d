"""Network utilities."""

import socket

from ..utils.logging import get_logger

logger = get_logger("core.network")


def is_port_in_use(port: int, host: str = "localhost") -> bool:
    """
    Check if a port is already in use.

    Args:
        port: Port number to check
        host: Host to check (default: localhost)

    Returns:
        True if port is in use, False otherwise
    """
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.settimeout(1)
            result = s.connect_ex((host, port))
            return result == 0
    except (OSError, OverflowError) as e:
        logger.warning(f"Error checking port {port}: {e}")
        return False
