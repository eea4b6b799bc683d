"""Command-line argument parsing."""

from .models import SessionConfig
from ..utils.exceptions import UsageError

EXPECTED_ARGUMENTS = 4


def parse_arguments(argv: list[str]) -> SessionConfig:
    """
    Build the session configuration from the raw command line.

    Args:
        argv: Full argument vector, program name first

    Returns:
        Session configuration

    Raises:
        UsageError: If the number of positional arguments is not exactly 4
    """
    arguments = list(argv[1:])
    if len(arguments) != EXPECTED_ARGUMENTS:
        raise UsageError(len(arguments))

    password, login, local_socks_port, ssh_port = arguments
    return SessionConfig(
        password=password,
        login=login,
        local_socks_port=local_socks_port,
        ssh_port=ssh_port
    )


def format_usage(program: str) -> list[str]:
    """Return the usage banner lines for the given program name."""
    return [
        "--- SSH Proxy Tool ---",
        f"Usage: {program} <password> <user@host> <local_socks_port> <ssh_port>",
        f'Example: {program} "mySecret" "user@10.20.52.85" 9999 2222',
    ]
