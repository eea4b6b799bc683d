"""SSH tunnel command construction."""

from ..config.models import SessionConfig, SupervisorSettings


def build_ssh_arguments(session: SessionConfig, settings: SupervisorSettings) -> list[str]:
    """
    Build the helper arguments for a dynamic SOCKS forwarding session.

    The helper injects the password, then runs ssh with a SOCKS listener on the
    local port, keep-alives, host key checking disabled and no pseudo-terminal.

    Args:
        session: Session whose values are substituted into the template
        settings: Supervisor constants (keep-alive tuning, ssh binary)

    Returns:
        Argument list, without the helper executable itself
    """
    return [
        "-p", session.password,
        settings.ssh_binary,
        session.login,
        "-p", session.ssh_port,
        "-D", session.local_socks_port,
        "-o", f"ServerAliveInterval={settings.server_alive_interval}",
        "-o", f"ServerAliveCountMax={settings.server_alive_count_max}",
        "-o", "StrictHostKeyChecking=no",
        "-o", "UserKnownHostsFile=/dev/null",
        "-T"
    ]


def build_ssh_command(session: SessionConfig, settings: SupervisorSettings) -> list[str]:
    """Build the full argv handed to the process spawner."""
    return [settings.helper_path] + build_ssh_arguments(session, settings)


def sanitize_command(command: list[str]) -> list[str]:
    """Remove the helper password from a command for logging."""
    if not command:
        return []

    sanitized = []
    i = 0
    in_ssh = False

    while i < len(command):
        current_arg = command[i]

        if not in_ssh and current_arg == "-p":
            sanitized.append(current_arg)
            if i + 1 < len(command):
                sanitized.append("******")
            i += 2

        elif not in_ssh and current_arg.startswith("-p") and len(current_arg) > 2:
            sanitized.append("-p******")
            i += 1

        else:
            # Options after the ssh binary belong to ssh, not the helper
            if i > 0 and current_arg.rsplit("/", 1)[-1] == "ssh":
                in_ssh = True
            sanitized.append(current_arg)
            i += 1

    return sanitized
