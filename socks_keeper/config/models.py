"""Configuration data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SessionConfig:
    """Supervised SSH session, taken verbatim from the command line."""
    password: str
    login: str
    local_socks_port: str
    ssh_port: str

    def __repr__(self) -> str:
        return (
            f"SessionConfig(login={self.login!r}, local_socks_port={self.local_socks_port!r}, "
            f"ssh_port={self.ssh_port!r})"
        )


@dataclass(frozen=True)
class SupervisorSettings:
    """Fixed constants of the supervision loop and the SSH invocation."""
    helper_path: str = "/usr/local/bin/sshpass"
    ssh_binary: str = "ssh"
    retry_delay: float = 5.0
    server_alive_interval: int = 15
    server_alive_count_max: int = 3
    stop_timeout: float = 5.0
