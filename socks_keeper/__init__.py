"""
SSH SOCKS Keeper - keeps an sshpass-driven SSH dynamic SOCKS proxy alive.

This package provides functionality to:
- Launch an SSH client with dynamic port forwarding via sshpass
- Detect when the SSH process dies and relaunch it after a fixed delay
- Shut the tunnel down cleanly on SIGINT/SIGTERM
"""

__version__ = "1.0.0"
