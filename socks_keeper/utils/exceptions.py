"""Custom exception classes for the SSH SOCKS keeper."""


class SocksKeeperError(Exception):
    """Base exception for all SSH SOCKS keeper errors."""
    pass


class UsageError(SocksKeeperError):
    """Exception raised when the command line is malformed."""

    def __init__(self, argument_count: int):
        self.argument_count = argument_count
        super().__init__(f"Expected 4 arguments, got {argument_count}")
