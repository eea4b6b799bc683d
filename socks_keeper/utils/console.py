"""Rich console utilities for consistent output formatting."""

from rich.console import Console


class ProxyConsole:
    """Wrapper around Rich Console writing plain lines to stdout."""

    def __init__(self):
        self.console = Console()

    def print_line(self, message: str) -> None:
        """Print a line verbatim, without markup or highlighting."""
        self.console.print(message, markup=False, highlight=False, soft_wrap=True)

    def print_lines(self, lines: list[str]) -> None:
        for line in lines:
            self.print_line(line)


console = ProxyConsole()
