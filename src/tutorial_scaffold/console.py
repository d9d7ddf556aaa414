"""Colored progress output for the tutorial creator."""

from typing import Optional

from rich.console import Console


class Reporter:
    """Prints step progress the way the tutorial creator always has."""

    def __init__(
        self, console: Optional[Console] = None, err_console: Optional[Console] = None
    ):
        self.console = console or Console(highlight=False)
        self.err_console = err_console or Console(stderr=True, highlight=False)

    def _print(self, message: str, style: str, err: bool = False):
        target = self.err_console if err else self.console
        target.print(message, style=style, markup=False, soft_wrap=True)

    def log(self, message: str, style: str = ""):
        self._print(message, style)

    def info(self, message: str):
        self._print(f"ℹ️  {message}", "cyan")

    def success(self, message: str):
        self._print(f"✅ {message}", "green")

    def warning(self, message: str):
        self._print(f"⚠️  {message}", "yellow", err=True)

    def error(self, message: str):
        self._print(f"❌ {message}", "red", err=True)

    def step(self, number: int, total: int, message: str):
        self._print(f"\nStep {number}/{total}: {message}", "cyan")
