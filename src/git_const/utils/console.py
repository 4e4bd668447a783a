"""Console output helpers for git-const."""

import click
from rich.console import Console
from rich.theme import Theme


# Status symbols for consistent iconography
STATUS_SYMBOLS = {
    'success': '✓',
    'info': '•',
    'warning': '⚠',
    'error': '✗',
}

_THEME = Theme({
    "info": "cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "bold green",
    "muted": "dim white",
})

_console = None


def _get_console() -> Console:
    """Get the stderr Rich console, created on first use.

    Status output goes to stderr so stdout stays clean for generated values.
    """
    global _console
    if _console is None:
        _console = Console(theme=_THEME, stderr=True)
    return _console


def _rich_echo(message: str, color: str = "white", style: str = None, bold: bool = False, symbol: str = None):
    """Echo message with Rich formatting."""
    if style is not None:
        color = style

    if symbol and symbol in STATUS_SYMBOLS:
        message = f"{STATUS_SYMBOLS[symbol]} {message}"

    style_str = f"bold {color}" if bold else color
    # markup/highlight off: git stderr may contain square brackets
    _get_console().print(message, style=style_str, markup=False, highlight=False)


def _rich_success(message: str, symbol: str = None):
    """Display success message with green color and bold styling."""
    _rich_echo(message, color="green", symbol=symbol, bold=True)


def _rich_error(message: str, symbol: str = None):
    """Display error message with red color."""
    _rich_echo(message, color="red", symbol=symbol)


def _rich_warning(message: str, symbol: str = None):
    """Display warning message with yellow color."""
    _rich_echo(message, color="yellow", symbol=symbol)


def _rich_info(message: str, symbol: str = None):
    """Display info message with blue color."""
    _rich_echo(message, color="blue", symbol=symbol)


def _plain_echo(message: str):
    """Write an unstyled line to stdout."""
    click.echo(message)
