"""CLI output utilities and formatting."""

from colorama import Fore, Style

BANNER = f"""
{Fore.CYAN}{Style.BRIGHT}hunkline{Style.RESET_ALL} {Fore.WHITE}- per-file git state, one hunk at a time{Style.RESET_ALL}
"""


def success(message: str) -> str:
    """Format success message in green."""
    return f"{Fore.GREEN}✓ {message}{Style.RESET_ALL}"


def info(message: str) -> str:
    """Format info message in cyan."""
    return f"{Fore.CYAN}→ {message}{Style.RESET_ALL}"


def warning(message: str) -> str:
    """Format warning message in yellow."""
    return f"{Fore.YELLOW}⚠ {message}{Style.RESET_ALL}"


def error(message: str) -> str:
    """Format error message in red."""
    return f"{Fore.RED}✗ {message}{Style.RESET_ALL}"


def hunk_line(line: str) -> str:
    """Colour a diff line by its prefix."""
    if line.startswith('+'):
        return f"{Fore.GREEN}{line}{Style.RESET_ALL}"
    if line.startswith('-'):
        return f"{Fore.RED}{line}{Style.RESET_ALL}"
    if line.startswith('@@'):
        return f"{Fore.CYAN}{line}{Style.RESET_ALL}"
    return line
