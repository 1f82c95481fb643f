"""Colorful CLI output helpers."""

import sys

# ANSI color codes
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
RED = "\033[31m"
RESET = "\033[0m"
CHECK = "\u2713"  # ✓
BULLET = "\u2022"  # •
CROSS = "\u2717"  # ✗


def _supports_color() -> bool:
    """Check if stdout is a TTY."""
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _colorize(text: str, color: str) -> str:
    if _supports_color():
        return f"{color}{text}{RESET}"
    return text


def success(message: str) -> None:
    print(f"{_colorize(CHECK, GREEN)} {message}")


def info(message: str) -> None:
    print(f"{_colorize(BULLET, YELLOW)} {message}")


def header(message: str) -> None:
    print(_colorize(message, BLUE))


def error(message: str) -> None:
    print(f"{_colorize(CROSS, RED)} {message}")
