"""Access to the process environment."""

from __future__ import annotations

import os
import sys


def get(key: str) -> str | None:
    """Return an environment variable, or None when unset."""
    if not isinstance(key, str):
        raise TypeError("env.get expects Str")
    return os.environ.get(key)


def variables() -> dict[str, str]:
    """Return all environment variables."""
    return dict(os.environ)


def args() -> list[str]:
    """Return the process command-line arguments."""
    return list(sys.argv)


def cwd() -> str:
    """Return the current working directory."""
    return os.getcwd()


def home() -> str | None:
    """Return the HOME variable, or None when unset."""
    return os.environ.get("HOME")