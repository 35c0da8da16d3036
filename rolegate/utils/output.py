"""
Terminal output for the rolegate CLI
-------------------------------------
Rules:
  - Labels left, values right, one fact per line
  - Allowed → green, denied / not found → red (ANSI only on a tty)
  - Errors → [Error] prefix
"""
from __future__ import annotations

import sys
from typing import Iterable

_ANSI = sys.stdout.isatty()

_RESET  = "\033[0m"  if _ANSI else ""
_DIM    = "\033[2m"  if _ANSI else ""
_RED    = "\033[31m" if _ANSI else ""
_GREEN  = "\033[32m" if _ANSI else ""
_BOLD   = "\033[1m"  if _ANSI else ""


def print_header(title: str) -> None:
    print(f"\n{_BOLD}{title}{_RESET}")
    print("=" * 40)


def print_field(label: str, value: object) -> None:
    print(f"  {label + ':':28s} {value}")


def print_flag(label: str, value: bool) -> None:
    colour = _GREEN if value else _RED
    print(f"  {label + ':':28s} {colour}{value}{_RESET}")


def print_entry(label: str, role: str, features: Iterable[str] | None) -> None:
    """Role entry dump; features=None means the role is not registered."""
    if features is None:
        print(f"  {label + ':':28s} {_RED}not found{_RESET} (role '{role}')")
        return
    names = list(features)
    print(f"  {label + ':':28s} role='{role}' features={len(names)}")
    for name in names:
        print(f"{_DIM}      - {name}{_RESET}")


def print_error(message: str) -> None:
    print(f"\n{_RED}[Error]{_RESET} {message}\n")


def print_status(message: str) -> None:
    print(f"{_DIM}[{message}]{_RESET}")
