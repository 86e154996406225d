"""Terminal prompts used during sign-in."""

from __future__ import annotations

from getpass import getpass


class TerminalConsole:
    """ConsolePort backed by stdin; secrets are read without echo."""

    def prompt_line(self, message: str) -> str:
        return input(message)

    def prompt_secret(self, message: str) -> str:
        return getpass(message)
