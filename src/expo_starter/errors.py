"""Exception types raised by the scaffolding steps."""

from __future__ import annotations


class StarterError(Exception):
    """Base class for expected failures while generating a project."""


class CommandError(StarterError):
    """An external command was not found or exited with a nonzero status."""

    def __init__(self, argv: list[str], returncode: int | None, detail: str = "") -> None:
        self.argv = argv
        self.returncode = returncode
        self.detail = detail
        cmd = " ".join(argv)
        if returncode is None:
            msg = f"command not found: {argv[0]}"
        else:
            msg = f"`{cmd}` exited with status {returncode}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class ManifestError(StarterError):
    """A JSON manifest (package.json / app.json) is missing or unreadable."""
