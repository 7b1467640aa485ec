"""Reset the scaffolder's git history and record a fresh initial commit."""

from __future__ import annotations

import logging
import shutil
from typing import TYPE_CHECKING

from expo_starter.errors import StarterError
from expo_starter.runner import run_command

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


def build_commit_message(
    template: str,
    *,
    app_name: str,
    package_name: str | None,
    scheme: str | None,
) -> str:
    """Fill the commit message template.

    Lines whose placeholder has no value (package or scheme not configured)
    are dropped instead of rendering ``None``.
    """
    values = {
        "app_name": app_name,
        "package_name": package_name or "",
        "scheme": scheme or "",
    }
    lines: list[str] = []
    for line in template.splitlines():
        if "{package_name}" in line and not package_name:
            continue
        if "{scheme}" in line and not scheme:
            continue
        try:
            lines.append(line.format(**values))
        except (KeyError, IndexError, ValueError) as exc:
            msg = f"invalid commit message template line {line!r}: {exc}"
            raise StarterError(msg) from exc
    return "\n".join(lines).strip() + "\n"


def reset_history(project_dir: Path, message: str) -> None:
    """Delete any existing ``.git`` and commit the whole tree as a new root commit."""
    git_dir = project_dir / ".git"
    try:
        if git_dir.is_dir() and not git_dir.is_symlink():
            logger.debug("Removing existing %s", git_dir)
            shutil.rmtree(git_dir)
        elif git_dir.exists() or git_dir.is_symlink():
            # gitdir link file left by a worktree or submodule
            logger.debug("Removing existing %s link", git_dir)
            git_dir.unlink()
    except OSError as exc:
        msg = f"cannot remove {git_dir}: {exc}"
        raise StarterError(msg) from exc

    run_command(["git", "init"], project_dir, capture=True)
    run_command(["git", "add", "-A"], project_dir, capture=True)
    run_command(["git", "commit", "-q", "-m", message], project_dir, capture=True)
