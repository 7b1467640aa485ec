"""Thin wrapper around :mod:`subprocess` for the external tools we drive."""

from __future__ import annotations

import logging
import subprocess
from typing import TYPE_CHECKING

from expo_starter.errors import CommandError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

logger = logging.getLogger(__name__)


def run_command(
    argv: Sequence[str],
    cwd: Path,
    *,
    capture: bool = False,
) -> subprocess.CompletedProcess[str]:
    """Run *argv* in *cwd* and block until it finishes.

    By default the child inherits the terminal so the operator sees the
    tool's own progress output.  With ``capture=True`` stdout/stderr are
    collected and returned instead.

    Raises
    ------
    CommandError
        If the executable is missing or exits with a nonzero status.
    """
    args = list(argv)
    logger.debug("Running %s (cwd=%s)", " ".join(args), cwd)
    try:
        result = subprocess.run(  # noqa: S603
            args,
            cwd=str(cwd),
            capture_output=capture,
            text=True,
            check=False,
        )
    except FileNotFoundError:
        raise CommandError(args, None) from None

    if result.returncode != 0:
        detail = (result.stderr or "").strip() if capture else ""
        raise CommandError(args, result.returncode, detail)

    return result
