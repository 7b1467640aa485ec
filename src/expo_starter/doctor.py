"""Doctor: preflight checks for the toolchain and the target directory."""

from __future__ import annotations

import enum
import logging
import re
import shutil
import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

REQUIRED_TOOLS: tuple[str, ...] = ("node", "npm", "npx", "git")

_SEMVER_RE = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)")


class Severity(enum.Enum):
    """Severity level for a check result."""

    OK = "ok"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class Check:
    """Result of a single preflight check."""

    name: str
    severity: Severity
    description: str


def parse_version(text: str) -> tuple[int, int, int]:
    """Parse ``v20.11.1`` / ``20.11.1`` into a tuple; (0, 0, 0) if unparseable."""
    m = _SEMVER_RE.match(text.strip())
    if not m:
        return (0, 0, 0)
    major, minor, patch = (int(g) for g in m.groups())
    return (major, minor, patch)


def _node_version() -> str | None:
    try:
        result = subprocess.run(
            ["node", "-v"],  # noqa: S607
            capture_output=True,
            text=True,
            timeout=10,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip()


def _check_tools() -> list[Check]:
    checks: list[Check] = []
    for tool in REQUIRED_TOOLS:
        if shutil.which(tool) is None:
            checks.append(Check(f"tool:{tool}", Severity.ERROR, f"`{tool}` not found on PATH."))
        else:
            checks.append(Check(f"tool:{tool}", Severity.OK, f"`{tool}` found."))
    return checks


def _check_node_version(min_version: str) -> list[Check]:
    found = _node_version()
    if found is None:
        return [Check("node_version", Severity.ERROR, "Could not determine Node.js version.")]
    if parse_version(found) < parse_version(min_version):
        return [
            Check(
                "node_version",
                Severity.ERROR,
                f"Node.js {found} is too old; {min_version} or newer is required.",
            )
        ]
    return [Check("node_version", Severity.OK, f"Node.js {found}.")]


def _check_target(project_dir: Path) -> list[Check]:
    if project_dir.exists():
        return [
            Check(
                "target_dir",
                Severity.ERROR,
                f"Directory '{project_dir}' already exists.",
            )
        ]
    return [Check("target_dir", Severity.OK, f"Will create '{project_dir}'.")]


def run_checks(project_dir: Path, *, min_node_version: str) -> list[Check]:
    """Run all preflight checks and return their results."""
    checks = _check_tools()
    if all(c.severity == Severity.OK for c in checks if c.name == "tool:node"):
        checks.extend(_check_node_version(min_node_version))
    checks.extend(_check_target(project_dir))
    for c in checks:
        logger.debug("preflight %s: %s", c.name, c.severity.value)
    return checks
