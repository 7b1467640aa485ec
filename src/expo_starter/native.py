"""Native directory generation (``expo prebuild``) and CocoaPods install."""

from __future__ import annotations

import logging
import platform
from dataclasses import dataclass
from typing import TYPE_CHECKING

from expo_starter.runner import run_command

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PrebuildResult:
    """Which native directories exist after a prebuild."""

    android: bool
    ios: bool


def prebuild(project_dir: Path, platform_args: Sequence[str] = ()) -> PrebuildResult:
    """Run ``npx expo prebuild --clean`` for the selected platforms."""
    run_command(["npx", "expo", "prebuild", "--clean", *platform_args], project_dir)
    result = PrebuildResult(
        android=(project_dir / "android").is_dir(),
        ios=(project_dir / "ios").is_dir(),
    )
    logger.info("Prebuild finished: android=%s ios=%s", result.android, result.ios)
    return result


def can_install_pods(result: PrebuildResult) -> bool:
    """CocoaPods only make sense for a generated ``ios/`` on macOS."""
    return result.ios and platform.system() == "Darwin"


def install_pods(project_dir: Path) -> None:
    run_command(["npx", "pod-install"], project_dir)
