"""Starter configuration: built-in defaults with optional YAML overrides."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".expo-starter.yml"

DEFAULT_SCAFFOLD_COMMAND: tuple[str, ...] = ("npx", "create-expo-app@latest")

# Paths produced by the scaffolder that the template tree replaces.
DEFAULT_REMOVE_PATHS: tuple[str, ...] = (
    "App.tsx",
    "README.md",
    "babel.config.js",
    "assets",
    "src",
    "app",
    "app-example",
    "components",
    "constants",
    "hooks",
    "scripts",
)

DEFAULT_DEPENDENCY_GROUPS: dict[str, tuple[str, ...]] = {
    "UI & utility": (
        "@react-native-async-storage/async-storage",
        "react-native-size-matters",
        "@expo/vector-icons",
        "react-native-paper",
        "react-native-toast-message",
    ),
    "navigation": (
        "@react-navigation/native",
        "@react-navigation/stack",
        "react-native-gesture-handler",
        "react-native-reanimated@3.19.0",
        "react-native-safe-area-context",
        "react-native-screens",
    ),
    "state management": (
        "react-native-dotenv",
        "@reduxjs/toolkit",
        "react-redux",
    ),
}

DEFAULT_MIN_NODE_VERSION = "18.18.0"

DEFAULT_COMMIT_MESSAGE = (
    "Initial commit: {app_name}\n"
    "\n"
    "Generated with expo-starter.\n"
    "\n"
    "Package: {package_name}\n"
    "Scheme: {scheme}\n"
)


@dataclass(frozen=True)
class StarterConfig:
    """Settings that shape a generated project."""

    scaffold_command: tuple[str, ...] = DEFAULT_SCAFFOLD_COMMAND
    remove_paths: tuple[str, ...] = DEFAULT_REMOVE_PATHS
    dependency_groups: dict[str, tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_DEPENDENCY_GROUPS)
    )
    min_node_version: str = DEFAULT_MIN_NODE_VERSION
    commit_message: str = DEFAULT_COMMIT_MESSAGE


def _str_list(value: Any) -> tuple[str, ...] | None:
    if isinstance(value, list) and value and all(isinstance(v, str) for v in value):
        return tuple(value)
    return None


def _dependency_groups(value: Any) -> dict[str, tuple[str, ...]] | None:
    if not isinstance(value, dict) or not value:
        return None
    groups: dict[str, tuple[str, ...]] = {}
    for label, packages in value.items():
        parsed = _str_list(packages)
        if parsed is None:
            return None
        groups[str(label)] = parsed
    return groups


def parse_config(data: Any) -> StarterConfig:
    """Build a :class:`StarterConfig` from a parsed YAML mapping.

    Unknown keys are ignored.  Keys with the wrong shape keep their default
    and produce a warning.
    """
    config = StarterConfig()
    if data is None:
        return config
    if not isinstance(data, dict):
        logger.warning("Config root must be a mapping, using defaults")
        return config

    overrides: dict[str, Any] = {}

    if "scaffold_command" in data:
        cmd = _str_list(data["scaffold_command"])
        if cmd is None:
            logger.warning("Ignoring invalid scaffold_command in config")
        else:
            overrides["scaffold_command"] = cmd

    if "remove_paths" in data:
        paths = _str_list(data["remove_paths"])
        if paths is None:
            logger.warning("Ignoring invalid remove_paths in config")
        else:
            overrides["remove_paths"] = paths

    if "dependency_groups" in data:
        groups = _dependency_groups(data["dependency_groups"])
        if groups is None:
            logger.warning("Ignoring invalid dependency_groups in config")
        else:
            overrides["dependency_groups"] = groups

    for key in ("min_node_version", "commit_message"):
        if key in data:
            value = data[key]
            if isinstance(value, str) and value:
                overrides[key] = value
            else:
                logger.warning("Ignoring invalid %s in config", key)

    return replace(config, **overrides)


def load_config(parent_dir: Path, config_path: Path | None = None) -> StarterConfig:
    """Load configuration for a run.

    Uses *config_path* when given, else ``.expo-starter.yml`` in *parent_dir*,
    else the built-in defaults.  An unreadable file falls back to defaults.
    """
    path = config_path or parent_dir / CONFIG_FILENAME
    if not path.is_file():
        return StarterConfig()

    try:
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError):
        logger.warning("Failed to read %s, using defaults", path)
        return StarterConfig()

    logger.debug("Loaded config from %s", path)
    return parse_config(data)
