"""Shared test fixtures for expo-starter."""

from __future__ import annotations

import copy
import json
from io import StringIO
from typing import TYPE_CHECKING, Any

import pytest
from rich.console import Console

if TYPE_CHECKING:
    from pathlib import Path


SCAFFOLDED_APP_JSON = {
    "expo": {
        "name": "placeholder",
        "slug": "placeholder",
        "version": "1.0.0",
        "scheme": "myapp",
        "ios": {"supportsTablet": True},
        "android": {"adaptiveIcon": {"backgroundColor": "#ffffff"}},
        "web": {"bundler": "metro", "output": "static", "favicon": "./assets/images/favicon.png"},
        "plugins": [
            "expo-router",
            ["expo-splash-screen", {"image": "./assets/images/splash-icon.png"}],
        ],
        "experiments": {"typedRoutes": True},
    }
}

SCAFFOLDED_PACKAGE_JSON = {
    "name": "demoapp",
    "main": "expo-router/entry",
    "version": "1.0.0",
    "scripts": {"start": "expo start", "reset-project": "node ./scripts/reset-project.js"},
    "dependencies": {"expo": "~52.0.0", "expo-router": "~4.0.0"},
}


@pytest.fixture()
def console() -> Console:
    """A console that records output instead of writing to the terminal."""
    return Console(file=StringIO(), force_terminal=False, width=120)


@pytest.fixture()
def scaffolded_project(tmp_path: Path) -> Path:
    """Create a project tree shaped like create-expo-app output."""
    project = tmp_path / "DemoApp"
    project.mkdir()
    (project / "app.json").write_text(json.dumps(SCAFFOLDED_APP_JSON, indent=2))
    (project / "package.json").write_text(json.dumps(SCAFFOLDED_PACKAGE_JSON, indent=2))
    (project / "README.md").write_text("# Welcome to your Expo app\n")
    (project / "app").mkdir()
    (project / "app" / "index.tsx").write_text("export default function Index() {}\n")
    (project / "hooks").mkdir()
    (project / "hooks" / "useColorScheme.ts").write_text("export {};\n")
    (project / "tsconfig.json").write_text("{}\n")
    return project


@pytest.fixture()
def app_json_data() -> dict[str, Any]:
    """A fresh copy of app.json as written by create-expo-app."""
    return copy.deepcopy(SCAFFOLDED_APP_JSON)


@pytest.fixture()
def package_json_data() -> dict[str, Any]:
    """A fresh copy of package.json as written by create-expo-app."""
    return copy.deepcopy(SCAFFOLDED_PACKAGE_JSON)
