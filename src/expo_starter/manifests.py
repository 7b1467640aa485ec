"""Read and patch the generated project's JSON manifests.

Two documents are touched:

* ``package.json`` -- scripts and ``expo`` settings merged from the template.
* ``app.json`` -- identifiers, deep-link scheme, universal links, and the
  expo-router leftovers we strip after replacing ``app/``.

Patch functions operate on plain dicts so they can be tested without disk
access; :func:`read_json` / :func:`write_json` do the I/O.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from expo_starter.errors import ManifestError

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

APP_NAME_PLACEHOLDER = "{{APP_NAME}}"

_LINK_CATEGORIES = ["BROWSABLE", "DEFAULT"]


# ---------------------------------------------------------------------------
# I/O
# ---------------------------------------------------------------------------


def read_json(path: Path) -> dict[str, Any]:
    """Read a JSON object from *path*."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        msg = f"{path.name} not found in {path.parent}"
        raise ManifestError(msg) from None
    except (OSError, json.JSONDecodeError) as exc:
        msg = f"cannot read {path}: {exc}"
        raise ManifestError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path} does not contain a JSON object"
        raise ManifestError(msg)
    return data


def write_json(path: Path, data: dict[str, Any]) -> None:
    """Write *data* with 2-space indentation and a trailing newline."""
    try:
        path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    except OSError as exc:
        msg = f"cannot write {path}: {exc}"
        raise ManifestError(msg) from exc


def _ensure_dict(parent: dict[str, Any], key: str) -> dict[str, Any]:
    value = parent.get(key)
    if not isinstance(value, dict):
        value = {}
        parent[key] = value
    return value


# ---------------------------------------------------------------------------
# package.json
# ---------------------------------------------------------------------------


def render_template(template: dict[str, Any], app_name: str) -> dict[str, Any]:
    """Substitute the app name placeholder anywhere inside *template*."""
    text = json.dumps(template)
    # Placeholder sits inside JSON strings.
    escaped = json.dumps(app_name)[1:-1]
    result: dict[str, Any] = json.loads(text.replace(APP_NAME_PLACEHOLDER, escaped))
    return result


def merge_package_json(
    package: dict[str, Any],
    template: dict[str, Any],
    app_name: str,
) -> dict[str, Any]:
    """Merge template ``scripts``, ``expo`` and ``main`` into *package*.

    Existing keys are kept; template keys win on conflict.
    """
    rendered = render_template(template, app_name)

    scripts = rendered.get("scripts")
    if isinstance(scripts, dict):
        existing = package.get("scripts")
        package["scripts"] = {**(existing if isinstance(existing, dict) else {}), **scripts}

    expo = rendered.get("expo")
    if isinstance(expo, dict):
        existing = package.get("expo")
        package["expo"] = {**(existing if isinstance(existing, dict) else {}), **expo}

    # Entry point moves from expo-router to the template's index.js.
    main = rendered.get("main")
    if isinstance(main, str) and main:
        package["main"] = main

    return package


# ---------------------------------------------------------------------------
# app.json
# ---------------------------------------------------------------------------


def _is_router_plugin(entry: Any) -> bool:
    if isinstance(entry, str):
        return entry == "expo-router"
    if isinstance(entry, list) and entry:
        return entry[0] == "expo-router"
    return False


def strip_router_config(app_json: dict[str, Any], app_name: str) -> dict[str, Any]:
    """Remove expo-router settings and set the display name and slug.

    The template tree ships a React Navigation entry point, so the file-based
    router plugin, ``experiments.typedRoutes`` and ``web.output`` no longer
    apply.
    """
    expo = _ensure_dict(app_json, "expo")
    expo["name"] = app_name
    expo["slug"] = app_name.lower()

    plugins = expo.get("plugins")
    if isinstance(plugins, list):
        kept = [p for p in plugins if not _is_router_plugin(p)]
        if kept:
            expo["plugins"] = kept
        else:
            del expo["plugins"]

    experiments = expo.get("experiments")
    if isinstance(experiments, dict):
        experiments.pop("typedRoutes", None)
        if not experiments:
            del expo["experiments"]

    web = expo.get("web")
    if isinstance(web, dict):
        web.pop("output", None)

    return app_json


def apply_package_name(app_json: dict[str, Any], package_name: str) -> dict[str, Any]:
    """Set the iOS bundle identifier and the Android package."""
    expo = _ensure_dict(app_json, "expo")
    _ensure_dict(expo, "ios")["bundleIdentifier"] = package_name
    _ensure_dict(expo, "android")["package"] = package_name
    return app_json


def build_intent_filters(scheme: str, domain: str | None = None) -> list[dict[str, Any]]:
    """Android intent filters for a custom scheme and optional https domain."""
    filters: list[dict[str, Any]] = []
    if domain:
        filters.append(
            {
                "action": "VIEW",
                "autoVerify": True,
                "data": [{"scheme": "https", "host": domain}],
                "category": list(_LINK_CATEGORIES),
            }
        )
    filters.append(
        {
            "action": "VIEW",
            "data": [{"scheme": scheme}],
            "category": list(_LINK_CATEGORIES),
        }
    )
    return filters


def apply_deep_linking(
    app_json: dict[str, Any],
    scheme: str,
    domain: str | None = None,
) -> dict[str, Any]:
    """Configure the app scheme, Android intent filters and iOS associated domains."""
    expo = _ensure_dict(app_json, "expo")
    expo["scheme"] = scheme

    android = _ensure_dict(expo, "android")
    new_filters = build_intent_filters(scheme, domain)
    existing = android.get("intentFilters")
    if isinstance(existing, list):
        android["intentFilters"] = [*existing, *new_filters]
    else:
        android["intentFilters"] = new_filters

    if domain:
        ios = _ensure_dict(expo, "ios")
        associated = f"applinks:{domain}"
        domains = ios.get("associatedDomains")
        if isinstance(domains, list):
            if associated not in domains:
                domains.append(associated)
        else:
            ios["associatedDomains"] = [associated]

    return app_json


def update_json_file(
    path: Path,
    patch: Callable[..., dict[str, Any]],
    *args: Any,
) -> dict[str, Any]:
    """Read *path*, apply ``patch(data, *args)``, and write the result back."""
    data = read_json(path)
    patched = patch(data, *args)
    write_json(path, patched)
    return patched
