"""Template tree: remove scaffolder output we replace, copy our overrides."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from expo_starter.errors import StarterError
from expo_starter.manifests import merge_package_json, read_json, write_json

logger = logging.getLogger(__name__)

OVERRIDES_DIR = Path(__file__).parent / "overrides"
PACKAGE_TEMPLATE_NAME = "package.json.template"


def remove_generated_paths(project_dir: Path, paths: tuple[str, ...]) -> list[str]:
    """Delete each of *paths* under *project_dir* if it exists.

    A symlink is removed itself, never its target.  Returns the relative
    paths that were actually removed.
    """
    removed: list[str] = []
    root = project_dir.resolve()
    for rel in paths:
        candidate = project_dir / rel
        # Resolve only the parent: a symlink is judged by its own location.
        target = candidate.parent.resolve() / candidate.name
        if root not in target.parents:
            logger.warning("Refusing to remove %s: outside project", rel)
            continue
        try:
            if target.is_symlink() or target.is_file():
                target.unlink()
            elif target.is_dir():
                shutil.rmtree(target)
            else:
                continue
        except OSError as exc:
            msg = f"cannot remove {rel}: {exc}"
            raise StarterError(msg) from exc
        logger.debug("Removed %s", target)
        removed.append(rel)
    return removed


def copy_overrides(project_dir: Path, overrides_dir: Path = OVERRIDES_DIR) -> list[str]:
    """Copy the override tree into *project_dir*, overwriting existing files.

    Returns the copied files relative to the project root.
    """
    if not overrides_dir.is_dir():
        logger.warning("Template directory %s not found, nothing copied", overrides_dir)
        return []

    copied: list[str] = []
    for src in sorted(overrides_dir.rglob("*")):
        if src.is_dir() or src.name == "__pycache__" or src.suffix == ".pyc":
            continue
        rel = src.relative_to(overrides_dir)
        dest = project_dir / rel
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(src, dest)
        except OSError as exc:
            msg = f"cannot copy template file {rel.as_posix()}: {exc}"
            raise StarterError(msg) from exc
        copied.append(rel.as_posix())
    return copied


def merge_package_template(project_dir: Path, app_name: str) -> bool:
    """Merge ``package.json.template`` into ``package.json`` and drop the template.

    Returns False when either file is missing (nothing merged).
    """
    package_path = project_dir / "package.json"
    template_path = project_dir / PACKAGE_TEMPLATE_NAME
    if not package_path.is_file() or not template_path.is_file():
        logger.info("No package.json template to merge in %s", project_dir)
        return False

    package = read_json(package_path)
    template = read_json(template_path)
    write_json(package_path, merge_package_json(package, template, app_name))
    try:
        template_path.unlink()
    except OSError as exc:
        msg = f"cannot remove {PACKAGE_TEMPLATE_NAME}: {exc}"
        raise StarterError(msg) from exc
    return True
