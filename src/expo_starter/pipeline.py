"""Project generation pipeline: the ordered steps from scaffold to install.

Each :class:`Step` is either *fatal* (a :class:`StarterError` stops the run)
or not (the error is reported with a manual-recovery hint and the run goes
on).  Steps share state through a mutable :class:`ProjectContext`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from expo_starter.doctor import Severity, run_checks
from expo_starter.errors import CommandError, StarterError
from expo_starter.git_history import build_commit_message, reset_history
from expo_starter.manifests import (
    apply_deep_linking,
    apply_package_name,
    strip_router_config,
    update_json_file,
)
from expo_starter.native import can_install_pods, install_pods, prebuild
from expo_starter.prompts import (
    PLATFORM_CHOICES,
    PLATFORM_LABELS,
    ask_app_scheme,
    ask_domain,
    ask_package_name,
    ask_platforms,
    ask_yes_no,
)
from expo_starter.runner import run_command
from expo_starter.template import copy_overrides, merge_package_template, remove_generated_paths
from expo_starter.validators import suggest_package_name

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path

    from rich.console import Console

    from expo_starter.config import StarterConfig

logger = logging.getLogger(__name__)


@dataclass
class ProjectContext:
    """Inputs and answers collected while generating one project."""

    app_name: str
    parent_dir: Path
    config: StarterConfig
    console: Console
    package_name: str | None = None
    scheme: str | None = None
    domain: str | None = None
    skip_install: bool = False
    skip_git: bool = False

    @property
    def project_dir(self) -> Path:
        return self.parent_dir / self.app_name

    @property
    def app_json_path(self) -> Path:
        return self.project_dir / "app.json"


@dataclass(frozen=True)
class Step:
    """One stage of the pipeline."""

    name: str
    title: str
    action: Callable[[ProjectContext], None]
    fatal: bool = True
    hint: str = ""


@dataclass
class RunResult:
    """Outcome of :func:`run_pipeline`."""

    completed: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    failed: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.failed is None


# ---------------------------------------------------------------------------
# Step actions
# ---------------------------------------------------------------------------


def preflight(ctx: ProjectContext) -> None:
    checks = run_checks(ctx.project_dir, min_node_version=ctx.config.min_node_version)
    errors = [c for c in checks if c.severity == Severity.ERROR]
    for c in errors:
        ctx.console.print(f"  [red]✗[/red] {c.description}")
    if errors:
        msg = f"{len(errors)} preflight check(s) failed"
        raise StarterError(msg)


def scaffold(ctx: ProjectContext) -> None:
    run_command([*ctx.config.scaffold_command, ctx.app_name, "--yes"], ctx.parent_dir)
    if not ctx.project_dir.is_dir():
        msg = f"scaffolder did not create {ctx.project_dir}"
        raise StarterError(msg)


def apply_template(ctx: ProjectContext) -> None:
    removed = remove_generated_paths(ctx.project_dir, ctx.config.remove_paths)
    logger.info("Removed %d generated paths", len(removed))
    copied = copy_overrides(ctx.project_dir)
    logger.info("Copied %d template files", len(copied))


def merge_scripts(ctx: ProjectContext) -> None:
    if merge_package_template(ctx.project_dir, ctx.app_name):
        ctx.console.print(
            "[green]✅ Added npm scripts and expo configuration to package.json[/green]"
        )


def configure_app_json(ctx: ProjectContext) -> None:
    update_json_file(ctx.app_json_path, strip_router_config, ctx.app_name)


def configure_package_name(ctx: ProjectContext) -> None:
    console = ctx.console
    if ctx.package_name is None:
        wanted = ask_yes_no(
            console,
            "📦 Do you want to set a custom package identifier?",
            default=False,
        )
        if not wanted:
            return
        ctx.package_name = ask_package_name(console, suggest_package_name(ctx.app_name))
        if ctx.package_name is None:
            return

    update_json_file(ctx.app_json_path, apply_package_name, ctx.package_name)
    console.print(
        f"[green]✅ Updated bundle identifier and package to: {ctx.package_name}[/green]"
    )


def configure_deep_linking(ctx: ProjectContext) -> None:
    console = ctx.console
    wanted = ask_yes_no(
        console,
        "📱 Do you want to configure a custom app scheme for deep linking?",
        default=False,
    )
    if not wanted:
        return

    ctx.scheme = ask_app_scheme(console)
    if ctx.scheme is None:
        return

    if ask_yes_no(console, "🌐 Do you want to configure universal links?", default=False):
        ctx.domain = ask_domain(console)

    update_json_file(ctx.app_json_path, apply_deep_linking, ctx.scheme, ctx.domain)
    console.print("[green]✅ Deep linking configuration added to app.json[/green]")
    console.print(f"[dim]   📱 App scheme: {ctx.scheme}://[/dim]")
    if ctx.domain:
        console.print(f"[dim]   🌐 Universal links: https://{ctx.domain}[/dim]")


def generate_native(ctx: ProjectContext) -> None:
    console = ctx.console
    wanted = ask_yes_no(
        console,
        "📱 Do you want to generate native Android/iOS directories (expo prebuild)?",
        default=False,
    )
    if not wanted:
        return

    choice = ask_platforms(console)
    console.print(f"[cyan]Generating {PLATFORM_LABELS[choice]} native project...[/cyan]")
    result = prebuild(ctx.project_dir, PLATFORM_CHOICES[choice])
    console.print("[green]✅ Native directories generated successfully![/green]")
    if result.android:
        console.print("[dim]   📱 Android directory created[/dim]")
    if result.ios:
        console.print("[dim]   🍎 iOS directory created[/dim]")

    if not can_install_pods(result):
        return
    if not ask_yes_no(console, "🍎 Install CocoaPods dependencies now?", default=True):
        return
    try:
        install_pods(ctx.project_dir)
    except CommandError as exc:
        logger.info("pod-install failed: %s", exc)
        console.print("[red]❌ CocoaPods installation failed. You can run it manually later:[/red]")
        console.print("[yellow]npx pod-install[/yellow]")
    else:
        console.print("[green]✅ CocoaPods installation completed![/green]")


def init_git(ctx: ProjectContext) -> None:
    if ctx.skip_git:
        ctx.console.print("[dim]Skipping git history (--skip-git).[/dim]")
        return
    message = build_commit_message(
        ctx.config.commit_message,
        app_name=ctx.app_name,
        package_name=ctx.package_name,
        scheme=ctx.scheme,
    )
    reset_history(ctx.project_dir, message)
    ctx.console.print("[green]✅ Created a fresh git repository with an initial commit[/green]")


def install_dependencies(ctx: ProjectContext) -> None:
    if ctx.skip_install:
        ctx.console.print("[dim]Skipping dependency installation (--skip-install).[/dim]")
        return
    for label, packages in ctx.config.dependency_groups.items():
        ctx.console.print(
            f"[green]📦 Installing {label} dependencies: {', '.join(packages)}...[/green]"
        )
        run_command(["npm", "install", *packages], ctx.project_dir)


DEFAULT_STEPS: tuple[Step, ...] = (
    Step("preflight", "🩺 Checking toolchain...", preflight),
    Step("scaffold", "🚀 Initializing Expo app...", scaffold),
    Step("template", "🔧 Setting up custom template files...", apply_template),
    Step("scripts", "📝 Adding npm scripts...", merge_scripts),
    Step("app_json", "🛠  Cleaning up app.json...", configure_app_json),
    Step(
        "package_name",
        "📦 Configuring package identifier...",
        configure_package_name,
        fatal=False,
        hint="Set expo.ios.bundleIdentifier and expo.android.package in app.json.",
    ),
    Step(
        "deep_linking",
        "🔗 Setting up deep linking configuration...",
        configure_deep_linking,
        fatal=False,
        hint="Add expo.scheme and expo.android.intentFilters to app.json.",
    ),
    Step(
        "native",
        "📱 Native directories...",
        generate_native,
        fatal=False,
        hint="You can generate them manually later with: npx expo prebuild",
    ),
    Step(
        "git",
        "🗂  Resetting git history...",
        init_git,
        fatal=False,
        hint='Run: git init && git add -A && git commit -m "Initial commit"',
    ),
    Step("dependencies", "📦 Installing dependencies...", install_dependencies),
)


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------


def run_pipeline(ctx: ProjectContext, steps: Sequence[Step] = DEFAULT_STEPS) -> RunResult:
    """Run *steps* in order, stopping at the first fatal failure."""
    console = ctx.console
    result = RunResult()

    for step in steps:
        console.print(f"\n[cyan]{step.title}[/cyan]")
        try:
            step.action(ctx)
        except StarterError as exc:
            if step.fatal:
                logger.info("Step %s failed: %s", step.name, exc)
                result.failed = step.name
                result.error = str(exc)
                return result
            logger.info("Step %s failed, continuing: %s", step.name, exc)
            console.print(f"[red]❌ {exc}[/red]")
            if step.hint:
                console.print(f"[yellow]{step.hint}[/yellow]")
            result.warnings.append(step.name)
            continue
        result.completed.append(step.name)

    return result


def print_summary(ctx: ProjectContext, result: RunResult) -> None:
    """Print project contents and next steps after a successful run."""
    console = ctx.console
    console.print(f"\n[green]✅ Project '{ctx.app_name}' is ready! 🚀[/green]")
    if result.warnings:
        console.print(
            f"[yellow]Completed with warnings in: {', '.join(result.warnings)}[/yellow]"
        )

    if ctx.project_dir.is_dir():
        console.print("[cyan]Project contents:[/cyan]")
        for item in sorted(p.name for p in ctx.project_dir.iterdir()):
            console.print(f"  - {item}")

    console.print("\n[yellow]🚀 Next steps:[/yellow]")
    console.print(f"[yellow]cd {ctx.app_name}[/yellow]")
    console.print("[yellow]1. To start development server: npm start[/yellow]")
    console.print("[yellow]2. To run on iOS: npm run ios[/yellow]")
    console.print("[yellow]3. To run on Android: npm run android[/yellow]")
    console.print("[yellow]4. To run on Web: npm run web[/yellow]")

    console.print("\n[cyan]🏢 EAS Build Commands:[/cyan]")
    console.print("[dim]• Development build: npm run build:development[/dim]")
    console.print("[dim]• Preview build: npm run build:preview[/dim]")
    console.print("[dim]• Production build: npm run build:production[/dim]")
    console.print("[dim]• Submit to stores: npm run submit:production[/dim]")

    console.print("\n[cyan]📋 Troubleshooting Pod Install Issues:[/cyan]")
    console.print("[dim]• This template pins react-native-reanimated@3.19.0[/dim]")
    console.print("[dim]• If pod install errors persist: cd ios && pod install --repo-update[/dim]")
