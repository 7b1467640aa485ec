"""Interactive questions asked while customizing the project."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.prompt import Confirm, Prompt

from expo_starter.validators import (
    is_valid_app_scheme,
    is_valid_domain,
    is_valid_package_name,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

PLATFORM_CHOICES: dict[str, tuple[str, ...]] = {
    "1": (),
    "2": ("--platform", "android"),
    "3": ("--platform", "ios"),
}

PLATFORM_LABELS: dict[str, str] = {
    "1": "Android and iOS",
    "2": "Android",
    "3": "iOS",
}


def ask_yes_no(console: Console, question: str, *, default: bool = False) -> bool:
    """Ask a yes/no question."""
    return bool(Confirm.ask(question, default=default, console=console))


def ask_validated(
    console: Console,
    question: str,
    validator: Callable[[str], bool],
    error: str,
) -> str | None:
    """Ask until *validator* accepts the answer.

    An empty answer skips the question and returns None.
    """
    while True:
        answer = Prompt.ask(question, default="", show_default=False, console=console)
        answer = (answer or "").strip()
        if not answer:
            return None
        if validator(answer):
            return answer
        console.print(f"[red]{error}[/red]")


def ask_package_name(console: Console, suggestion: str) -> str | None:
    return ask_validated(
        console,
        f"Enter the package identifier (e.g. {suggestion}, empty to skip)",
        is_valid_package_name,
        "Invalid identifier: use at least two dot-separated lowercase segments, "
        "each starting with a letter.",
    )


def ask_app_scheme(console: Console) -> str | None:
    return ask_validated(
        console,
        'Enter your app scheme (e.g. "myapp", "sunrise")',
        is_valid_app_scheme,
        "Invalid scheme: 3-20 lowercase letters, digits or hyphens, starting with a letter.",
    )


def ask_domain(console: Console) -> str | None:
    return ask_validated(
        console,
        'Enter your domain for universal links (e.g. "myapp.com")',
        is_valid_domain,
        "Invalid domain: expected something like example.com.",
    )


def ask_platforms(console: Console) -> str:
    """Ask which platforms to prebuild; returns a key of :data:`PLATFORM_CHOICES`."""
    console.print("Which platforms to prebuild?")
    for key, label in PLATFORM_LABELS.items():
        suffix = " (default)" if key == "1" else ""
        console.print(f"  {key}. {label}{suffix}")
    return Prompt.ask(
        "Enter choice",
        choices=list(PLATFORM_CHOICES),
        default="1",
        console=console,
    )
