"""Tests for expo_starter.prompts — validated question loops."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import MagicMock, patch

from expo_starter.prompts import (
    PLATFORM_CHOICES,
    ask_app_scheme,
    ask_domain,
    ask_package_name,
    ask_platforms,
    ask_validated,
    ask_yes_no,
)

if TYPE_CHECKING:
    from rich.console import Console


class TestAskValidated:
    def test_reasks_until_valid(self, console: Console) -> None:
        ask_mock = MagicMock(side_effect=["Bad", "ALSO BAD", "good"])
        with patch("rich.prompt.Prompt.ask", ask_mock):
            answer = ask_validated(console, "Q?", str.islower, "lowercase only")
        assert answer == "good"
        assert ask_mock.call_count == 3
        assert console.file.getvalue().count("lowercase only") == 2  # type: ignore[attr-defined]

    def test_empty_answer_skips(self, console: Console) -> None:
        with patch("rich.prompt.Prompt.ask", return_value="   "):
            assert ask_validated(console, "Q?", str.islower, "err") is None

    def test_strips_whitespace(self, console: Console) -> None:
        with patch("rich.prompt.Prompt.ask", return_value="  ok  "):
            assert ask_validated(console, "Q?", str.islower, "err") == "ok"

    def test_hides_empty_default(self, console: Console) -> None:
        ask_mock = MagicMock(return_value="ok")
        with patch("rich.prompt.Prompt.ask", ask_mock):
            ask_validated(console, "Q?", str.islower, "err")
        assert ask_mock.call_args.kwargs["default"] == ""
        assert ask_mock.call_args.kwargs["show_default"] is False


class TestDomainPrompts:
    def test_package_name(self, console: Console) -> None:
        with patch("rich.prompt.Prompt.ask", side_effect=["Com.Bad", "com.acme.demo"]):
            assert ask_package_name(console, "com.example.demo") == "com.acme.demo"

    def test_package_name_empty_skips(self, console: Console) -> None:
        ask_mock = MagicMock(return_value="")
        with patch("rich.prompt.Prompt.ask", ask_mock):
            assert ask_package_name(console, "com.example.demo") is None
        assert "com.example.demo" in ask_mock.call_args.args[0]

    def test_package_name_rejects_underscore(self, console: Console) -> None:
        with patch("rich.prompt.Prompt.ask", side_effect=["io.my_org.app", "io.myorg.app"]):
            assert ask_package_name(console, "com.example.demo") == "io.myorg.app"

    def test_scheme(self, console: Console) -> None:
        with patch("rich.prompt.Prompt.ask", side_effect=["My_App", "demoapp"]):
            assert ask_app_scheme(console) == "demoapp"

    def test_domain(self, console: Console) -> None:
        with patch("rich.prompt.Prompt.ask", side_effect=["https://x.com", "x.com"]):
            assert ask_domain(console) == "x.com"

    def test_platforms(self, console: Console) -> None:
        ask_mock = MagicMock(return_value="2")
        with patch("rich.prompt.Prompt.ask", ask_mock):
            choice = ask_platforms(console)
        assert PLATFORM_CHOICES[choice] == ("--platform", "android")
        assert ask_mock.call_args.kwargs["choices"] == ["1", "2", "3"]
        assert ask_mock.call_args.kwargs["default"] == "1"


def test_ask_yes_no(console: Console) -> None:
    with patch("rich.prompt.Confirm.ask", return_value=True) as confirm:
        assert ask_yes_no(console, "Continue?", default=False) is True
    assert confirm.call_args.kwargs["default"] is False
